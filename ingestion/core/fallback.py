"""
목적: 모델 생성 실패 시 사용할 고정 카탈로그 레코드를 제공한다.
설명: 완전히 채워진 2개 레코드를 호출마다 깊은 복사로 돌려준다.
디자인 패턴: 상수 모듈
참조: ingestion/core/generation.py
"""

from __future__ import annotations

import copy

from ingestion.core.types import CatalogRecord

_FALLBACK_RECORDS: tuple[CatalogRecord, ...] = (
    {
        "item_id": "item_001",
        "item_name": "Modern Leather Sofa",
        "item_description": "A comfortable 3-seater leather sofa perfect for modern living rooms",
        "brand": "ComfortPlus",
        "manufacturer_address": {
            "street": "123 Factory Street",
            "city": "Detroit",
            "state": "Michigan",
            "postal_code": "48201",
            "country": "USA",
        },
        "prices": {"full_price": 1299, "sale_price": 999},
        "categories": ["sofa", "living room", "leather"],
        "user_reviews": [
            {
                "review_date": "2024-01-15",
                "rating": 5,
                "comment": "Excellent quality and very comfortable",
            }
        ],
        "notes": "Available in black, brown, and white colors",
    },
    {
        "item_id": "item_002",
        "item_name": "Oak Dining Table",
        "item_description": "Solid oak dining table that seats 6 people comfortably",
        "brand": "WoodCraft",
        "manufacturer_address": {
            "street": "456 Lumber Ave",
            "city": "Portland",
            "state": "Oregon",
            "postal_code": "97201",
            "country": "USA",
        },
        "prices": {"full_price": 899, "sale_price": 699},
        "categories": ["dining table", "dining room", "wood"],
        "user_reviews": [
            {
                "review_date": "2024-02-10",
                "rating": 4,
                "comment": "Beautiful table, well made",
            }
        ],
        "notes": "Comes with matching chairs available separately",
    },
)


def fallback_records() -> list[CatalogRecord]:
    """고정 대체 레코드의 복사본을 반환한다."""

    return copy.deepcopy(list(_FALLBACK_RECORDS))


__all__ = ["fallback_records"]

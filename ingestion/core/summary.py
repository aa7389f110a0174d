"""
목적: 카탈로그 레코드를 검색용 요약 문장으로 변환한다.
설명: 이미 색인된 데이터와 호환되는 고정 문장 템플릿을 사용하는 순수 함수이다.
디자인 패턴: 순수 함수 모듈
참조: ingestion/core/enrichment.py
"""

from __future__ import annotations

from typing import Any

from ingestion.core.types import CatalogRecord


def build_item_summary(record: CatalogRecord) -> str:
    """레코드 하나를 요약 문장으로 만든다."""

    manufacturer_details = f"Made in {record['manufacturer_address']['country']}"
    categories = ", ".join(str(category) for category in record["categories"])
    user_reviews = " ".join(
        f"Rated {_fmt(review['rating'])} on {review['review_date']}: {review['comment']}"
        for review in record["user_reviews"]
    )
    basic_info = f"{record['item_name']} {record['item_description']} from the brand {record['brand']}"
    prices = record["prices"]
    price = (
        f"At full price it costs: {_fmt(prices['full_price'])} USD, "
        f"On sale it costs: {_fmt(prices['sale_price'])} USD"
    )
    return (
        f"{basic_info}. Manufacturer: {manufacturer_details}. Categories: {categories}. "
        f"Reviews: {user_reviews}. Price: {price}. Notes: {record['notes']}"
    )


def _fmt(value: Any) -> str:
    # 999.0 -> "999"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["build_item_summary"]

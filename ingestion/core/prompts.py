"""
목적: 카탈로그 레코드 생성 프롬프트를 제공한다.
설명: 생성 개수, 필드 목록, JSON 예시, 배열만 반환하라는 지시를 포함한다.
디자인 패턴: 모듈 싱글턴
참조: ingestion/core/generation.py
"""

from __future__ import annotations

import textwrap

from langchain_core.prompts import PromptTemplate

_CATALOG_GENERATION_PROMPT = textwrap.dedent(
    """
You are a helpful assistant that generates furniture store item data. Generate {item_count} furniture store items in JSON format. Each record should include the following fields: item_id, item_name, item_description, brand, manufacturer_address (with street, city, state, postal_code, country), prices (with full_price, sale_price), categories (array), user_reviews (array with review_date, rating, comment), notes.

Return ONLY a valid JSON array with no additional text or markdown formatting. Ensure variety in the data and realistic values. Every item_id must be unique and every rating must be a number between 1 and 5.

Example format:
[
  {{
    "item_id": "item_001",
    "item_name": "Modern Sofa",
    "item_description": "Comfortable 3-seater sofa",
    "brand": "ComfortPlus",
    "manufacturer_address": {{
      "street": "123 Factory St",
      "city": "Detroit",
      "state": "MI",
      "postal_code": "48201",
      "country": "USA"
    }},
    "prices": {{
      "full_price": 899,
      "sale_price": 699
    }},
    "categories": ["sofa", "living room"],
    "user_reviews": [
      {{
        "review_date": "2024-01-15",
        "rating": 5,
        "comment": "Very comfortable"
      }}
    ],
    "notes": "Available in multiple colors"
  }}
]
    """
).strip()

CATALOG_GENERATION_PROMPT = PromptTemplate.from_template(_CATALOG_GENERATION_PROMPT)

__all__ = ["CATALOG_GENERATION_PROMPT"]

"""
목적: 레코드 요약 문장 생성을 검증한다.
설명: 고정 템플릿 출력, 리뷰가 없는 경우, 정수형 실수 가격 표기와 입력 불변성을 확인한다.
디자인 패턴: 순수 함수 테스트
참조: ingestion/core/summary.py
"""

from __future__ import annotations

import copy

import pytest

from ingestion.core.fallback import fallback_records
from ingestion.core.summary import build_item_summary


def test_summary_matches_template_for_fallback_sofa() -> None:
    """대체 레코드 소파의 요약 문장이 템플릿과 정확히 일치하는지 확인한다."""

    sofa = fallback_records()[0]

    assert build_item_summary(sofa) == (
        "Modern Leather Sofa A comfortable 3-seater leather sofa perfect for modern living rooms "
        "from the brand ComfortPlus. Manufacturer: Made in USA. "
        "Categories: sofa, living room, leather. "
        "Reviews: Rated 5 on 2024-01-15: Excellent quality and very comfortable. "
        "Price: At full price it costs: 1299 USD, On sale it costs: 999 USD. "
        "Notes: Available in black, brown, and white colors"
    )


def test_summary_with_no_reviews_keeps_empty_section() -> None:
    """리뷰가 없으면 Reviews 구간이 비어 있는지 확인한다."""

    record = fallback_records()[1]
    record["user_reviews"] = []

    summary = build_item_summary(record)

    assert "Reviews: . Price:" in summary


def test_summary_joins_multiple_reviews_with_space() -> None:
    """여러 리뷰가 공백으로 이어지는지 확인한다."""

    record = fallback_records()[1]
    record["user_reviews"].append(
        {"review_date": "2024-03-02", "rating": 3, "comment": "Scratched on arrival"}
    )

    summary = build_item_summary(record)

    assert (
        "Reviews: Rated 4 on 2024-02-10: Beautiful table, well made "
        "Rated 3 on 2024-03-02: Scratched on arrival. Price:"
    ) in summary


@pytest.mark.parametrize(
    ("full_price", "sale_price", "expected"),
    [
        (999.0, 749.0, "At full price it costs: 999 USD, On sale it costs: 749 USD"),
        (19.99, 14.5, "At full price it costs: 19.99 USD, On sale it costs: 14.5 USD"),
    ],
)
def test_summary_price_formatting(full_price: float, sale_price: float, expected: str) -> None:
    """정수 값 실수는 소수점 없이, 나머지는 그대로 표기하는지 확인한다."""

    record = fallback_records()[0]
    record["prices"] = {"full_price": full_price, "sale_price": sale_price}

    assert expected in build_item_summary(record)


def test_summary_does_not_mutate_record() -> None:
    """요약 생성이 입력 레코드를 바꾸지 않는지 확인한다."""

    record = fallback_records()[0]
    before = copy.deepcopy(record)

    first = build_item_summary(record)
    second = build_item_summary(record)

    assert record == before
    assert first == second

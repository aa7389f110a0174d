"""
목적: 색인 레코드를 MongoDB 저장 문서로 변환하고 배치를 분할한다.
설명: 요약/임베딩/원본 레코드를 조합하고, 생성 순서를 유지한 채 고정 크기 배치로 나눈다.
디자인 패턴: 어댑터 변환 모듈
참조: ingestion/core/pipeline.py
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence, TypeVar

from catalog_seeder.shared.exceptions import app_error
from ingestion.core.types import CatalogRecord, IndexableRecord

T = TypeVar("T")


def build_indexable_records(
    records: Sequence[CatalogRecord],
    summaries: Sequence[str],
    vectors: Sequence[list[float]],
) -> list[IndexableRecord]:
    """레코드/요약/벡터를 같은 순서로 묶는다."""

    if not (len(records) == len(summaries) == len(vectors)):
        raise app_error(
            "레코드, 요약, 벡터 개수가 일치하지 않습니다.",
            "SEED_INDEXABLE_MISMATCH",
            records=len(records),
            summaries=len(summaries),
            vectors=len(vectors),
        )
    return [
        IndexableRecord(summary_text=summary, embedding_vector=list(vector), metadata=record)
        for record, summary, vector in zip(records, summaries, vectors)
    ]


def to_mongo_documents(
    indexables: Sequence[IndexableRecord],
    *,
    text_field: str,
    vector_field: str,
) -> list[dict[str, Any]]:
    """MongoDB insert 문서로 변환한다."""

    return [item.to_document(text_field, vector_field) for item in indexables]


def batched(items: Sequence[T], batch_size: int = 3) -> Iterator[list[T]]:
    """리스트를 배치 단위로 분할한다."""

    safe_batch_size = max(1, int(batch_size))
    for index in range(0, len(items), safe_batch_size):
        yield list(items[index : index + safe_batch_size])


def count_batches(total: int, batch_size: int) -> int:
    """배치 개수를 계산한다."""

    safe_batch_size = max(1, int(batch_size))
    return (max(0, total) + safe_batch_size - 1) // safe_batch_size


__all__ = [
    "batched",
    "build_indexable_records",
    "count_batches",
    "to_mongo_documents",
]

"""
목적: 요약 문장의 임베딩 생성을 담당한다.
설명: 배치 단위로 임베더를 한 번 호출하고 결과 개수와 벡터 차원을 검증한다.
디자인 패턴: 단계 보강 모듈
참조: ingestion/core/pipeline.py
"""

from __future__ import annotations

from typing import Sequence

from langchain_core.embeddings import Embeddings

from catalog_seeder.shared.exceptions import BaseAppException, ExceptionDetail


def embed_summaries(
    summaries: Sequence[str],
    *,
    embedder: Embeddings,
    dimension: int,
) -> list[list[float]]:
    """요약 목록을 한 번의 호출로 임베딩한다."""

    if not summaries:
        return []
    vectors = embedder.embed_documents(list(summaries))
    if len(vectors) != len(summaries):
        detail = ExceptionDetail(
            code="SEED_EMBEDDING_COUNT_MISMATCH",
            cause=f"expected={len(summaries)}, actual={len(vectors)}",
        )
        raise BaseAppException("임베딩 결과 개수가 입력과 다릅니다.", detail)
    for position, vector in enumerate(vectors):
        if len(vector) != dimension:
            detail = ExceptionDetail(
                code="SEED_EMBEDDING_DIMENSION_MISMATCH",
                cause=f"position={position}, expected={dimension}, actual={len(vector)}",
                hint="SEED_EMBEDDING_DIMENSION과 임베딩 모델 출력 차원을 맞추세요.",
            )
            raise BaseAppException("임베딩 벡터 차원이 설정과 다릅니다.", detail)
    return [[float(value) for value in vector] for vector in vectors]


__all__ = ["embed_summaries"]

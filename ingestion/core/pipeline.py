"""
목적: 카탈로그 레코드를 배치 단위로 요약/임베딩/저장한다.
설명: 배치는 생성 순서대로 하나씩 처리하며, 배치 내부 요약만 스레드풀로 병렬 생성한다.
      배치 경계에서만 취소를 확인하고, 실패한 배치 이후는 시도하지 않는다.
디자인 패턴: 파이프라인
참조: ingestion/core/documents.py, ingestion/core/enrichment.py, ingestion/core/summary.py
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from langchain_core.embeddings import Embeddings
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from catalog_seeder.shared.exceptions import BaseAppException, FailureKind, app_error
from catalog_seeder.shared.logging import Logger, create_default_logger
from catalog_seeder.shared.runtime import CancellationToken, ThreadPool, ThreadPoolConfig
from ingestion.core.documents import (
    batched,
    build_indexable_records,
    count_batches,
    to_mongo_documents,
)
from ingestion.core.enrichment import embed_summaries
from ingestion.core.summary import build_item_summary
from ingestion.core.types import CatalogRecord, LoadReport


class EmbeddingBatchPipeline:
    """요약 임베딩 배치 적재기.

    Args:
        collection: insert_many를 지원하는 MongoDB 컬렉션.
        embedder: 재사용할 임베더.
        batch_size: 배치 크기.
        batch_delay_seconds: 배치 사이 대기 시간. 0이면 대기하지 않는다.
        embedding_dimension: 기대 벡터 차원.
        text_field: 요약 문장 필드명.
        vector_field: 임베딩 필드명.
        summary_workers: 배치 내부 요약 병렬도.
        logger: 로거.
        cancellation: 취소 토큰.
    """

    def __init__(
        self,
        collection: Any,
        embedder: Embeddings,
        *,
        batch_size: int = 3,
        batch_delay_seconds: float = 1.0,
        embedding_dimension: int = 768,
        text_field: str = "embedding_text",
        vector_field: str = "embedding",
        summary_workers: int = 3,
        logger: Optional[Logger] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._collection = collection
        self._embedder = embedder
        self._batch_size = max(1, int(batch_size))
        self._batch_delay_seconds = max(0.0, float(batch_delay_seconds))
        self._embedding_dimension = embedding_dimension
        self._text_field = text_field
        self._vector_field = vector_field
        self._pool_config = ThreadPoolConfig(
            max_workers=max(1, int(summary_workers)),
            thread_name_prefix="seed-summary",
        )
        self._logger = logger or create_default_logger("EmbeddingBatchPipeline")
        self._cancellation = cancellation or CancellationToken()

    def load(self, records: Sequence[CatalogRecord]) -> LoadReport:
        """레코드를 배치 단위로 적재한다.

        Raises:
            BaseAppException: 임베딩(SEED_BATCH_EMBEDDING_FAILED) 또는
                저장(SEED_BATCH_WRITE_FAILED) 실패. 분류는 load_fatal이다.
        """

        total = count_batches(len(records), self._batch_size)
        report = LoadReport(total_batches=total)
        if total == 0:
            self._logger.info("적재할 레코드가 없습니다.")
            return report

        self._logger.info(
            f"배치 적재 시작: 레코드 {len(records)}개, 배치 {total}개",
            metadata={"batch_size": self._batch_size, "total_batches": total},
        )
        with ThreadPool(self._pool_config, logger=self._logger) as pool:
            for batch_index, batch in enumerate(batched(records, self._batch_size), start=1):
                if self._cancellation.is_cancelled:
                    report.cancelled = True
                    self._logger.warning(
                        f"취소 요청으로 배치 {batch_index}/{total} 이전에 중단합니다.",
                        metadata={"reason": self._cancellation.reason},
                    )
                    break
                batch_logger = self._logger.with_phase("load", batch_index)
                report.inserted_count += self._process_batch(
                    pool, batch, batch_index, total, report, batch_logger
                )
                report.completed_batches += 1
                batch_logger.info(
                    f"batch {batch_index}/{total} 저장 완료",
                    metadata={"batch_size": len(batch), "inserted_total": report.inserted_count},
                )
                if batch_index < total and self._batch_delay_seconds > 0:
                    self._cancellation.wait(self._batch_delay_seconds)

        self._logger.info(
            "배치 적재 종료",
            metadata={
                "completed_batches": report.completed_batches,
                "total_batches": total,
                "inserted_count": report.inserted_count,
                "cancelled": report.cancelled,
            },
        )
        return report

    def _process_batch(
        self,
        pool: ThreadPool,
        batch: list[CatalogRecord],
        batch_index: int,
        total: int,
        report: LoadReport,
        logger: Logger,
    ) -> int:
        logger.info(f"batch {batch_index}/{total} 처리 시작", metadata={"batch_size": len(batch)})
        try:
            summaries = pool.map_ordered(build_item_summary, batch)
        except Exception as error:  # noqa: BLE001 - 요약 실패를 배치 오류로 변환
            raise self._batch_error(
                "요약 생성에 실패했습니다.", "SEED_BATCH_SUMMARY_FAILED", error, batch_index, report
            ) from error

        try:
            vectors = embed_summaries(
                summaries,
                embedder=self._embedder,
                dimension=self._embedding_dimension,
            )
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            raise self._batch_error(
                "배치 임베딩에 실패했습니다.", "SEED_BATCH_EMBEDDING_FAILED", error, batch_index, report
            ) from error

        documents = to_mongo_documents(
            build_indexable_records(batch, summaries, vectors),
            text_field=self._text_field,
            vector_field=self._vector_field,
        )
        try:
            result = self._collection.insert_many(documents, ordered=True)
        except (PyMongoError, BSONError, OverflowError) as error:
            raise self._batch_error(
                "배치 저장에 실패했습니다.", "SEED_BATCH_WRITE_FAILED", error, batch_index, report
            ) from error
        return len(result.inserted_ids)

    def _batch_error(
        self,
        message: str,
        code: str,
        error: Exception,
        batch_index: int,
        report: LoadReport,
    ) -> BaseAppException:
        return app_error(
            message,
            code,
            kind=FailureKind.LOAD_FATAL,
            hint="부분 저장이 남을 수 있으므로 전체 재시딩으로 복구하세요.",
            original=error,
            batch_index=batch_index,
            inserted_count=report.inserted_count,
        )


__all__ = ["EmbeddingBatchPipeline"]

"""
목적: 카탈로그 시딩 전체 흐름을 상태 기계로 실행한다.
설명: DISCONNECTED -> CONNECTED -> PROVISIONED -> CLEARED -> LOADED -> DISCONNECTED 순서로 진행하며,
      모든 오류를 실패 분류와 함께 리포트에 반영하고 연결은 항상 닫는다.
디자인 패턴: 상태 기계 + 스크립트 오케스트레이션
참조: ingestion/core/provisioner.py, ingestion/core/generation.py, ingestion/core/pipeline.py
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from langchain_core.embeddings import Embeddings
from pymongo.errors import PyMongoError

from catalog_seeder.integrations.db import (
    IndexReconcileMode,
    MongoConnectionManager,
    MongoSchemaManager,
    VectorIndexDescriptor,
)
from catalog_seeder.shared.config import PipelineSettings
from catalog_seeder.shared.exceptions import BaseAppException, FailureKind
from catalog_seeder.shared.logging import LogContext, Logger, create_default_logger
from catalog_seeder.shared.runtime import CancellationToken
from ingestion.core.documents import count_batches
from ingestion.core.generation import RecordGenerator
from ingestion.core.pipeline import EmbeddingBatchPipeline
from ingestion.core.provisioner import IndexProvisioner
from ingestion.core.types import SeedOutcome, SeedRunReport, SeedState


class SeedingOrchestrator:
    """카탈로그 시딩 오케스트레이터.

    Args:
        connection: MongoDB 연결 관리자.
        generator: 레코드 생성기.
        embedder: 배치 전체에서 재사용할 임베더.
        collection_name: 대상 컬렉션 이름.
        pipeline_settings: 배치/인덱스 설정.
        logger: 로거.
        cancellation: 취소 토큰.
        schema_manager: MongoDB 스키마 관리자.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        generator: RecordGenerator,
        embedder: Embeddings,
        collection_name: str,
        pipeline_settings: Optional[PipelineSettings] = None,
        logger: Optional[Logger] = None,
        cancellation: Optional[CancellationToken] = None,
        schema_manager: Optional[MongoSchemaManager] = None,
    ) -> None:
        self._connection = connection
        self._generator = generator
        self._embedder = embedder
        self._collection_name = collection_name
        self._settings = pipeline_settings or PipelineSettings()
        self._logger = logger or create_default_logger("SeedingOrchestrator")
        self._cancellation = cancellation or CancellationToken()
        self._schema_manager = schema_manager or MongoSchemaManager()
        self._state = SeedState.DISCONNECTED

    @property
    def state(self) -> SeedState:
        return self._state

    def descriptor(self) -> VectorIndexDescriptor:
        """설정으로부터 벡터 인덱스 기술자를 만든다."""

        return VectorIndexDescriptor(
            name=self._settings.vector_index_name,
            path=self._settings.vector_field,
            dimensions=self._settings.embedding_dimension,
            similarity=self._settings.similarity,
        )

    def run(self) -> SeedRunReport:
        """시딩을 한 번 실행한다. 예외를 던지지 않고 리포트로 결과를 돌려준다."""

        report = SeedRunReport(run_id=uuid4().hex[:12])
        logger = self._logger.with_context(LogContext(run_id=report.run_id))
        self._state = SeedState.DISCONNECTED
        try:
            self._execute(report, logger)
        except BaseAppException as error:
            self._fail(report, logger, error.kind or self._default_kind(), error.code, error)
        except Exception as error:  # noqa: BLE001 - 최상위 실패 분류
            self._fail(report, logger, self._default_kind(), None, error)
        finally:
            self._disconnect(report, logger)
        logger.with_phase("report").info("시딩 실행 결과", metadata=report.to_dict())
        return report

    def _execute(self, report: SeedRunReport, logger: Logger) -> None:
        connect_logger = logger.with_phase("connect")
        connect_logger.info("MongoDB 연결 시도")
        self._connection.connect()
        connect_logger.info("MongoDB 연결 확인(ping) 성공")
        self._transition(report, logger, SeedState.CONNECTED)

        database = self._connection.ensure_database()
        provisioner = IndexProvisioner(
            database,
            self._collection_name,
            schema_manager=self._schema_manager,
            logger=logger.with_phase("provision"),
        )
        provisioner.ensure_collection()
        index_result = provisioner.ensure_vector_index(
            self.descriptor(),
            IndexReconcileMode(self._settings.index_mode),
        )
        report.index_status = index_result.status
        if index_result.degraded:
            report.add_degradation(FailureKind.INDEX_DEGRADED)
        self._transition(report, logger, SeedState.PROVISIONED)

        if self._cancelled(report, logger, "clear"):
            return
        report.deleted_count = provisioner.clear_collection()
        self._transition(report, logger, SeedState.CLEARED)

        generation = self._generator.generate()
        report.record_source = generation.source
        report.generated_count = len(generation.records)
        if generation.degraded:
            report.add_degradation(FailureKind.GENERATION_DEGRADED)
        logger.with_phase("generate").info(
            f"카탈로그 레코드 {len(generation.records)}건 생성 완료",
            metadata={"source": generation.source.value},
        )

        if self._cancelled(report, logger, "load"):
            return
        pipeline = EmbeddingBatchPipeline(
            database[self._collection_name],
            self._embedder,
            batch_size=self._settings.batch_size,
            batch_delay_seconds=self._settings.batch_delay_seconds,
            embedding_dimension=self._settings.embedding_dimension,
            text_field=self._settings.text_field,
            vector_field=self._settings.vector_field,
            summary_workers=self._settings.summary_workers,
            logger=logger.with_phase("load"),
            cancellation=self._cancellation,
        )
        report.total_batches = count_batches(len(generation.records), self._settings.batch_size)
        try:
            load_report = pipeline.load(generation.records)
        except BaseAppException as error:
            report.inserted_count = int(error.detail.metadata.get("inserted_count", 0))
            report.completed_batches = int(error.detail.metadata.get("batch_index", 1)) - 1
            raise
        report.inserted_count = load_report.inserted_count
        report.completed_batches = load_report.completed_batches
        report.total_batches = load_report.total_batches
        if load_report.cancelled:
            report.outcome = SeedOutcome.CANCELLED
            return
        self._transition(report, logger, SeedState.LOADED)
        report.outcome = SeedOutcome.SUCCEEDED

    def _transition(self, report: SeedRunReport, logger: Logger, state: SeedState) -> None:
        logger.info(f"상태 전이: {self._state.value} -> {state.value}")
        self._state = state
        report.states.append(state)

    def _cancelled(self, report: SeedRunReport, logger: Logger, before: str) -> bool:
        if not self._cancellation.is_cancelled:
            return False
        report.outcome = SeedOutcome.CANCELLED
        logger.warning(
            f"취소 요청으로 {before} 단계 이전에 중단합니다.",
            metadata={"reason": self._cancellation.reason},
        )
        return True

    def _default_kind(self) -> FailureKind:
        if self._state in {SeedState.DISCONNECTED, SeedState.CONNECTED}:
            return FailureKind.FATAL_STARTUP
        return FailureKind.LOAD_FATAL

    def _fail(
        self,
        report: SeedRunReport,
        logger: Logger,
        kind: FailureKind,
        code: Optional[str],
        error: Exception,
    ) -> None:
        report.outcome = SeedOutcome.FAILED
        report.failure_kind = kind
        report.failure_code = code
        metadata: dict[str, object] = {
            "failure_kind": kind.value,
            "state": self._state.value,
            "error_type": type(error).__name__,
        }
        if isinstance(error, BaseAppException):
            metadata["detail"] = error.detail.model_dump(mode="json")
        logger.error(f"시딩 실패: {error}", metadata=metadata)

    def _disconnect(self, report: SeedRunReport, logger: Logger) -> None:
        try:
            self._connection.close()
        except PyMongoError as error:
            logger.with_phase("close").warning(f"MongoDB 연결 종료 중 오류: {error}")
        if self._state != SeedState.DISCONNECTED:
            self._transition(report, logger.with_phase("close"), SeedState.DISCONNECTED)


__all__ = ["SeedingOrchestrator"]

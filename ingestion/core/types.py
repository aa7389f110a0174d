"""
목적: 카탈로그 시딩 공통 타입과 상수를 정의한다.
설명: 레코드 검증 모델, 파싱 결과, 적재/인덱스/실행 리포트 모델을 단일 책임으로 관리한다.
디자인 패턴: 데이터 모델 모듈
참조: ingestion/core/generation.py, ingestion/core/pipeline.py, ingestion/core/orchestrator.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, StrictFloat, StrictInt, field_validator

from catalog_seeder.shared.exceptions import FailureKind

DEFAULT_DATABASE = "inventory_database"
DEFAULT_COLLECTION = "items"

# MongoDB에 그대로 저장되는 원본 레코드(snake_case JSON 객체)
CatalogRecord = dict[str, Any]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _within_int64(value: Any) -> Any:
    # BSON 정수는 8바이트까지만 저장된다.
    if isinstance(value, int) and not isinstance(value, bool) and not INT64_MIN <= value <= INT64_MAX:
        raise ValueError("정수는 64비트 범위를 벗어날 수 없습니다.")
    return value


Number = Annotated[Union[StrictInt, StrictFloat], BeforeValidator(_within_int64)]


class _RecordPart(BaseModel):
    model_config = ConfigDict(extra="allow")


class ManufacturerAddress(_RecordPart):
    street: str
    city: str
    state: str
    postal_code: str
    country: str


class Prices(_RecordPart):
    full_price: Number
    sale_price: Number


class UserReview(_RecordPart):
    review_date: str
    rating: Number
    comment: str

    @field_validator("rating")
    @classmethod
    def _rating_in_range(cls, value: float) -> float:
        if not 1 <= value <= 5:
            raise ValueError("rating은 1 이상 5 이하여야 합니다.")
        return value


class CatalogRecordModel(_RecordPart):
    """카탈로그 레코드 검증 모델이다.

    검증 전용이며 저장에는 원본 dict를 그대로 사용한다.
    """

    item_id: str
    item_name: str
    item_description: str
    brand: str
    manufacturer_address: ManufacturerAddress
    prices: Prices
    categories: List[str]
    user_reviews: List[UserReview]
    notes: str


@dataclass(frozen=True)
class ParseValid:
    """검증을 통과한 파싱 결과."""

    records: list[CatalogRecord]


@dataclass(frozen=True)
class ParseInvalid:
    """파싱 실패 결과와 사유."""

    reason: str


ParseResult = Union[ParseValid, ParseInvalid]


class RecordSource(str, Enum):
    """생성된 레코드의 출처."""

    MODEL = "model"
    FALLBACK = "fallback"


@dataclass
class GenerationResult:
    """레코드 생성 결과."""

    records: list[CatalogRecord]
    source: RecordSource
    reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.source == RecordSource.FALLBACK


@dataclass(frozen=True)
class IndexableRecord:
    """요약/임베딩/원본 레코드를 묶은 저장 단위."""

    summary_text: str
    embedding_vector: list[float]
    metadata: CatalogRecord

    def to_document(self, text_field: str, vector_field: str) -> dict[str, Any]:
        """MongoDB 저장 문서로 변환한다.

        원본 필드는 최상위에 펼치되 요약/벡터 필드명과 겹치는 키는 버린다.
        """

        document: dict[str, Any] = {
            text_field: self.summary_text,
            vector_field: list(self.embedding_vector),
        }
        document.update(
            (key, value)
            for key, value in self.metadata.items()
            if key not in (text_field, vector_field)
        )
        return document


@dataclass
class LoadReport:
    """배치 적재 결과."""

    total_batches: int = 0
    completed_batches: int = 0
    inserted_count: int = 0
    cancelled: bool = False


class IndexProvisionStatus(str, Enum):
    """벡터 인덱스 보장 결과 상태."""

    CREATED = "created"
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    RECREATED = "recreated"
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"


@dataclass
class IndexProvisionResult:
    """벡터 인덱스 보장 결과."""

    status: IndexProvisionStatus
    index_name: str
    dropped: list[str] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.status == IndexProvisionStatus.FAILED


class SeedState(str, Enum):
    """시딩 오케스트레이터 상태."""

    DISCONNECTED = "DISCONNECTED"
    CONNECTED = "CONNECTED"
    PROVISIONED = "PROVISIONED"
    CLEARED = "CLEARED"
    LOADED = "LOADED"


class SeedOutcome(str, Enum):
    """시딩 실행 최종 결과."""

    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"


EXIT_OK = 0
EXIT_FATAL_STARTUP = 2
EXIT_LOAD_FATAL = 3
EXIT_INDEX_DEGRADED = 4
EXIT_GENERATION_DEGRADED = 5
EXIT_CANCELLED = 130


@dataclass
class SeedRunReport:
    """시딩 실행 리포트."""

    run_id: str
    outcome: SeedOutcome = SeedOutcome.SUCCEEDED
    failure_kind: Optional[FailureKind] = None
    failure_code: Optional[str] = None
    degradations: list[FailureKind] = field(default_factory=list)
    record_source: Optional[RecordSource] = None
    generated_count: int = 0
    deleted_count: int = 0
    inserted_count: int = 0
    completed_batches: int = 0
    total_batches: int = 0
    index_status: IndexProvisionStatus = IndexProvisionStatus.NOT_ATTEMPTED
    states: list[SeedState] = field(default_factory=lambda: [SeedState.DISCONNECTED])

    def add_degradation(self, kind: FailureKind) -> None:
        if kind not in self.degradations:
            self.degradations.append(kind)

    @property
    def exit_code(self) -> int:
        """실행 결과를 프로세스 종료 코드로 변환한다."""

        if self.outcome == SeedOutcome.CANCELLED:
            return EXIT_CANCELLED
        if self.outcome == SeedOutcome.FAILED:
            if self.failure_kind == FailureKind.LOAD_FATAL:
                return EXIT_LOAD_FATAL
            return EXIT_FATAL_STARTUP
        if FailureKind.INDEX_DEGRADED in self.degradations:
            return EXIT_INDEX_DEGRADED
        if FailureKind.GENERATION_DEGRADED in self.degradations:
            return EXIT_GENERATION_DEGRADED
        return EXIT_OK

    def to_dict(self) -> dict[str, Any]:
        """로그 출력용 사전으로 변환한다."""

        return {
            "run_id": self.run_id,
            "outcome": self.outcome.value,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "failure_code": self.failure_code,
            "degradations": [kind.value for kind in self.degradations],
            "record_source": self.record_source.value if self.record_source else None,
            "generated_count": self.generated_count,
            "deleted_count": self.deleted_count,
            "inserted_count": self.inserted_count,
            "completed_batches": self.completed_batches,
            "total_batches": self.total_batches,
            "index_status": self.index_status.value,
            "states": [state.value for state in self.states],
            "exit_code": self.exit_code,
        }


__all__ = [
    "CatalogRecord",
    "CatalogRecordModel",
    "DEFAULT_COLLECTION",
    "DEFAULT_DATABASE",
    "EXIT_CANCELLED",
    "EXIT_FATAL_STARTUP",
    "EXIT_GENERATION_DEGRADED",
    "EXIT_INDEX_DEGRADED",
    "EXIT_LOAD_FATAL",
    "EXIT_OK",
    "GenerationResult",
    "IndexProvisionResult",
    "IndexProvisionStatus",
    "IndexableRecord",
    "LoadReport",
    "ParseInvalid",
    "ParseResult",
    "ParseValid",
    "RecordSource",
    "SeedOutcome",
    "SeedRunReport",
    "SeedState",
]

"""
목적: 시딩 로그 레코드와 실행 컨텍스트 모델을 정의한다.
설명: 레벨 비교, 실행/단계/배치 컨텍스트 병합, JSON 라인 직렬화를 모델에 둔다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/catalog_seeder/shared/logging/logger.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self.value)

    def at_least(self, threshold: "LogLevel") -> bool:
        """threshold 이상 레벨인지 반환한다."""

        return self.rank >= threshold.rank

    @classmethod
    def parse(cls, raw: Optional[str], default: "LogLevel") -> "LogLevel":
        """문자열을 레벨로 변환한다. 알 수 없는 값이면 default를 반환한다."""

        if not raw:
            return default
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return default


class LogContext(BaseModel):
    """시딩 실행 로그 컨텍스트.

    Args:
        run_id: 시딩 실행 식별자.
        phase: 실행 단계(connect/provision/clear/generate/load/close/report).
        batch_index: 적재 배치 번호(1부터 시작).
        tags: 자유형 태그.
    """

    run_id: Optional[str] = None
    phase: Optional[str] = None
    batch_index: Optional[int] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def merged_with(self, override: Optional["LogContext"]) -> "LogContext":
        """override 값이 있는 필드만 덮어쓴 새 컨텍스트를 반환한다."""

        if override is None:
            return self
        return LogContext(
            run_id=override.run_id or self.run_id,
            phase=override.phase or self.phase,
            batch_index=override.batch_index if override.batch_index is not None else self.batch_index,
            tags={**self.tags, **override.tags},
        )


class LogRecord(BaseModel):
    """로그 레코드.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각(UTC).
        logger_name: 로거 이름.
        context: 실행 컨텍스트.
        metadata: 추가 메타데이터(failure_kind, batch 통계 등).
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """콘솔 JSON 라인 출력용 사전으로 변환한다."""

        payload: Dict[str, Any] = {
            "timestamp": self.timestamp.astimezone(timezone.utc).isoformat(),
            "level": self.level.value,
            "logger": self.logger_name,
            "message": self.message,
        }
        if self.context is not None:
            context = self.context.model_dump(exclude_none=True)
            if not context.get("tags"):
                context.pop("tags", None)
            if context:
                payload["context"] = context
        if self.metadata:
            payload["metadata"] = self.metadata
        return payload

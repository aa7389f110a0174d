"""
목적: 시딩 작업용 로거 인터페이스와 기본 구현체를 제공한다.
설명: 모든 레코드를 인메모리 저장소에 남기고, 필요하면 LOG_LEVEL 이상만 JSON 라인으로 stdout에 출력한다.
      실행(run)/단계(phase)/배치(batch) 컨텍스트는 파생 로거로 누적한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/catalog_seeder/shared/logging/models.py
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog_seeder.shared.logging.models import LogContext, LogLevel, LogRecord

_TRUTHY = {"1", "true", "yes", "on"}


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 기록 순서대로 반환한다."""

    def find(
        self,
        level: Optional[LogLevel] = None,
        phase: Optional[str] = None,
    ) -> List[LogRecord]:
        """레벨/단계가 일치하는 로그만 반환한다."""

        return [
            record
            for record in self.list()
            if (level is None or record.level == level)
            and (phase is None or (record.context is not None and record.context.phase == phase))
        ]


class InMemoryLogRepository(LogRepository):
    """인메모리 로그 저장소. 배치 요약 스레드에서도 기록되므로 잠금으로 보호한다."""

    def __init__(self) -> None:
        self._records: List[LogRecord] = []
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 파생 로거를 반환한다."""

    def with_phase(self, phase: str, batch_index: Optional[int] = None) -> "Logger":
        """실행 단계(및 배치 번호)가 합쳐진 파생 로거를 반환한다."""

        return self.with_context(LogContext(phase=phase, batch_index=batch_index))

    def debug(self, message: str, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.DEBUG, message, metadata=metadata)

    def info(self, message: str, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.INFO, message, metadata=metadata)

    def warning(self, message: str, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.WARNING, message, metadata=metadata)

    def error(self, message: str, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.ERROR, message, metadata=metadata)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체.

    Args:
        name: 로거 이름.
        repository: 로그 저장소. 생략하면 새 인메모리 저장소를 만든다.
        base_context: 모든 레코드에 병합할 기본 컨텍스트.
        emit_stdout: JSON 라인 콘솔 출력 여부. None이면 `LOG_STDOUT` 환경 변수를 따른다.
        stdout_level: 콘솔 출력 최소 레벨. None이면 `LOG_LEVEL` 환경 변수(기본 INFO)를 따른다.
    """

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
        stdout_level: Optional[LogLevel] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        self._emit_stdout = _env_flag("LOG_STDOUT") if emit_stdout is None else emit_stdout
        self._stdout_level = stdout_level or LogLevel.parse(os.getenv("LOG_LEVEL"), LogLevel.INFO)

    @property
    def name(self) -> str:
        return self._name

    @property
    def repository(self) -> LogRepository:
        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        record = LogRecord(
            level=level,
            message=message,
            logger_name=self._name,
            context=self._resolve_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout and level.at_least(self._stdout_level):
            print(json.dumps(record.to_payload(), ensure_ascii=False, default=str), flush=True)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._resolve_context(context),
            emit_stdout=self._emit_stdout,
            stdout_level=self._stdout_level,
        )

    def _resolve_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        return self._base_context.merged_with(context)


def _env_flag(name: str) -> bool:
    raw = os.getenv(name)
    return raw is not None and raw.strip().lower() in _TRUTHY


def create_default_logger(name: str, emit_stdout: Optional[bool] = None) -> InMemoryLogger:
    """기본 인메모리 로거를 생성한다."""

    return InMemoryLogger(name=name, emit_stdout=emit_stdout)

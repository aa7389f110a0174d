"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 하위 공통 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/shared/exceptions, src/catalog_seeder/shared/logging, src/catalog_seeder/shared/runtime
"""

from __future__ import annotations

from catalog_seeder.shared.exceptions import (
    BaseAppException,
    ExceptionDetail,
    FailureKind,
    app_error,
)
from catalog_seeder.shared.logging import (
    InMemoryLogger,
    InMemoryLogRepository,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    create_default_logger,
)
from catalog_seeder.shared.runtime import CancellationToken, ThreadPool, ThreadPoolConfig

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "FailureKind",
    "app_error",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogger",
    "InMemoryLogRepository",
    "create_default_logger",
    "CancellationToken",
    "ThreadPoolConfig",
    "ThreadPool",
]

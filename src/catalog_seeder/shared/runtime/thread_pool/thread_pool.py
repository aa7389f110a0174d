"""
목적: 배치 내부 병렬 작업용 스레드풀을 제공한다.
설명: 한 배치의 요약 생성처럼 서로 독립적인 작업을 병렬로 돌리고 입력 순서대로 결과를 모은다.
      적재 중 한 번 열어 모든 배치에서 재사용하고 with 블록을 벗어나면 닫는다.
디자인 패턴: 파사드
참조: src/catalog_seeder/shared/runtime/thread_pool/model.py, ingestion/core/pipeline.py
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

from catalog_seeder.shared.logging import Logger, create_default_logger
from catalog_seeder.shared.runtime.thread_pool.model import ThreadPoolConfig

T = TypeVar("T")
R = TypeVar("R")


class ThreadPool:
    """ThreadPoolExecutor 수명 관리자.

    Args:
        config: 스레드 수/이름 접두사 설정.
        logger: 로거.
    """

    def __init__(
        self,
        config: Optional[ThreadPoolConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or ThreadPoolConfig()
        self._logger = logger or create_default_logger("ThreadPool")
        self._executor: Optional[ThreadPoolExecutor] = None
        self._guard = threading.Lock()

    @property
    def max_workers(self) -> int:
        return self._config.max_workers

    @property
    def is_open(self) -> bool:
        return self._executor is not None

    def __enter__(self) -> "ThreadPool":
        self._open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    def submit(self, fn: Callable[..., T], *args, **kwargs) -> Future[T]:
        """작업 하나를 제출한다. 닫힌 상태면 먼저 연다."""

        return self._open().submit(fn, *args, **kwargs)

    def map_ordered(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """항목을 병렬 처리하고 입력 순서대로 결과를 반환한다.

        입력 순서상 가장 앞선 실패의 예외를 그대로 전파한다.
        """

        return list(self._open().map(fn, items))

    def shutdown(self, wait: bool = True) -> None:
        """실행기를 닫는다. 이미 닫혔으면 아무것도 하지 않는다."""

        with self._guard:
            executor, self._executor = self._executor, None
        if executor is None:
            return
        executor.shutdown(wait=wait)
        self._logger.debug(
            "스레드풀 종료",
            metadata={"thread_name_prefix": self._config.thread_name_prefix},
        )

    def _open(self) -> ThreadPoolExecutor:
        with self._guard:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix=self._config.thread_name_prefix,
                )
                self._logger.debug(
                    f"스레드풀 시작: worker {self._config.max_workers}개",
                    metadata={"thread_name_prefix": self._config.thread_name_prefix},
                )
            return self._executor

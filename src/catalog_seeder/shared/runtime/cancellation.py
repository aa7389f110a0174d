"""
목적: 협력적 취소 토큰을 제공한다.
설명: 신호 처리기와 배치 루프가 공유하는 threading.Event 기반 토큰으로, 대기 중에도 즉시 깨어난다.
디자인 패턴: 옵저버(이벤트)
참조: ingestion/seed_catalog.py, ingestion/core/pipeline.py
"""

from __future__ import annotations

import threading
from typing import Optional


class CancellationToken:
    """실행 취소 요청을 전달하는 토큰이다."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled") -> None:
        """취소를 요청한다. 최초 사유만 보존한다."""

        if not self._event.is_set():
            self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def wait(self, timeout: float) -> bool:
        """최대 timeout 초 동안 대기한다.

        Returns:
            bool: 대기 중 취소되었으면 True.
        """

        if timeout <= 0:
            return self._event.is_set()
        return self._event.wait(timeout)

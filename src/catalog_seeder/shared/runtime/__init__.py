"""
목적: 런타임 모듈 공개 API를 제공한다.
설명: 스레드풀과 취소 토큰 구성 요소를 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/shared/runtime/thread_pool, src/catalog_seeder/shared/runtime/cancellation.py
"""

from .cancellation import CancellationToken
from .thread_pool import ThreadPool, ThreadPoolConfig

__all__ = [
    "CancellationToken",
    "ThreadPoolConfig",
    "ThreadPool",
]

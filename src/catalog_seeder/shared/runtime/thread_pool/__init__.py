"""
목적: 스레드풀 모듈 공개 API를 제공한다.
설명: 스레드풀 설정 모델과 실행기를 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/shared/runtime/thread_pool/model.py, src/catalog_seeder/shared/runtime/thread_pool/thread_pool.py
"""

from catalog_seeder.shared.runtime.thread_pool.model import ThreadPoolConfig
from catalog_seeder.shared.runtime.thread_pool.thread_pool import ThreadPool

__all__ = ["ThreadPoolConfig", "ThreadPool"]

"""
목적: 스레드풀 모델을 정의한다.
설명: 요약 생성 등 배치 내부 병렬 작업에 쓰는 스레드풀 설정을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/catalog_seeder/shared/runtime/thread_pool/thread_pool.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ThreadPoolConfig(BaseModel):
    """스레드풀 설정 모델이다.

    Args:
        max_workers: 최대 스레드 수.
        thread_name_prefix: 스레드 이름 접두사.
    """

    max_workers: int = Field(default=3, ge=1)
    thread_name_prefix: str = Field(default="seed-worker")

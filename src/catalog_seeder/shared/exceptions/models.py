"""
목적: 공통 예외 모델과 실패 분류를 정의한다.
설명: 에러 코드/원인/힌트/메타데이터와 시딩 실패 종류(FailureKind)를 Pydantic 모델로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/catalog_seeder/shared/exceptions/base.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """시딩 실행 중 발생하는 실패 종류.

    fatal_startup/load_fatal 만 실행을 중단시키고, 나머지는 발생 지점에서 흡수된다.
    """

    FATAL_STARTUP = "fatal_startup"
    GENERATION_DEGRADED = "generation_degraded"
    INDEX_DEGRADED = "index_degraded"
    LOAD_FATAL = "load_fatal"

    @property
    def is_fatal(self) -> bool:
        """실행 중단 여부를 반환한다."""

        return self in {FailureKind.FATAL_STARTUP, FailureKind.LOAD_FATAL}


class ExceptionDetail(BaseModel):
    """예외 상세 정보를 담는 모델이다.

    Args:
        code: 시스템 전반에서 일관되게 사용하는 에러 코드.
        cause: 에러의 직접 원인 설명.
        hint: 해결을 위한 힌트.
        metadata: 추가적인 구조화 메타데이터.
        kind: 시딩 실패 분류. 분류가 없는 일반 오류는 None.
    """

    code: str = Field(..., description="에러 코드")
    cause: Optional[str] = Field(default=None, description="에러 원인")
    hint: Optional[str] = Field(default=None, description="해결 힌트")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="추가 메타데이터")
    kind: Optional[FailureKind] = Field(default=None, description="실패 분류")

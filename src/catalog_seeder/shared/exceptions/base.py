"""
목적: 공통 예외 베이스 클래스를 제공한다.
설명: 메시지와 상세 모델, 원본 예외를 함께 보관하고 실패 분류를 노출한다.
디자인 패턴: 도메인 예외 객체
참조: src/catalog_seeder/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Optional

from catalog_seeder.shared.exceptions.models import ExceptionDetail, FailureKind


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 운영자에게 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        return self._detail

    @property
    def code(self) -> str:
        """에러 코드를 반환한다."""

        return self._detail.code

    @property
    def kind(self) -> Optional[FailureKind]:
        """실패 분류를 반환한다."""

        return self._detail.kind

    @property
    def original(self) -> Optional[Exception]:
        return self._original

    def __str__(self) -> str:
        return f"[{self._detail.code}] {self._message}"

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "message": self._message,
            "detail": self._detail.model_dump(mode="json"),
            "original": repr(self._original) if self._original else None,
        }


def app_error(
    message: str,
    code: str,
    *,
    kind: Optional[FailureKind] = None,
    cause: Optional[str] = None,
    hint: Optional[str] = None,
    original: Optional[Exception] = None,
    **metadata: object,
) -> BaseAppException:
    """상세 모델 조립을 포함해 예외 객체를 생성한다."""

    detail = ExceptionDetail(
        code=code,
        cause=cause if cause is not None else (str(original) if original else None),
        hint=hint,
        metadata=dict(metadata),
        kind=kind,
    )
    return BaseAppException(message, detail, original)

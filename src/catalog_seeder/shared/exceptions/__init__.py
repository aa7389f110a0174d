"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델, 실패 분류, 베이스 클래스를 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/shared/exceptions/models.py, src/catalog_seeder/shared/exceptions/base.py
"""

from catalog_seeder.shared.exceptions.base import BaseAppException, app_error
from catalog_seeder.shared.exceptions.models import ExceptionDetail, FailureKind

__all__ = ["BaseAppException", "ExceptionDetail", "FailureKind", "app_error"]

"""
목적: DB 공통 모델 공개 API를 제공한다.
설명: 벡터 인덱스 기술자와 검색 인덱스 정보 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/integrations/db/base/models.py
"""

from .models import IndexReconcileMode, SearchIndexInfo, VectorIndexDescriptor

__all__ = ["IndexReconcileMode", "SearchIndexInfo", "VectorIndexDescriptor"]

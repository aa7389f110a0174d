"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: 인덱스 모델과 MongoDB 연결/스키마 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/integrations/db/base, src/catalog_seeder/integrations/db/engines/mongodb
"""

from .base import IndexReconcileMode, SearchIndexInfo, VectorIndexDescriptor
from .engines.mongodb import MongoConnectionManager, MongoSchemaManager

__all__ = [
    "IndexReconcileMode",
    "SearchIndexInfo",
    "VectorIndexDescriptor",
    "MongoConnectionManager",
    "MongoSchemaManager",
]

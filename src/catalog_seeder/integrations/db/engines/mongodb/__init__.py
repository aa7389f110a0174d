"""
목적: MongoDB 엔진 모듈 공개 API를 제공한다.
설명: 연결 관리자와 스키마 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/integrations/db/engines/mongodb/connection.py, src/catalog_seeder/integrations/db/engines/mongodb/schema_manager.py
"""

from .connection import MongoConnectionManager
from .schema_manager import MongoSchemaManager

__all__ = ["MongoConnectionManager", "MongoSchemaManager"]

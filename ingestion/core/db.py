"""
목적: 시딩 단계의 로거와 DB 연결 생성을 담당한다.
설명: 설정 객체로부터 MongoDB 연결 관리자를 구성한다.
디자인 패턴: 팩토리 모듈
참조: ingestion/seed_catalog.py, ingestion/core/orchestrator.py
"""

from __future__ import annotations

from typing import Any

from pymongo import MongoClient

from catalog_seeder.integrations.db import MongoConnectionManager
from catalog_seeder.shared.config import SeederSettings
from catalog_seeder.shared.logging import Logger, create_default_logger


def create_logger(name: str = "CatalogSeeder", emit_stdout: bool | None = None) -> Logger:
    """시딩 전용 로거를 생성한다."""

    return create_default_logger(name, emit_stdout=emit_stdout)


def create_mongo_connection(
    settings: SeederSettings,
    logger: Logger | None = None,
    mongo_client_cls: Any = MongoClient,
) -> MongoConnectionManager:
    """MongoDB 연결 관리자를 생성한다."""

    return MongoConnectionManager(
        uri=settings.mongodb.uri.get_secret_value(),
        database_name=settings.mongodb.database,
        logger=logger,
        mongo_client_cls=mongo_client_cls,
        client_kwargs={
            "serverSelectionTimeoutMS": settings.mongodb.server_selection_timeout_ms,
            "appname": "catalog-seeder",
        },
    )


__all__ = ["create_logger", "create_mongo_connection"]

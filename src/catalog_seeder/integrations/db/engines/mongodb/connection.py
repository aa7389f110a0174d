"""
목적: MongoDB 연결 관리 모듈을 제공한다.
설명: 클라이언트 생성, admin ping 기반 연결 확인, 데이터베이스 객체 보장과 종료를 담당한다.
디자인 패턴: 매니저 패턴
참조: src/catalog_seeder/integrations/db/engines/mongodb/schema_manager.py
"""

from __future__ import annotations

from typing import Any, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from catalog_seeder.shared.exceptions import FailureKind, app_error
from catalog_seeder.shared.logging import Logger, create_default_logger


class MongoConnectionManager:
    """MongoDB 연결 관리자.

    Args:
        uri: MongoDB 연결 문자열.
        database_name: 사용할 데이터베이스 이름.
        logger: 로거.
        mongo_client_cls: 클라이언트 클래스. 테스트에서 대체 구현을 주입한다.
        client_kwargs: 클라이언트 생성 인자(serverSelectionTimeoutMS 등).
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        logger: Optional[Logger] = None,
        mongo_client_cls: Any = MongoClient,
        client_kwargs: Optional[dict[str, Any]] = None,
    ) -> None:
        self._uri = uri
        self._database_name = database_name
        self._logger = logger or create_default_logger("MongoConnectionManager")
        self._mongo_client_cls = mongo_client_cls
        self._client_kwargs = dict(client_kwargs or {})
        self._client: Any | None = None
        self._database: Any | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """MongoDB 클라이언트를 만들고 admin ping으로 연결을 확인한다.

        Raises:
            BaseAppException: 클라이언트 생성 또는 ping 실패(SEED_DB_CONNECT_FAILED).
        """

        if self._client is not None:
            return
        try:
            client = self._mongo_client_cls(self._uri, **self._client_kwargs)
        except PyMongoError as error:
            raise self._connect_error(error) from error
        try:
            client.admin.command("ping")
        except PyMongoError as error:
            client.close()
            raise self._connect_error(error) from error
        self._client = client
        self._database = client[self._database_name]
        self._logger.info(
            "MongoDB 연결이 초기화되었습니다.",
            metadata={"database": self._database_name},
        )

    def close(self) -> None:
        """MongoDB 연결을 종료한다."""

        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database = None
        self._logger.info("MongoDB 연결이 종료되었습니다.")

    def ensure_database(self):
        """초기화된 MongoDB 데이터베이스 객체를 반환한다."""

        if self._database is None:
            raise RuntimeError("MongoDB 연결이 초기화되지 않았습니다.")
        return self._database

    def _connect_error(self, error: PyMongoError):
        return app_error(
            "MongoDB에 연결할 수 없습니다.",
            "SEED_DB_CONNECT_FAILED",
            kind=FailureKind.FATAL_STARTUP,
            hint="MONGODB_ATLAS_URI와 네트워크 접근 허용 목록을 확인하세요.",
            original=error,
            database=self._database_name,
        )

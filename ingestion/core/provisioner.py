"""
목적: 시딩 대상 컬렉션과 벡터 검색 인덱스를 준비한다.
설명: 컬렉션 생성/비우기와 선언형 벡터 인덱스 정합화(reconcile) 또는 전체 재생성(drop_all)을 수행한다.
      인덱스 단계의 저장소 오류는 index_degraded로 흡수하고 시딩은 계속한다.
디자인 패턴: 매니저 패턴
참조: src/catalog_seeder/integrations/db/engines/mongodb/schema_manager.py, ingestion/core/orchestrator.py
"""

from __future__ import annotations

from typing import Any, Optional

from pymongo.errors import PyMongoError

from catalog_seeder.integrations.db import (
    IndexReconcileMode,
    MongoSchemaManager,
    SearchIndexInfo,
    VectorIndexDescriptor,
)
from catalog_seeder.shared.exceptions import FailureKind, app_error
from catalog_seeder.shared.logging import Logger, create_default_logger
from ingestion.core.types import IndexProvisionResult, IndexProvisionStatus


class IndexProvisioner:
    """컬렉션/벡터 인덱스 준비기.

    reconcile 모드는 선언된 경로(descriptor.path)에 묶인 벡터 인덱스만 하나로 맞춘다.
    다른 경로에 묶인 vectorSearch 인덱스는 다른 용도로 보고 그대로 두므로,
    컬렉션 전체에 벡터 인덱스가 정확히 하나만 남아야 하면 drop_all 모드를 사용한다.

    Args:
        database: pymongo Database 객체.
        collection_name: 대상 컬렉션 이름.
        schema_manager: MongoDB 스키마 관리자.
        logger: 로거.
    """

    def __init__(
        self,
        database: Any,
        collection_name: str,
        schema_manager: Optional[MongoSchemaManager] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._database = database
        self._collection_name = collection_name
        self._schema = schema_manager or MongoSchemaManager()
        self._logger = logger or create_default_logger("IndexProvisioner")

    def ensure_collection(self) -> bool:
        """컬렉션이 없으면 생성한다. 이미 있으면 아무것도 하지 않는다."""

        try:
            created = self._schema.create_collection(self._database, self._collection_name)
        except PyMongoError as error:
            raise app_error(
                "컬렉션을 준비할 수 없습니다.",
                "SEED_COLLECTION_SETUP_FAILED",
                kind=FailureKind.FATAL_STARTUP,
                original=error,
                collection=self._collection_name,
            ) from error
        if created:
            self._logger.info(f"'{self._collection_name}' 컬렉션을 생성했습니다.")
        else:
            self._logger.info(f"'{self._collection_name}' 컬렉션이 이미 존재합니다.")
        return created

    def clear_collection(self) -> int:
        """컬렉션의 모든 문서를 삭제한다."""

        try:
            deleted = self._schema.clear_collection(self._database, self._collection_name)
        except PyMongoError as error:
            raise app_error(
                "기존 문서를 삭제할 수 없습니다.",
                "SEED_COLLECTION_CLEAR_FAILED",
                kind=FailureKind.FATAL_STARTUP,
                original=error,
                collection=self._collection_name,
            ) from error
        self._logger.info(
            f"'{self._collection_name}' 컬렉션의 기존 문서 {deleted}건을 삭제했습니다.",
            metadata={"deleted_count": deleted},
        )
        return deleted

    def ensure_vector_index(
        self,
        descriptor: VectorIndexDescriptor,
        mode: IndexReconcileMode = IndexReconcileMode.RECONCILE,
    ) -> IndexProvisionResult:
        """선언된 벡터 인덱스가 유일하게 존재하도록 맞춘다. 예외를 던지지 않는다."""

        mode = IndexReconcileMode(mode)
        try:
            if mode == IndexReconcileMode.DROP_ALL:
                result = self._drop_all_and_create(descriptor)
            else:
                result = self._reconcile(descriptor)
        except PyMongoError as error:
            self._logger.warning(
                f"벡터 인덱스 준비 실패, 의미 검색 없이 계속합니다: {error}",
                metadata={
                    "failure_kind": FailureKind.INDEX_DEGRADED.value,
                    "index_name": descriptor.name,
                    "mode": mode.value,
                    "error_type": type(error).__name__,
                },
            )
            return IndexProvisionResult(
                status=IndexProvisionStatus.FAILED,
                index_name=descriptor.name,
                reason=str(error),
            )
        self._logger.info(
            f"벡터 인덱스 '{descriptor.name}' 준비 완료: {result.status.value}",
            metadata={"mode": mode.value, "dropped": result.dropped},
        )
        return result

    def _reconcile(self, descriptor: VectorIndexDescriptor) -> IndexProvisionResult:
        observed = self._schema.list_search_indexes(self._database, self._collection_name)
        same_name = next((index for index in observed if index.name == descriptor.name), None)
        conflicts = [
            index
            for index in observed
            if index.name != descriptor.name
            and index.is_vector
            and descriptor.path in index.vector_paths()
        ]
        self._log_diff(descriptor, same_name, conflicts)

        dropped: list[str] = []
        for index in conflicts:
            self._schema.drop_search_index(self._database, self._collection_name, index.name)
            dropped.append(index.name)

        if same_name is None:
            self._schema.create_vector_index(self._database, self._collection_name, descriptor)
            status = IndexProvisionStatus.CREATED
        elif not same_name.is_vector:
            self._schema.drop_search_index(self._database, self._collection_name, same_name.name)
            dropped.append(same_name.name)
            self._schema.create_vector_index(self._database, self._collection_name, descriptor)
            status = IndexProvisionStatus.RECREATED
        elif same_name.matches(descriptor):
            status = IndexProvisionStatus.UNCHANGED
        else:
            self._schema.update_vector_index(self._database, self._collection_name, descriptor)
            status = IndexProvisionStatus.UPDATED
        return IndexProvisionResult(status=status, index_name=descriptor.name, dropped=dropped)

    def _drop_all_and_create(self, descriptor: VectorIndexDescriptor) -> IndexProvisionResult:
        dropped: list[str] = []
        for index in self._schema.list_search_indexes(self._database, self._collection_name):
            self._schema.drop_search_index(self._database, self._collection_name, index.name)
            dropped.append(index.name)
        self._schema.drop_secondary_indexes(self._database, self._collection_name)
        self._logger.info("기존 검색 인덱스와 일반 인덱스를 모두 삭제했습니다.", metadata={"dropped": dropped})
        self._schema.create_vector_index(self._database, self._collection_name, descriptor)
        return IndexProvisionResult(
            status=IndexProvisionStatus.CREATED,
            index_name=descriptor.name,
            dropped=dropped,
        )

    def _log_diff(
        self,
        descriptor: VectorIndexDescriptor,
        same_name: Optional[SearchIndexInfo],
        conflicts: list[SearchIndexInfo],
    ) -> None:
        self._logger.info(
            "벡터 인덱스 선언/관측 비교",
            metadata={
                "declared": descriptor.to_definition(),
                "observed": None if same_name is None else same_name.definition,
                "observed_type": None if same_name is None else same_name.type,
                "conflicts": [index.name for index in conflicts],
            },
        )


__all__ = ["IndexProvisioner"]

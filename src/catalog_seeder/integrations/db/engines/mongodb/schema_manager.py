"""
목적: MongoDB 스키마 관리 모듈을 제공한다.
설명: 컬렉션 생성/비우기와 Atlas 검색 인덱스 조회/생성/수정/삭제 동작을 담당한다.
디자인 패턴: 매니저 패턴
참조: src/catalog_seeder/integrations/db/engines/mongodb/connection.py, src/catalog_seeder/integrations/db/base/models.py
"""

from __future__ import annotations

from typing import List

from pymongo.operations import SearchIndexModel

from catalog_seeder.integrations.db.base.models import SearchIndexInfo, VectorIndexDescriptor


class MongoSchemaManager:
    """MongoDB 스키마 관리자."""

    def collection_exists(self, database, name: str) -> bool:
        """컬렉션 존재 여부를 반환한다."""

        return name in database.list_collection_names()

    def create_collection(self, database, name: str) -> bool:
        """컬렉션이 없으면 생성한다.

        Returns:
            bool: 새로 생성했으면 True.
        """

        if self.collection_exists(database, name):
            return False
        database.create_collection(name)
        return True

    def clear_collection(self, database, name: str) -> int:
        """컬렉션의 모든 문서를 삭제하고 삭제 건수를 반환한다."""

        result = database[name].delete_many({})
        return int(result.deleted_count)

    def list_search_indexes(self, database, collection: str) -> List[SearchIndexInfo]:
        """컬렉션의 검색 인덱스 목록을 조회한다."""

        indexes: List[SearchIndexInfo] = []
        for raw in database[collection].list_search_indexes():
            definition = raw.get("latestDefinition") or raw.get("definition") or {}
            indexes.append(
                SearchIndexInfo(
                    name=str(raw.get("name")),
                    type=str(raw.get("type") or "search"),
                    definition=dict(definition),
                    status=raw.get("status"),
                )
            )
        return indexes

    def create_vector_index(
        self,
        database,
        collection: str,
        descriptor: VectorIndexDescriptor,
    ) -> str:
        """벡터 검색 인덱스를 생성하고 이름을 반환한다."""

        model = SearchIndexModel(
            definition=descriptor.to_definition(),
            name=descriptor.name,
            type="vectorSearch",
        )
        return database[collection].create_search_index(model)

    def update_vector_index(
        self,
        database,
        collection: str,
        descriptor: VectorIndexDescriptor,
    ) -> None:
        """같은 이름의 벡터 검색 인덱스 정의를 갱신한다."""

        database[collection].update_search_index(descriptor.name, descriptor.to_definition())

    def drop_search_index(self, database, collection: str, name: str) -> None:
        """검색 인덱스를 삭제한다."""

        database[collection].drop_search_index(name)

    def drop_secondary_indexes(self, database, collection: str) -> None:
        """`_id`를 제외한 일반 인덱스를 모두 삭제한다."""

        database[collection].drop_indexes()

"""
목적: 시딩 테스트 공통 대체 구현을 제공한다.
설명: pymongo 형태의 인메모리 서버/클라이언트, 해시 기반 임베더, 실패 주입용 모델과 레코드 팩토리를 모은다.
디자인 패턴: 테스트 헬퍼 모듈
참조: tests/conftest.py, tests/seeding/*.py
"""

from __future__ import annotations

import copy
import hashlib
import json
from dataclasses import dataclass
from typing import Any, Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.outputs import ChatResult
from pymongo.errors import CollectionInvalid, OperationFailure, ServerSelectionTimeoutError


def make_record(index: int, **overrides: Any) -> dict[str, Any]:
    """검증을 통과하는 카탈로그 레코드를 만든다."""

    record: dict[str, Any] = {
        "item_id": f"item_{index:03d}",
        "item_name": f"Test Chair {index}",
        "item_description": "Ergonomic chair with lumbar support",
        "brand": "SitWell",
        "manufacturer_address": {
            "street": f"{index} Maple Road",
            "city": "Austin",
            "state": "TX",
            "postal_code": "73301",
            "country": "USA",
        },
        "prices": {"full_price": 200 + index, "sale_price": 150 + index},
        "categories": ["chair", "office"],
        "user_reviews": [
            {"review_date": "2024-03-01", "rating": 4, "comment": "Solid build"},
        ],
        "notes": "Assembly required",
    }
    record.update(overrides)
    return record


def make_records(count: int) -> list[dict[str, Any]]:
    return [make_record(index) for index in range(1, count + 1)]


def to_model_response(records: list[dict[str, Any]], *, fenced: bool = True) -> str:
    """모델 응답처럼 설명문/펜스를 붙인 JSON 텍스트를 만든다."""

    payload = json.dumps(records, indent=2)
    if fenced:
        return f"Here are the items you asked for:\n```json\n{payload}\n```\nEnjoy!"
    return payload


class HashEmbeddings(Embeddings):
    """텍스트 해시로 결정적 벡터를 만드는 임베더."""

    def __init__(self, dimension: int = 768) -> None:
        self.dimension = dimension
        self.calls: list[list[str]] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[index % len(digest)] / 255.0 for index in range(self.dimension)]


class FailingEmbeddings(HashEmbeddings):
    """지정한 호출 차수에서 실패하는 임베더."""

    def __init__(self, dimension: int = 768, fail_on_call: int = 1) -> None:
        super().__init__(dimension)
        self.fail_on_call = fail_on_call

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if len(self.calls) + 1 == self.fail_on_call:
            self.calls.append(list(texts))
            raise RuntimeError("embedding quota exceeded")
        return super().embed_documents(texts)


class FailingChatModel(BaseChatModel):
    """항상 실패하는 채팅 모델."""

    @property
    def _llm_type(self) -> str:
        return "failing-chat"

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: Optional[list[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        raise RuntimeError("provider unavailable")


@dataclass
class _InsertManyResult:
    inserted_ids: list[Any]


@dataclass
class _DeleteResult:
    deleted_count: int


class FakeCollection:
    """pymongo Collection 형태의 인메모리 컬렉션."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.insert_calls: list[int] = []
        self.search_indexes: dict[str, dict[str, Any]] = {}
        self.regular_indexes: list[str] = []
        self.drop_indexes_calls = 0
        self.fail_insert_on_call: Optional[int] = None
        self.fail_search_index_ops = False
        self._next_id = 0

    def insert_many(self, documents: list[dict[str, Any]], ordered: bool = True) -> _InsertManyResult:
        call_number = len(self.insert_calls) + 1
        if self.fail_insert_on_call == call_number:
            self.insert_calls.append(0)
            raise OperationFailure("write concern timeout")
        inserted_ids = []
        for document in documents:
            self._next_id += 1
            document.setdefault("_id", f"oid-{self._next_id}")
            inserted_ids.append(document["_id"])
            self.documents.append(copy.deepcopy(document))
        self.insert_calls.append(len(documents))
        return _InsertManyResult(inserted_ids=inserted_ids)

    def delete_many(self, filter: dict[str, Any]) -> _DeleteResult:
        deleted = len(self.documents)
        self.documents.clear()
        return _DeleteResult(deleted_count=deleted)

    def count_documents(self, filter: dict[str, Any]) -> int:
        return len(self.documents)

    def list_search_indexes(self) -> list[dict[str, Any]]:
        self._check_search_ops()
        return [copy.deepcopy(index) for index in self.search_indexes.values()]

    def create_search_index(self, model: Any) -> str:
        self._check_search_ops()
        document = model.document
        name = document["name"]
        if name in self.search_indexes:
            raise OperationFailure(f"Duplicate Index: {name}")
        self.search_indexes[name] = {
            "name": name,
            "type": document.get("type", "search"),
            "status": "READY",
            "latestDefinition": copy.deepcopy(document["definition"]),
        }
        return name

    def update_search_index(self, name: str, definition: dict[str, Any]) -> None:
        self._check_search_ops()
        if name not in self.search_indexes:
            raise OperationFailure(f"Index not found: {name}")
        self.search_indexes[name]["latestDefinition"] = copy.deepcopy(definition)

    def drop_search_index(self, name: str) -> None:
        self._check_search_ops()
        if name not in self.search_indexes:
            raise OperationFailure(f"Index not found: {name}")
        del self.search_indexes[name]

    def drop_indexes(self) -> None:
        self.drop_indexes_calls += 1
        self.regular_indexes.clear()

    def vector_indexes_on(self, path: str) -> list[str]:
        """경로에 묶인 vectorSearch 인덱스 이름 목록."""

        return [
            index["name"]
            for index in self.search_indexes.values()
            if index["type"] == "vectorSearch"
            and any(field.get("path") == path for field in index["latestDefinition"]["fields"])
        ]

    def _check_search_ops(self) -> None:
        if self.fail_search_index_ops:
            raise OperationFailure("search index commands are not supported on this tier")


class FakeDatabase:
    """pymongo Database 형태의 인메모리 데이터베이스."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._collections: dict[str, FakeCollection] = {}
        self._created: set[str] = set()
        self.create_collection_calls = 0
        self.fail_create_collection = False

    def list_collection_names(self) -> list[str]:
        return sorted(self._created)

    def create_collection(self, name: str) -> FakeCollection:
        self.create_collection_calls += 1
        if self.fail_create_collection:
            raise OperationFailure("not authorized to create collection")
        if name in self._created:
            raise CollectionInvalid(f"collection {name} already exists")
        self._created.add(name)
        return self[name]

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


class _FakeAdmin:
    def __init__(self, server: "FakeMongoServer") -> None:
        self._server = server

    def command(self, name: str) -> dict[str, Any]:
        self._server.commands.append(name)
        if self._server.unreachable:
            raise ServerSelectionTimeoutError("No servers found yet")
        return {"ok": 1.0}


class FakeMongoClient:
    """pymongo MongoClient 형태의 인메모리 클라이언트."""

    def __init__(self, server: "FakeMongoServer", uri: str, **kwargs: Any) -> None:
        self._server = server
        self.uri = uri
        self.kwargs = kwargs
        self.admin = _FakeAdmin(server)
        server.clients.append(self)
        self.closed = False

    def __getitem__(self, name: str) -> FakeDatabase:
        return self._server.database(name)

    def close(self) -> None:
        self.closed = True


class FakeMongoServer:
    """여러 클라이언트가 공유하는 인메모리 서버 상태."""

    def __init__(self, unreachable: bool = False) -> None:
        self.unreachable = unreachable
        self.clients: list[FakeMongoClient] = []
        self.commands: list[str] = []
        self._databases: dict[str, FakeDatabase] = {}

    def database(self, name: str) -> FakeDatabase:
        if name not in self._databases:
            self._databases[name] = FakeDatabase(name)
        return self._databases[name]

    def client_cls(self, uri: str, **kwargs: Any) -> FakeMongoClient:
        """MongoClient 대신 주입할 생성 함수."""

        return FakeMongoClient(self, uri, **kwargs)

    @property
    def all_closed(self) -> bool:
        return all(client.closed for client in self.clients)

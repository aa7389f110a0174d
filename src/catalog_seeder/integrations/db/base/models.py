"""
목적: DB 통합에서 공통으로 사용하는 인덱스 모델을 정의한다.
설명: 선언형 벡터 인덱스 기술자와 관측된 검색 인덱스 정보, 인덱스 정합화 모드를 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/catalog_seeder/integrations/db/engines/mongodb/schema_manager.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


class IndexReconcileMode(str, Enum):
    """벡터 인덱스 정합화 모드."""

    RECONCILE = "reconcile"
    DROP_ALL = "drop_all"


class VectorIndexDescriptor(BaseModel):
    """선언형 벡터 검색 인덱스 기술자이다.

    Args:
        name: 인덱스 이름.
        path: 임베딩 벡터가 저장된 필드 경로.
        dimensions: 벡터 차원 수.
        similarity: 유사도 함수.
    """

    name: str = Field(default="vector_index", min_length=1)
    path: str = Field(default="embedding", min_length=1)
    dimensions: int = Field(default=768, ge=1)
    similarity: Literal["cosine", "euclidean", "dotProduct"] = "cosine"

    def to_definition(self) -> Dict[str, Any]:
        """Atlas vectorSearch 인덱스 정의로 변환한다."""

        return {
            "fields": [
                {
                    "type": "vector",
                    "path": self.path,
                    "numDimensions": self.dimensions,
                    "similarity": self.similarity,
                }
            ]
        }


class SearchIndexInfo(BaseModel):
    """컬렉션에서 관측된 검색 인덱스 정보이다."""

    name: str
    type: str = "search"
    definition: Dict[str, Any] = Field(default_factory=dict)
    status: Optional[str] = None

    @property
    def is_vector(self) -> bool:
        return self.type == "vectorSearch"

    def vector_paths(self) -> set[str]:
        """정의에 포함된 벡터 필드 경로 집합을 반환한다."""

        return {
            str(field.get("path"))
            for field in self.definition.get("fields", [])
            if isinstance(field, dict) and field.get("type") == "vector"
        }

    def matches(self, descriptor: VectorIndexDescriptor) -> bool:
        """선언된 기술자와 동일한 정의인지 확인한다."""

        return self.is_vector and _normalize(self.definition) == _normalize(
            descriptor.to_definition()
        )


def _normalize(definition: Dict[str, Any]) -> list[tuple]:
    fields = definition.get("fields", [])
    return sorted(
        tuple(sorted((str(key), str(value)) for key, value in field.items()))
        for field in fields
        if isinstance(field, dict)
    )

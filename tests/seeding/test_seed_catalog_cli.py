"""
목적: 시딩 실행 스크립트의 인자 처리와 종료 코드를 검증한다.
설명: 외부 모델/DB 생성 함수를 대체 구현으로 바꿔 설정 오류, 정상 실행, 관대한 종료 코드 옵션을 확인한다.
디자인 패턴: 스크립트 오케스트레이션 테스트
참조: ingestion/seed_catalog.py
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from catalog_seeder.integrations.llm import LLMClient
from ingestion import seed_catalog
from ingestion.core import db as seed_db

try:
    from tests._seeding_support import FakeMongoServer, HashEmbeddings, make_records, to_model_response
except ModuleNotFoundError:
    from _seeding_support import (  # type: ignore[no-redef]
        FakeMongoServer,
        HashEmbeddings,
        make_records,
        to_model_response,
    )

_SEED_ENV_KEYS = (
    "MONGODB_ATLAS_URI",
    "MONGODB_URI",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "SEED_LLM_PROVIDER",
    "SEED_ITEM_COUNT",
    "SEED_BATCH_SIZE",
    "SEED_BATCH_DELAY_SECONDS",
    "SEED_INDEX_MODE",
    "SEED_EMBEDDING_DIMENSION",
    "SEED_DATABASE",
    "SEED_COLLECTION",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _SEED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def wired(clean_env: pytest.MonkeyPatch, fake_server: FakeMongoServer) -> dict[str, Any]:
    """모델/임베더/DB 생성 함수를 대체 구현으로 연결한다."""

    clean_env.setenv("MONGODB_ATLAS_URI", "mongodb://fake")
    clean_env.setenv("GOOGLE_API_KEY", "test-key")
    state: dict[str, Any] = {"response": to_model_response(make_records(4)), "server": fake_server}

    def fake_chat_model(settings: Any, logger: Any = None) -> LLMClient:
        return LLMClient(model=FakeListChatModel(responses=[state["response"]]), logger=logger)

    def fake_embedder(settings: Any) -> HashEmbeddings:
        return HashEmbeddings(dimension=settings.pipeline.embedding_dimension)

    def fake_connection(settings: Any, logger: Any = None) -> Any:
        return seed_db.create_mongo_connection(
            settings,
            logger=logger,
            mongo_client_cls=state["server"].client_cls,
        )

    clean_env.setattr(seed_catalog, "build_chat_model", fake_chat_model)
    clean_env.setattr(seed_catalog, "build_embedder", fake_embedder)
    clean_env.setattr(seed_catalog, "create_mongo_connection", fake_connection)
    return state


def _argv(tmp_path: Path, *extra: str) -> list[str]:
    return ["--env-file", str(tmp_path / "missing.env"), "--batch-delay", "0", *extra]


def test_parse_args_defaults_leave_env_values() -> None:
    """인자를 주지 않으면 설정 덮어쓰기 값이 None인지 확인한다."""

    args = seed_catalog.parse_args([])

    assert args.count is None
    assert args.batch_size is None
    assert args.index_mode is None
    assert args.lenient_exit is False


def test_missing_config_exits_with_fatal_startup(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """필수 설정이 없으면 종료 코드 2를 반환하는지 확인한다."""

    assert seed_catalog.main(_argv(tmp_path)) == 2


def test_invalid_cli_value_exits_with_fatal_startup(wired: dict[str, Any], tmp_path: Path) -> None:
    """검증을 통과하지 못하는 인자 값이면 종료 코드 2를 반환하는지 확인한다."""

    assert seed_catalog.main(_argv(tmp_path, "--batch-size", "0")) == 2


def test_successful_run_exits_zero(wired: dict[str, Any], tmp_path: Path) -> None:
    """정상 실행이면 종료 코드 0을 반환하고 레코드를 적재하는지 확인한다."""

    exit_code = seed_catalog.main(_argv(tmp_path, "--count", "4", "--batch-size", "2"))

    collection = wired["server"].database("inventory_database")["items"]
    assert exit_code == 0
    assert collection.count_documents({}) == 4
    assert collection.insert_calls == [2, 2]
    assert wired["server"].all_closed
    assert wired["server"].clients[0].kwargs["appname"] == "catalog-seeder"


def test_fallback_run_exits_with_generation_degraded(wired: dict[str, Any], tmp_path: Path) -> None:
    """대체 레코드를 사용하면 종료 코드 5를 반환하는지 확인한다."""

    wired["response"] = "no array"

    assert seed_catalog.main(_argv(tmp_path)) == 5


def test_lenient_exit_returns_zero(wired: dict[str, Any], tmp_path: Path) -> None:
    """--lenient-exit이면 저하/실패와 무관하게 0을 반환하는지 확인한다."""

    wired["server"] = FakeMongoServer(unreachable=True)

    assert seed_catalog.main(_argv(tmp_path)) == 2
    assert seed_catalog.main(_argv(tmp_path, "--lenient-exit")) == 0

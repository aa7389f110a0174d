"""
목적: LLM 클라이언트 로깅/예외 처리와 모델 팩토리를 검증한다.
설명: 대체 채팅 모델로 호출 성공/실패 로그, 오류 래핑, 멀티 파트 텍스트 추출, provider별 생성을 확인한다.
디자인 패턴: 프록시 패턴 테스트
참조: src/catalog_seeder/integrations/llm/client.py, src/catalog_seeder/integrations/llm/factory.py
"""

from __future__ import annotations

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from catalog_seeder.integrations.llm import LLMClient, build_chat_model, build_embedder, extract_text
from catalog_seeder.shared.config import load_settings
from catalog_seeder.shared.exceptions import BaseAppException
from catalog_seeder.shared.logging import InMemoryLogger, LogLevel

try:
    from tests._seeding_support import FailingChatModel
except ModuleNotFoundError:
    from _seeding_support import FailingChatModel  # type: ignore[no-redef]


def test_llm_client_logs_start_and_success() -> None:
    """호출 시작/성공 로그가 기록되는지 확인한다."""

    logger = InMemoryLogger(name="llm-test", emit_stdout=False)
    client = LLMClient(model=FakeListChatModel(responses=["[]"]), name="fake-model", logger=logger)

    response = client.invoke("hello")

    assert extract_text(response) == "[]"
    messages = [record.message for record in logger.repository.list()]
    assert messages == ["LLM invoke 호출 시작", "LLM invoke 호출 성공"]
    success = logger.repository.list()[-1]
    assert success.metadata["model_name"] == "fake-model"
    assert success.metadata["success"] is True
    assert "duration_ms" in success.metadata


def test_llm_client_wraps_provider_error() -> None:
    """공급자 오류가 LLM_INVOKE_ERROR로 감싸지는지 확인한다."""

    logger = InMemoryLogger(name="llm-test", emit_stdout=False)
    client = LLMClient(model=FailingChatModel(), logger=logger)

    with pytest.raises(BaseAppException) as exc_info:
        client.invoke("hello")

    assert exc_info.value.code == "LLM_INVOKE_ERROR"
    assert isinstance(exc_info.value.original, RuntimeError)
    error_record = logger.repository.list()[-1]
    assert error_record.level == LogLevel.WARNING
    assert error_record.metadata["error_type"] == "RuntimeError"


def test_extract_text_flattens_multipart_content() -> None:
    """멀티 파트 응답을 텍스트로 합치는지 확인한다."""

    message = AIMessage(
        content=[
            {"type": "text", "text": "Here you go:"},
            "[{\"item_id\": \"item_001\"}]",
        ]
    )

    assert extract_text(message) == "Here you go:\n[{\"item_id\": \"item_001\"}]"
    assert extract_text(AIMessage(content="plain")) == "plain"


def test_factory_builds_gemini_clients() -> None:
    """gemini 설정으로 채팅 모델과 임베더를 생성하는지 확인한다."""

    from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

    settings = load_settings(
        environ={"MONGODB_ATLAS_URI": "mongodb://localhost", "GOOGLE_API_KEY": "test-key"},
        logger=InMemoryLogger(name="factory-test", emit_stdout=False),
    )

    chat_model = build_chat_model(settings)
    embedder = build_embedder(settings)

    assert isinstance(chat_model, LLMClient)
    assert isinstance(chat_model.wrapped_model, ChatGoogleGenerativeAI)
    assert isinstance(embedder, GoogleGenerativeAIEmbeddings)


def test_factory_builds_openai_clients() -> None:
    """openai 설정으로 채팅 모델과 임베더를 생성하는지 확인한다."""

    from langchain_openai import ChatOpenAI, OpenAIEmbeddings

    settings = load_settings(
        environ={
            "MONGODB_ATLAS_URI": "mongodb://localhost",
            "SEED_LLM_PROVIDER": "openai",
            "OPENAI_API_KEY": "sk-test",
        },
        logger=InMemoryLogger(name="factory-test", emit_stdout=False),
    )

    chat_model = build_chat_model(settings)
    embedder = build_embedder(settings)

    assert isinstance(chat_model.wrapped_model, ChatOpenAI)
    assert isinstance(embedder, OpenAIEmbeddings)
    assert embedder.dimensions == 768

"""
목적: 설정 기반으로 채팅 모델과 임베더를 생성한다.
설명: provider(gemini/openai)에 맞는 LangChain 구현체를 만들고 채팅 모델은 LLMClient로 감싼다.
디자인 패턴: 팩토리
참조: src/catalog_seeder/integrations/llm/client.py, src/catalog_seeder/shared/config/settings.py
"""

from __future__ import annotations

from typing import Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from catalog_seeder.integrations.llm.client import LLMClient
from catalog_seeder.shared.config import ModelSettings, SeederSettings
from catalog_seeder.shared.exceptions import BaseAppException, ExceptionDetail, FailureKind
from catalog_seeder.shared.logging import Logger


def build_chat_model(settings: SeederSettings, logger: Optional[Logger] = None) -> LLMClient:
    """레코드 생성용 채팅 모델을 생성한다."""

    model = _build_provider_chat_model(settings.model)
    return LLMClient(
        model=model,
        name=settings.model.resolved_chat_model(),
        logger=logger,
    )


def build_embedder(settings: SeederSettings) -> Embeddings:
    """요약 임베딩용 임베더를 생성한다."""

    model_settings = settings.model
    model_name = model_settings.resolved_embedding_model()
    if model_settings.provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(
            model=model_name,
            api_key=model_settings.api_key,
            dimensions=settings.pipeline.embedding_dimension,
        )
    from langchain_google_genai import GoogleGenerativeAIEmbeddings

    return GoogleGenerativeAIEmbeddings(
        model=model_name,
        google_api_key=model_settings.api_key,
    )


def _build_provider_chat_model(model_settings: ModelSettings) -> BaseChatModel:
    model_name = model_settings.resolved_chat_model()
    if model_settings.provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=model_name,
            api_key=model_settings.api_key,
            temperature=model_settings.temperature,
        )
    if model_settings.provider == "gemini":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=model_name,
            google_api_key=model_settings.api_key,
            temperature=model_settings.temperature,
        )
    detail = ExceptionDetail(
        code="SEED_LLM_PROVIDER_INVALID",
        cause=f"provider={model_settings.provider}",
        kind=FailureKind.FATAL_STARTUP,
    )
    raise BaseAppException(
        "지원하지 않는 SEED_LLM_PROVIDER 값입니다. gemini 또는 openai를 사용하세요.",
        detail,
    )

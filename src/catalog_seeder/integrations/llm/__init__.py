"""
목적: LLM 통합 모듈 공개 API를 제공한다.
설명: LLM 클라이언트와 모델 팩토리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/integrations/llm/client.py, src/catalog_seeder/integrations/llm/factory.py
"""

from .client import LLMClient, extract_text
from .factory import build_chat_model, build_embedder

__all__ = ["LLMClient", "extract_text", "build_chat_model", "build_embedder"]

"""
목적: 레코드 생성에 쓰는 채팅 모델 프록시를 제공한다.
설명: 실제 공급자 모델을 감싸 호출 시작/성공/실패를 시딩 로거에 남기고, 공급자 오류를 공통 예외로 바꾼다.
      응답 content가 멀티 파트(list)여도 텍스트 하나로 꺼낼 수 있는 유틸을 함께 둔다.
디자인 패턴: 프록시
참조: src/catalog_seeder/integrations/llm/factory.py, ingestion/core/generation.py
"""

from __future__ import annotations

import time
from typing import Any, Optional, Sequence

from langchain_core.callbacks import (
    AsyncCallbackManagerForLLMRun,
    CallbackManagerForLLMRun,
)
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.outputs import ChatResult
from pydantic import ConfigDict, PrivateAttr

from catalog_seeder.shared.exceptions import BaseAppException, ExceptionDetail
from catalog_seeder.shared.logging import LogLevel, Logger, create_default_logger


class LLMClient(BaseChatModel):
    """로깅/예외 변환을 더한 채팅 모델 프록시.

    Args:
        model: 실제 공급자 채팅 모델.
        name: 로그에 남길 모델 이름.
        logger: 로거.
        log_response: 성공 로그에 응답 본문을 포함할지 여부.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _model: BaseChatModel = PrivateAttr()
    _logger: Logger = PrivateAttr()
    _name: str = PrivateAttr()
    _log_response: bool = PrivateAttr(default=False)

    def __init__(
        self,
        model: BaseChatModel,
        name: str = "llm-client",
        logger: Optional[Logger] = None,
        log_response: bool = False,
    ) -> None:
        super().__init__()
        self._model = model
        self._name = name
        self._log_response = log_response
        self._logger = logger or create_default_logger(name)

    @property
    def wrapped_model(self) -> BaseChatModel:
        return self._model

    @property
    def _llm_type(self) -> str:
        return f"logged-{getattr(self._model, '_llm_type', 'chat-model')}"

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        started = self._on_start("invoke", messages)
        try:
            result = self._model._generate(messages, stop=stop, run_manager=run_manager, **kwargs)
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            raise self._on_error("invoke", "LLM_INVOKE_ERROR", error, started) from error
        self._on_success("invoke", result, started)
        return result

    async def _agenerate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: AsyncCallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        started = self._on_start("ainvoke", messages)
        try:
            result = await self._model._agenerate(messages, stop=stop, run_manager=run_manager, **kwargs)
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            raise self._on_error("ainvoke", "LLM_AINVOKE_ERROR", error, started) from error
        self._on_success("ainvoke", result, started)
        return result

    def _on_start(self, action: str, messages: Sequence[BaseMessage]) -> float:
        metadata = self._metadata(action)
        metadata["prompt_chars"] = sum(len(extract_text(message)) for message in messages)
        self._logger.log(LogLevel.INFO, f"LLM {action} 호출 시작", metadata=metadata)
        return time.monotonic()

    def _on_success(self, action: str, result: ChatResult, started: float) -> None:
        metadata = self._metadata(action, started)
        metadata["success"] = True
        message = result.generations[0].message if result.generations else None
        if message is not None:
            metadata["response_chars"] = len(extract_text(message))
            usage = getattr(message, "usage_metadata", None)
            if usage:
                metadata["usage_metadata"] = dict(usage)
        if self._log_response and message is not None:
            metadata["response"] = extract_text(message)
        self._logger.log(LogLevel.INFO, f"LLM {action} 호출 성공", metadata=metadata)

    def _on_error(self, action: str, code: str, error: Exception, started: float) -> BaseAppException:
        metadata = self._metadata(action, started)
        metadata.update({"success": False, "error_type": type(error).__name__})
        self._logger.log(LogLevel.WARNING, f"LLM {action} 호출 실패: {error}", metadata=metadata)
        return BaseAppException(
            "생성 모델 호출에 실패했습니다.",
            ExceptionDetail(code=code, cause=str(error), metadata={"model_name": self._name}),
            error,
        )

    def _metadata(self, action: str, started: Optional[float] = None) -> dict:
        metadata: dict[str, Any] = {
            "action": action,
            "model_name": self._name,
            "llm_type": getattr(self._model, "_llm_type", None),
        }
        if started is not None:
            metadata["duration_ms"] = int((time.monotonic() - started) * 1000)
        return metadata


def extract_text(message: object) -> str:
    """응답 메시지의 텍스트를 꺼낸다.

    멀티 파트(list) content는 텍스트 조각을 줄바꿈으로 이어 붙인다.
    """

    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return str(content)
    parts: list[str] = []
    for part in content:
        if isinstance(part, dict):
            if part.get("text"):
                parts.append(str(part["text"]))
        else:
            parts.append(str(part))
    return "\n".join(parts).strip()

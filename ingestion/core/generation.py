"""
목적: 생성형 모델로 합성 카탈로그 레코드를 만든다.
설명: 프롬프트를 한 번 호출하고 응답에서 JSON 배열을 추출/검증하며, 실패 시 고정 대체 레코드를 반환한다.
디자인 패턴: 파이프라인 단계 + 태그드 결과
참조: ingestion/core/prompts.py, ingestion/core/fallback.py, ingestion/core/types.py
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError

from catalog_seeder.integrations.llm import extract_text
from catalog_seeder.shared.exceptions import FailureKind
from catalog_seeder.shared.logging import Logger, create_default_logger
from ingestion.core.fallback import fallback_records
from ingestion.core.prompts import CATALOG_GENERATION_PROMPT
from ingestion.core.types import (
    CatalogRecordModel,
    GenerationResult,
    ParseInvalid,
    ParseResult,
    ParseValid,
    RecordSource,
)

_ARRAY_SPAN_PATTERN = re.compile(r"\[[\s\S]*\]")
_DECODER = json.JSONDecoder()


def parse_catalog_records(raw: str) -> ParseResult:
    """모델 응답 텍스트를 카탈로그 레코드 목록으로 분류한다.

    앞뒤 설명문과 마크다운 펜스는 허용한다. 검증을 통과한 레코드는 수정 없이 반환한다.
    """

    text = str(raw or "")
    if _ARRAY_SPAN_PATTERN.search(text) is None:
        return ParseInvalid("응답에서 JSON 배열을 찾을 수 없습니다.")

    payload = _decode_first_array(text)
    if payload is None:
        return ParseInvalid("JSON 배열을 해석할 수 없습니다.")
    if not payload:
        return ParseInvalid("JSON 배열이 비어 있습니다.")

    seen: set[str] = set()
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            return ParseInvalid(f"{position}번째 항목이 객체가 아닙니다.")
        try:
            CatalogRecordModel.model_validate(item)
        except ValidationError as error:
            fields = ", ".join(
                ".".join(str(part) for part in detail["loc"]) for detail in error.errors()
            )
            return ParseInvalid(f"{position}번째 항목 스키마 검증 실패: {fields}")
        item_id = item["item_id"]
        if item_id in seen:
            return ParseInvalid(f"중복된 item_id: {item_id}")
        seen.add(item_id)
    return ParseValid(list(payload))


def _decode_first_array(text: str) -> Optional[list[Any]]:
    greedy = _ARRAY_SPAN_PATTERN.search(text)
    if greedy is not None:
        try:
            value = json.loads(greedy.group(0))
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            return value

    first_list: Optional[list[Any]] = None
    start = text.find("[")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            if value and all(isinstance(item, dict) for item in value):
                return value
            if first_list is None:
                first_list = value
        start = text.find("[", start + 1)
    return first_list


class RecordGenerator:
    """카탈로그 레코드 생성기.

    Args:
        model: 채팅 모델(LLMClient 권장).
        item_count: 요청할 레코드 수.
        logger: 로거.
        prompt: 생성 프롬프트 템플릿.
    """

    def __init__(
        self,
        model: BaseChatModel,
        item_count: int = 10,
        logger: Optional[Logger] = None,
        prompt: PromptTemplate = CATALOG_GENERATION_PROMPT,
    ) -> None:
        self._model = model
        self._item_count = item_count
        self._logger = logger or create_default_logger("RecordGenerator")
        self._prompt = prompt

    def build_prompt(self) -> str:
        return self._prompt.format(item_count=self._item_count)

    def generate(self) -> GenerationResult:
        """모델을 한 번 호출해 레코드를 생성한다. 실패하면 대체 레코드를 반환한다."""

        self._logger.info("합성 카탈로그 데이터 생성 시작", metadata={"item_count": self._item_count})
        try:
            response = self._model.invoke(self.build_prompt())
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            return self._fallback(f"모델 호출 실패: {error}", raw=None)

        raw = extract_text(response)
        result = parse_catalog_records(raw)
        if isinstance(result, ParseInvalid):
            return self._fallback(result.reason, raw=raw)

        self._logger.info(
            f"합성 카탈로그 데이터 {len(result.records)}건 생성",
            metadata={"source": RecordSource.MODEL.value, "count": len(result.records)},
        )
        return GenerationResult(records=result.records, source=RecordSource.MODEL)

    def _fallback(self, reason: str, raw: Optional[str]) -> GenerationResult:
        records = fallback_records()
        self._logger.warning(
            f"모델 응답을 사용할 수 없어 대체 레코드 {len(records)}건을 사용합니다: {reason}",
            metadata={
                "failure_kind": FailureKind.GENERATION_DEGRADED.value,
                "reason": reason,
                "raw_response": raw,
            },
        )
        return GenerationResult(records=records, source=RecordSource.FALLBACK, reason=reason)


__all__ = ["RecordGenerator", "parse_catalog_records"]

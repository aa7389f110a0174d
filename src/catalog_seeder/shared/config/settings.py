"""
목적: 시딩 작업 설정 모델과 로더를 제공한다.
설명: 프로젝트 루트 `.env`를 로드한 뒤 환경 변수를 중첩 Pydantic 설정으로 검증한다.
디자인 패턴: 빌더 패턴
참조: ingestion/seed_catalog.py, .env.sample
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, ValidationError

from catalog_seeder.shared.exceptions import BaseAppException, FailureKind, app_error
from catalog_seeder.shared.logging import Logger, create_default_logger

LLMProvider = Literal["gemini", "openai"]
IndexMode = Literal["reconcile", "drop_all"]
Similarity = Literal["cosine", "euclidean", "dotProduct"]

_DEFAULT_CHAT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}
_DEFAULT_EMBEDDING_MODELS: dict[str, str] = {
    "gemini": "models/text-embedding-004",
    "openai": "text-embedding-3-small",
}
_API_KEY_ENV: dict[str, tuple[str, ...]] = {
    "gemini": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
}
_URI_ENV = ("MONGODB_ATLAS_URI", "MONGODB_URI")

# (환경 변수, 설정 섹션, 필드)
_OPTIONAL_ENV_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("SEED_DATABASE", "mongodb", "database"),
    ("SEED_COLLECTION", "mongodb", "collection"),
    ("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "mongodb", "server_selection_timeout_ms"),
    ("SEED_CHAT_MODEL", "model", "chat_model"),
    ("SEED_CHAT_TEMPERATURE", "model", "temperature"),
    ("SEED_EMBEDDING_MODEL", "model", "embedding_model"),
    ("SEED_ITEM_COUNT", "pipeline", "item_count"),
    ("SEED_BATCH_SIZE", "pipeline", "batch_size"),
    ("SEED_BATCH_DELAY_SECONDS", "pipeline", "batch_delay_seconds"),
    ("SEED_SUMMARY_WORKERS", "pipeline", "summary_workers"),
    ("SEED_EMBEDDING_DIMENSION", "pipeline", "embedding_dimension"),
    ("SEED_VECTOR_INDEX_NAME", "pipeline", "vector_index_name"),
    ("SEED_VECTOR_FIELD", "pipeline", "vector_field"),
    ("SEED_TEXT_FIELD", "pipeline", "text_field"),
    ("SEED_VECTOR_SIMILARITY", "pipeline", "similarity"),
    ("SEED_INDEX_MODE", "pipeline", "index_mode"),
)


class MongoSettings(BaseModel):
    """MongoDB 연결 설정."""

    uri: SecretStr
    database: str = Field(default="inventory_database", min_length=1)
    collection: str = Field(default="items", min_length=1)
    server_selection_timeout_ms: int = Field(default=10_000, ge=1)


class ModelSettings(BaseModel):
    """생성/임베딩 모델 설정."""

    provider: LLMProvider = "gemini"
    api_key: SecretStr
    chat_model: str = Field(default="", description="비어 있으면 provider 기본값")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    embedding_model: str = Field(default="", description="비어 있으면 provider 기본값")

    def resolved_chat_model(self) -> str:
        return self.chat_model or _DEFAULT_CHAT_MODELS[self.provider]

    def resolved_embedding_model(self) -> str:
        return self.embedding_model or _DEFAULT_EMBEDDING_MODELS[self.provider]


class PipelineSettings(BaseModel):
    """생성/배치 적재/인덱스 설정."""

    item_count: int = Field(default=10, ge=1)
    batch_size: int = Field(default=3, ge=1)
    batch_delay_seconds: float = Field(default=1.0, ge=0.0)
    summary_workers: int = Field(default=3, ge=1)
    embedding_dimension: int = Field(default=768, ge=1)
    vector_index_name: str = Field(default="vector_index", min_length=1)
    vector_field: str = Field(default="embedding", min_length=1)
    text_field: str = Field(default="embedding_text", min_length=1)
    similarity: Similarity = "cosine"
    index_mode: IndexMode = "reconcile"


class SeederSettings(BaseModel):
    """시딩 작업 전체 설정."""

    mongodb: MongoSettings
    model: ModelSettings
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


def load_settings(
    env_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
    environ: Optional[Mapping[str, str]] = None,
    logger: Optional[Logger] = None,
) -> SeederSettings:
    """환경 변수에서 시딩 설정을 한 번 읽어 검증한다.

    Args:
        env_file: 로드할 `.env` 경로. 생략하면 현재 작업 디렉터리의 `.env`를 사용한다.
        overrides: 섹션별 덮어쓰기 값(CLI 인자 등). None 값은 무시한다.
        environ: 환경 변수 매핑. 생략하면 `os.environ`을 사용하며 이때만 `.env`를 로드한다.
        logger: 주입 가능한 로거.

    Raises:
        BaseAppException: 필수 값 누락(SEED_CONFIG_MISSING) 또는 값 검증 실패(SEED_CONFIG_INVALID).
    """

    logger = logger or create_default_logger("SeederSettings")
    if environ is None:
        _load_env_file(env_file, logger)
        environ = os.environ

    provider = (environ.get("SEED_LLM_PROVIDER") or "gemini").strip().lower()
    missing: list[str] = []
    uri = _first_present(environ, _URI_ENV)
    if uri is None:
        missing.append(" 또는 ".join(_URI_ENV))
    api_key_names = _API_KEY_ENV.get(provider, ())
    api_key = _first_present(environ, api_key_names)
    if api_key_names and api_key is None:
        missing.append(" 또는 ".join(api_key_names))
    if missing:
        raise app_error(
            "필수 설정 값이 없습니다.",
            "SEED_CONFIG_MISSING",
            kind=FailureKind.FATAL_STARTUP,
            cause=", ".join(missing),
            hint=".env.sample을 참고해 .env 또는 환경 변수를 설정하세요.",
            missing=missing,
        )

    data: dict[str, dict[str, Any]] = {
        "mongodb": {"uri": uri},
        "model": {"provider": provider, "api_key": api_key},
        "pipeline": {},
    }
    for env_name, section, field in _OPTIONAL_ENV_FIELDS:
        raw = environ.get(env_name)
        if raw is not None and raw.strip():
            data[section][field] = raw.strip()
    for section, values in (overrides or {}).items():
        data.setdefault(section, {}).update(
            {key: value for key, value in values.items() if value is not None}
        )

    try:
        settings = SeederSettings.model_validate(data)
    except ValidationError as error:
        raise _invalid_config_error(error) from error
    logger.info(
        "시딩 설정 로드 완료",
        metadata={
            "provider": settings.model.provider,
            "database": settings.mongodb.database,
            "collection": settings.mongodb.collection,
            "item_count": settings.pipeline.item_count,
            "batch_size": settings.pipeline.batch_size,
        },
    )
    return settings


def _load_env_file(env_file: Optional[Path], logger: Logger) -> None:
    path = Path(env_file) if env_file else Path.cwd() / ".env"
    if not path.exists():
        if env_file is not None:
            logger.warning(f".env 파일이 없어 건너뜁니다: {path}")
        return
    load_dotenv(dotenv_path=path, override=False)


def _first_present(environ: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _invalid_config_error(error: ValidationError) -> BaseAppException:
    fields = [".".join(str(part) for part in item["loc"]) for item in error.errors()]
    return app_error(
        "설정 값 검증에 실패했습니다.",
        "SEED_CONFIG_INVALID",
        kind=FailureKind.FATAL_STARTUP,
        cause=", ".join(fields),
        original=error,
        fields=fields,
    )

"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 시딩 설정 모델과 로더를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/catalog_seeder/shared/config/settings.py
"""

from catalog_seeder.shared.config.settings import (
    ModelSettings,
    MongoSettings,
    PipelineSettings,
    SeederSettings,
    load_settings,
)

__all__ = [
    "ModelSettings",
    "MongoSettings",
    "PipelineSettings",
    "SeederSettings",
    "load_settings",
]

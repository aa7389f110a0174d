"""
목적: 시딩 테스트 공통 픽스처와 실행 로깅 훅을 제공한다.
설명: .env가 있으면 읽되 로그 출력 관련 변수는 테스트마다 비워 결과를 고정한다.
      MongoDB/임베더 대체 구현 픽스처를 제공하고, 테스트별 결과와 소요 시간을 기록한다.
디자인 패턴: 테스트 훅
참조: pyproject.toml, tests/_seeding_support.py
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from dotenv import load_dotenv

try:
    from tests._seeding_support import FakeMongoServer, HashEmbeddings
except ModuleNotFoundError:
    from _seeding_support import FakeMongoServer, HashEmbeddings  # type: ignore[no-redef]


_LOGGER = logging.getLogger("tests")
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"

# 외부 서비스 없이 돌기 때문에 .env는 선택 사항이다.
if _ENV_PATH.exists():
    load_dotenv(_ENV_PATH, override=False)


@pytest.fixture(autouse=True)
def _isolate_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """LOG_STDOUT/LOG_LEVEL이 테스트 결과에 영향을 주지 않게 한다."""

    monkeypatch.delenv("LOG_STDOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def fake_server() -> FakeMongoServer:
    """인메모리 MongoDB 서버를 반환한다."""

    return FakeMongoServer()


@pytest.fixture
def hash_embeddings() -> HashEmbeddings:
    """768차원 해시 임베더를 반환한다."""

    return HashEmbeddings(dimension=768)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    _LOGGER.info("시딩 테스트 세션 시작 (.env %s)", "사용" if _ENV_PATH.exists() else "없음")


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과와 소요 시간을 기록한다."""

    if report.when != "call":
        return
    level = logging.INFO if report.passed else logging.ERROR
    _LOGGER.log(level, "%s %s (%.3fs)", report.outcome, report.nodeid, report.duration)

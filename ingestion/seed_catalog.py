"""
목적: MongoDB Atlas 카탈로그 시딩 실행 스크립트를 제공한다.
설명: 설정 로드, 모델/임베더 생성, 시딩 오케스트레이터 실행 후 결과에 맞는 종료 코드를 반환한다.
디자인 패턴: 스크립트 오케스트레이션
참조: ingestion/core/*.py
"""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

# `python ingestion/seed_catalog.py` 실행 시 프로젝트 루트를 import 경로에 보정한다.
if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from catalog_seeder.integrations.llm import build_chat_model, build_embedder
from catalog_seeder.shared.config import load_settings
from catalog_seeder.shared.exceptions import BaseAppException, FailureKind
from catalog_seeder.shared.logging import Logger
from catalog_seeder.shared.runtime import CancellationToken
from ingestion.core.db import create_logger, create_mongo_connection
from ingestion.core.generation import RecordGenerator
from ingestion.core.orchestrator import SeedingOrchestrator
from ingestion.core.types import EXIT_FATAL_STARTUP, EXIT_OK


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MongoDB Atlas 카탈로그 시딩 실행")
    parser.add_argument("--count", type=int, default=None, help="생성할 레코드 수 (SEED_ITEM_COUNT)")
    parser.add_argument("--batch-size", type=int, default=None, help="배치 크기 (SEED_BATCH_SIZE)")
    parser.add_argument(
        "--batch-delay",
        type=float,
        default=None,
        help="배치 사이 대기 초 (SEED_BATCH_DELAY_SECONDS, 0이면 대기 없음)",
    )
    parser.add_argument(
        "--index-mode",
        choices=["reconcile", "drop_all"],
        default=None,
        help="벡터 인덱스 준비 방식 (SEED_INDEX_MODE)",
    )
    parser.add_argument("--env-file", type=Path, default=None, help="로드할 .env 파일 경로")
    parser.add_argument(
        "--lenient-exit",
        action="store_true",
        help="결과와 무관하게 종료 코드 0을 반환",
    )
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, dict[str, Any]]:
    return {
        "pipeline": {
            "item_count": args.count,
            "batch_size": args.batch_size,
            "batch_delay_seconds": args.batch_delay,
            "index_mode": args.index_mode,
        }
    }


def _install_signal_handlers(cancellation: CancellationToken, logger: Logger) -> dict[int, Any]:
    """SIGINT/SIGTERM을 취소 요청으로 바꾸고 이전 핸들러를 반환한다."""

    def _handle(signum: int, _frame: object) -> None:
        name = signal.Signals(signum).name
        logger.warning(f"{name} 수신, 현재 배치 이후 중단합니다.")
        cancellation.cancel(reason=name)

    previous: dict[int, Any] = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[signum] = signal.signal(signum, _handle)
        except ValueError:
            # 메인 스레드가 아니면 설치할 수 없다.
            continue
    return previous


def _restore_signal_handlers(previous: dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger = create_logger(emit_stdout=True)
    exit_code = _run(args, logger)
    if args.lenient_exit and exit_code != EXIT_OK:
        logger.info(f"--lenient-exit 지정으로 종료 코드 {exit_code} 대신 0을 반환합니다.")
        return EXIT_OK
    return exit_code


def _run(args: argparse.Namespace, logger: Logger) -> int:
    try:
        settings = load_settings(env_file=args.env_file, overrides=_overrides(args), logger=logger)
    except BaseAppException as error:
        logger.error(
            f"설정 오류: {error}",
            metadata={
                "failure_kind": FailureKind.FATAL_STARTUP.value,
                "detail": error.detail.model_dump(mode="json"),
            },
        )
        return EXIT_FATAL_STARTUP

    try:
        chat_model = build_chat_model(settings, logger=logger)
        embedder = build_embedder(settings)
    except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
        logger.error(
            f"모델 클라이언트 생성 실패: {error}",
            metadata={
                "failure_kind": FailureKind.FATAL_STARTUP.value,
                "error_type": type(error).__name__,
            },
        )
        return EXIT_FATAL_STARTUP

    cancellation = CancellationToken()
    orchestrator = SeedingOrchestrator(
        connection=create_mongo_connection(settings, logger=logger),
        generator=RecordGenerator(chat_model, item_count=settings.pipeline.item_count, logger=logger),
        embedder=embedder,
        collection_name=settings.mongodb.collection,
        pipeline_settings=settings.pipeline,
        logger=logger,
        cancellation=cancellation,
    )
    previous = _install_signal_handlers(cancellation, logger)
    try:
        report = orchestrator.run()
    finally:
        _restore_signal_handlers(previous)
    return report.exit_code


def cli() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    cli()

# 실행: uv run python ingestion/seed_catalog.py --count 10 --batch-size 3

"""Load the knowledge-base document, chunk it, embed it and store it."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.container import ServiceContainer
from ...infrastructure.database.session import engine
from ...infrastructure.logging import get_logger
from ...modules.common.exceptions import DomainError
from ...modules.ingestion import DocumentChunker, IngestionError, IngestionReport, IngestionService

logger = get_logger(__name__)

TROUBLESHOOTING_TIPS: List[str] = [
    "Check that OPENAI_API_KEY is set and has available quota",
    "Check that DATABASE_URL (or the POSTGRES_* settings) points to a running database",
    "Run ragchat-setup-db to create the content_chunks table",
    "Check that the input file exists and is UTF-8 text",
]


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ragchat-ingest", description=__doc__)
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.INGEST_INPUT_PATH,
        help=f"UTF-8 text file to ingest (default: {settings.INGEST_INPUT_PATH})",
    )
    return parser


async def run_ingestion(
    path: str | Path, settings: Settings, container: Optional[ServiceContainer] = None
) -> IngestionReport:
    """Ingest ``path`` with the configured chunking and batching settings.

    When no container is given, one is built from ``settings`` and closed, along
    with the database engine, once the run ends.
    """
    owns_container = container is None
    if container is None:
        container = ServiceContainer(settings)

    try:
        service = IngestionService(
            container.chunk_store,
            container.embedding_provider,
            chunker=DocumentChunker(settings.INGEST_MAX_CHUNK_LENGTH, settings.INGEST_CHUNK_OVERLAP),
            batch_size=settings.INGEST_BATCH_SIZE,
            batch_pause_seconds=settings.INGEST_BATCH_PAUSE_SECONDS,
            on_progress=print,
        )
        return await service.ingest(path)
    finally:
        if owns_container:
            await container.aclose()
            await engine.dispose()


def _print_failure(message: str) -> None:
    print(f"❌ {message}", file=sys.stderr)
    print("\nTroubleshooting:", file=sys.stderr)
    for tip in TROUBLESHOOTING_TIPS:
        print(f"  - {tip}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None, container: Optional[ServiceContainer] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    try:
        report = asyncio.run(run_ingestion(args.path, settings, container))
    except IngestionError as e:
        _print_failure(str(e))
        print(
            f"\n{e.report.stored_chunks}/{e.report.total_chunks} chunks were stored before the failure "
            f"({e.report.completed_batches}/{e.report.total_batches} batches).",
            file=sys.stderr,
        )
        return 1
    except DomainError as e:
        _print_failure(e.message)
        return 1
    except OSError as e:
        _print_failure(f"Could not read {args.path}: {e.strerror or e}")
        return 1
    except UnicodeDecodeError as e:
        _print_failure(f"Could not read {args.path}: not valid UTF-8 text (byte {e.start}: {e.reason})")
        return 1

    print(f"✅ Stored {report.stored_chunks} chunks from {report.source}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

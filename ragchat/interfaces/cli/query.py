"""Run one knowledge-base search and print the ranked matches with scores."""

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.container import ServiceContainer
from ...infrastructure.database.session import engine
from ...modules.common.exceptions import DomainError
from ...modules.retrieval import RetrievalService
from ...modules.retrieval.schemas import ScoredSearchResultItem

DEFAULT_QUERY = "How can I change my billing information?"
PREVIEW_LENGTH = 200


def quality_label(score: float) -> str:
    """Rough verdict on how well the best match answers the query."""
    if score > 0.8:
        return "Excellent match"
    if score > 0.6:
        return "Good match"
    if score > 0.4:
        return "Moderate match"
    return "Low match, the knowledge base may not cover this question"


def format_results(query: str, results: Sequence[ScoredSearchResultItem]) -> str:
    lines = [f'Query: "{query}"', ""]
    if not results:
        lines.append("No results found. Has the knowledge base been ingested?")
        return "\n".join(lines)

    for item in results:
        preview = item.content if len(item.content) <= PREVIEW_LENGTH else item.content[:PREVIEW_LENGTH] + "..."
        lines.append(f"#{item.rank}  score {item.score:.4f} ({item.score * 100:.1f}%)  source: {item.source}")
        lines.append(f"    {preview}")
        lines.append("")

    lines.append(f"Best match: {quality_label(results[0].score)}")
    return "\n".join(lines)


async def run_query(
    query: str, settings: Settings, top_k: int, container: Optional[ServiceContainer] = None
) -> List[ScoredSearchResultItem]:
    owns_container = container is None
    if container is None:
        container = ServiceContainer(settings)

    try:
        service = RetrievalService(container.chunk_store, container.embedding_provider, top_k=top_k)
        return await service.search_scored(query)
    finally:
        if owns_container:
            await container.aclose()
            await engine.dispose()


def main(argv: Optional[Sequence[str]] = None, container: Optional[ServiceContainer] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="ragchat-query", description=__doc__)
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY, help=f'Search text (default: "{DEFAULT_QUERY}")')
    parser.add_argument("-k", "--top-k", type=int, default=settings.RETRIEVAL_TOP_K, help="Number of results")
    args = parser.parse_args(argv)

    try:
        results = asyncio.run(run_query(args.query, settings, args.top_k, container))
    except DomainError as e:
        print(f"❌ [{e.code}] {e.message}", file=sys.stderr)
        return 1

    print(format_results(args.query, results))
    return 0


if __name__ == "__main__":
    sys.exit(main())

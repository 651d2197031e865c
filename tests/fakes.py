"""Deterministic stand-ins for the embedding provider and streamed chat completions."""

import hashlib
from types import SimpleNamespace
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from ragchat.infrastructure.config.settings import get_settings
from ragchat.infrastructure.embedding.base import EmbeddingProvider

TEST_DIMENSION = get_settings().EMBEDDING_DIMENSION


def deterministic_embedding(text: str, dimension: int = TEST_DIMENSION) -> List[float]:
    """Same text, same vector; different texts are nearly orthogonal."""
    seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
    vector = np.random.default_rng(seed).standard_normal(dimension)
    return (vector / np.linalg.norm(vector)).tolist()


class FakeEmbeddingProvider(EmbeddingProvider):
    """Deterministic provider with call recording and failure injection.

    ``fail_on_call`` is 1-based: ``fail_on_call=2`` lets the first ``embed_texts``
    call succeed and raises ``error`` on the second.
    """

    model_name = "fake-embedding"

    def __init__(
        self,
        dimension: int = TEST_DIMENSION,
        error: Optional[Exception] = None,
        fail_on_call: Optional[int] = None,
    ):
        super().__init__(dimension)
        self.error = error
        self.fail_on_call = fail_on_call
        self.calls: List[List[str]] = []

    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        if self.error is not None and (self.fail_on_call is None or len(self.calls) == self.fail_on_call):
            raise self.error
        return [deterministic_embedding(text, self.dimension) for text in texts]


def text_chunk(text: str) -> Any:
    """One streamed completion chunk carrying a text delta."""
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text, tool_calls=None))])


def tool_call_chunk(index: int, call_id: Optional[str] = None, name: Optional[str] = None, arguments: str = "") -> Any:
    """One streamed completion chunk carrying a partial tool call."""
    tool_delta = SimpleNamespace(
        index=index,
        id=call_id,
        function=SimpleNamespace(name=name, arguments=arguments),
    )
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=None, tool_calls=[tool_delta]))])


async def stream_of(chunks: Iterable[Any]):
    for chunk in chunks:
        yield chunk

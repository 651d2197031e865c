"""Embedding provider running a sentence-transformers model in-process."""

import asyncio
from typing import List, Optional, Sequence, cast

from sentence_transformers import SentenceTransformer

from ...modules.common.exceptions import ConfigurationError
from .base import EmbeddingProvider


class LocalEmbeddingProvider(EmbeddingProvider):
    """Embeds text locally with sentence-transformers.

    The model is loaded lazily in a worker thread the first time it is needed,
    guarded by an asyncio lock so concurrent first requests load it once.
    Embeddings are L2-normalized. The model's native dimension must equal the
    configured ``EMBEDDING_DIMENSION``, otherwise its vectors would not fit the
    vector column.
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2", dimension: int = 768, batch_size: int = 32):
        super().__init__(dimension)
        self.model_name = model_name
        self.batch_size = batch_size
        self._model: Optional[SentenceTransformer] = None
        self._model_lock = asyncio.Lock()

    async def _get_model(self) -> SentenceTransformer:
        """Get model instance, loading it if necessary."""
        if self._model is None:
            async with self._model_lock:
                if self._model is None:
                    model = cast(SentenceTransformer, await asyncio.to_thread(SentenceTransformer, self.model_name))
                    native = model.get_sentence_embedding_dimension()
                    if native is not None and native != self.dimension:
                        raise ConfigurationError(
                            f"Local embedding model {self.model_name} produces {native}-dimensional vectors "
                            f"but EMBEDDING_DIMENSION is {self.dimension}"
                        )
                    self._model = model
        return self._model

    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        model = await self._get_model()

        embeddings = await asyncio.to_thread(
            model.encode,
            list(texts),
            convert_to_tensor=False,
            normalize_embeddings=True,
            batch_size=self.batch_size,
        )

        if hasattr(embeddings, "tolist"):
            result = cast(List[List[float]], embeddings.tolist())
        else:
            result = [emb.tolist() for emb in embeddings]

        self._check_dimensions(result)
        return result

    async def is_loaded(self) -> bool:
        return self._model is not None

"""Splits raw documents into bounded, overlapping chunks."""

import re
from typing import List

from langchain_text_splitters import RecursiveCharacterTextSplitter

PARAGRAPH_BREAK = re.compile(r"\r?\n\s*\r?\n")

# Oversized paragraphs have their whitespace folded to single spaces first, so only
# word boundaries and hard character cuts remain.
SPLIT_SEPARATORS = [" ", ""]


class DocumentChunker:
    """Paragraph-first chunker with recursive overflow splitting.

    The text is split on blank lines; each paragraph becomes one chunk when it
    fits ``max_chunk_length``. Longer paragraphs are packed greedily word by
    word (hard-cutting words that do not fit), and every piece after the first
    is prefixed with the last ``chunk_overlap`` characters of the piece before
    it, trimmed to a word boundary where the tail allows. No emitted chunk is
    longer than ``max_chunk_length``.
    """

    def __init__(self, max_chunk_length: int = 512, chunk_overlap: int = 50):
        if max_chunk_length <= 0:
            raise ValueError("max_chunk_length must be positive")
        if not 0 <= chunk_overlap < max_chunk_length:
            raise ValueError("chunk_overlap must be non-negative and smaller than max_chunk_length")

        self.max_chunk_length = max_chunk_length
        self.chunk_overlap = chunk_overlap
        # Room is reserved for the overlap prefix and the space that joins it.
        piece_length = max_chunk_length - chunk_overlap - 1 if chunk_overlap else max_chunk_length
        self._overflow_splitter = RecursiveCharacterTextSplitter(
            chunk_size=max(piece_length, 1),
            chunk_overlap=0,
            separators=SPLIT_SEPARATORS,
            length_function=len,
            strip_whitespace=True,
        )

    def split_paragraphs(self, text: str) -> List[str]:
        """Split on blank lines, trim, and drop empty paragraphs."""
        return [part.strip() for part in PARAGRAPH_BREAK.split(text) if part.strip()]

    def split(self, text: str) -> List[str]:
        """Return the document's chunks in document order."""
        chunks: List[str] = []
        for paragraph in self.split_paragraphs(text):
            if len(paragraph) <= self.max_chunk_length:
                chunks.append(paragraph)
            else:
                chunks.extend(self.split_oversized(paragraph))
        return chunks

    def split_oversized(self, paragraph: str) -> List[str]:
        """Split one paragraph longer than ``max_chunk_length`` into overlapping pieces."""
        folded = " ".join(paragraph.split())
        pieces = [piece for piece in self._overflow_splitter.split_text(folded) if piece]
        if not self.chunk_overlap:
            return pieces

        chunks: List[str] = []
        previous_start = previous_end = 0
        for index, piece in enumerate(pieces):
            start = folded.find(piece, previous_end)
            if start == -1:
                raise ValueError("split piece not found in its paragraph")
            end = start + len(piece)
            if index == 0:
                chunks.append(piece)
            else:
                chunks.append(folded[self._overlap_start(folded, previous_start, previous_end, end) : end])
            previous_start, previous_end = start, end
        return chunks

    def _overlap_start(self, folded: str, previous_start: int, previous_end: int, end: int) -> int:
        """Index where the next chunk begins: inside the tail of the previous piece."""
        overlap_start = max(previous_start, previous_end - self.chunk_overlap, end - self.max_chunk_length)
        overlap_start = min(overlap_start, previous_end - 1)
        if overlap_start > 0 and folded[overlap_start - 1] != " ":
            boundary = folded.find(" ", overlap_start, previous_end)
            if boundary != -1 and boundary + 1 < previous_end:
                overlap_start = boundary + 1
        return overlap_start

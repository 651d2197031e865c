"""Result types for ingestion runs."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class IngestionReport:
    """What an ingestion run produced.

    ``stored_ids`` lists chunk ids in document order. When a run aborts, the
    report is attached to the raised error and reflects only the batches that
    were committed before the failure.
    """

    source: str
    total_chunks: int = 0
    total_batches: int = 0
    completed_batches: int = 0
    stored_ids: List[int] = field(default_factory=list)

    @property
    def stored_chunks(self) -> int:
        return len(self.stored_ids)

    @property
    def complete(self) -> bool:
        return self.completed_batches == self.total_batches

"""Accumulation of crawled cases into numbered batch files."""
from dataclasses import dataclass, field
from typing import List, Tuple

from geipan.items import BatchItem

DEFAULT_THRESHOLD = 200


@dataclass(frozen=True)
class BatchState:
    index: int = 0
    cases: Tuple = field(default_factory=tuple)

    def to_item(self):
        return BatchItem(index=self.index, cases=list(self.cases))


def advance_batch(state: BatchState, page_cases, threshold: int = DEFAULT_THRESHOLD,
                  discard_on_flush: bool = False) -> Tuple[BatchState, List[BatchItem]]:
    """Append one page of cases and roll over once the batch exceeds ``threshold``.

    Returns the new state and the batches that must be written before the
    current one. With ``discard_on_flush`` the full batch is dropped on
    rollover instead of being written to its index.
    """
    cases = state.cases + tuple(page_cases)
    if len(cases) <= threshold:
        return BatchState(state.index, cases), []

    flushed = [] if discard_on_flush else [BatchItem(index=state.index, cases=list(cases))]
    return BatchState(state.index + 1), flushed

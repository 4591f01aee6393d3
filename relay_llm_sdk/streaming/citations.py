"""
Citation deduplication.

Some upstreams resend their whole citation list with every chunk. A
citation is new when its (source_id, start_index) pair was never seen;
each new one gets the next sequential index and a citation_delta /
citation_done pair.
"""

from typing import Iterable, List

from ..models.events import CitationDeltaEvent, CitationDoneEvent, StreamEvent
from ..models.generation import Citation
from .state import StreamAccumulatorState


def apply_citations(state: StreamAccumulatorState, citations: Iterable[Citation]) -> List[StreamEvent]:
    """Record unseen citations and return their event pairs."""
    state.ensure_open()
    events: List[StreamEvent] = []
    for citation in citations:
        key = (citation.source_id, citation.start_index)
        if key in state.citations_seen:
            continue
        state.citations_seen.add(key)
        index = len(state.citations)
        state.citations.append(citation)
        events.append(CitationDeltaEvent(index=index, citation=citation))
        events.append(CitationDoneEvent(index=index, citation=citation))
    return events

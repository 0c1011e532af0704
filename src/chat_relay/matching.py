from __future__ import annotations

from typing import Callable

from opentelemetry import trace

from .document_loader import DocumentLoader
from .schema import Candidate, Entry, Matched, MatchResult, NoMatch
from .similarity import normalize, similarity
from .tracing import (
    ATTR_CANDIDATE_LABEL,
    ATTR_CANDIDATE_SCORE,
    ATTR_INPUT_VALUE,
    ATTR_MATCH_MATCHED,
    ATTR_MATCH_SCORE,
    EVENT_CANDIDATE_PROMOTED,
    EVENT_CANDIDATE_SCORED,
)

DELIMITER = ":"
MATCH_THRESHOLD = 0.5

NO_MATCH_MESSAGE = "Sorry, I don't understand your request."
ERROR_MESSAGE = "There was an error processing your request."

Scorer = Callable[[str, str], float]


def split_header(line: str) -> Entry | None:
    """Split a header line at its first delimiter, or return None for continuation lines."""
    if DELIMITER not in line:
        return None
    label, _, value = line.partition(DELIMITER)
    return Entry(label=label.strip(), value=value.strip())


def segment(text: str) -> list[Entry]:
    """Split document text into entries, each keeping its own continuation lines.

    Lines before the first header are ignored. This is the plain per-entry
    view of a document; :func:`scan` does not use it for answer selection.

    Args:
        text: Raw document text with one ``label: value`` pair per header line.

    Returns:
        Entries in document order.
    """
    entries: list[Entry] = []
    for line in text.splitlines():
        entry = split_header(line)
        if entry is not None:
            entries.append(entry)
            continue
        piece = line.strip()
        if entries and piece:
            entries[-1].value = f"{entries[-1].value} {piece}".strip()
    return entries


def scan(
    text: str,
    query: str,
    scorer: Scorer = similarity,
    span: trace.Span = trace.INVALID_SPAN,
) -> Candidate | None:
    """Score every header label against the query and keep the best one.

    Continuation lines are appended to whichever entry is the best match at
    the moment they are read, including lines that follow a header which did
    not take the lead. A new leader only replaces the old one on a strictly
    higher score, so ties keep the earliest header.

    Args:
        text: Raw document text.
        query: Incoming chat message.
        scorer: Similarity function applied to normalized query and label.
        span: Span that receives ``candidate.scored`` and ``candidate.promoted`` events.

    Returns:
        The best candidate with its accumulated answer, or None when no
        header scored above zero.
    """
    target = normalize(query)
    best: Candidate | None = None
    parts: list[str] = []

    for line in text.splitlines():
        entry = split_header(line)
        if entry is None:
            piece = line.strip()
            if best is not None and piece:
                parts.append(piece)
            continue

        score = scorer(target, normalize(entry.label))
        span.add_event(
            EVENT_CANDIDATE_SCORED,
            {ATTR_CANDIDATE_LABEL: entry.label, ATTR_CANDIDATE_SCORE: score},
        )
        if score > (best.score if best is not None else 0.0):
            if best is not None:
                best.entry.value = " ".join(parts).strip()
            best = Candidate(entry=entry, score=score)
            parts = [entry.value]
            span.add_event(
                EVENT_CANDIDATE_PROMOTED,
                {ATTR_CANDIDATE_LABEL: entry.label, ATTR_CANDIDATE_SCORE: score},
            )

    if best is not None:
        best.entry.value = " ".join(parts).strip()
    return best


class MatchEngine:
    """Answer chat queries from a flat question/answer document."""

    def __init__(
        self,
        loader: DocumentLoader,
        scorer: Scorer = similarity,
        tracer: trace.Tracer | None = None,
        threshold: float = MATCH_THRESHOLD,
    ):
        """Wire the engine to its document source and scoring collaborators.

        Args:
            loader: Source of the raw document text, read on every query.
            scorer: Similarity function in ``[0, 1]``; Jaro-Winkler by default.
            tracer: Tracer receiving scan state; a no-op tracer when omitted.
            threshold: Best scores must be strictly above this to match.
        """
        self.loader = loader
        self.scorer = scorer
        self.tracer = tracer or trace.NoOpTracer()
        self.threshold = threshold

    def resolve(self, query: str) -> MatchResult:
        """Return the best answer for *query* or one of the default messages.

        Any failure while reading or scanning the document is reported as
        ``NoMatch(ERROR_MESSAGE)`` instead of being raised.
        """
        with self.tracer.start_as_current_span("match-engine.resolve") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            try:
                text = self.loader.extract_text()
                best = scan(text, query, scorer=self.scorer, span=span)
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                return NoMatch(ERROR_MESSAGE)

            score = best.score if best is not None else 0.0
            matched = best is not None and score > self.threshold
            span.set_attribute(ATTR_MATCH_SCORE, score)
            span.set_attribute(ATTR_MATCH_MATCHED, matched)
            if matched:
                return Matched(best.entry.value)
            return NoMatch(NO_MATCH_MESSAGE)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Entry:
    """Question/answer pair segmented from a document header line."""

    label: str
    value: str


@dataclass(slots=True)
class Candidate:
    """Scored entry tracked as the best match during a document scan."""

    entry: Entry
    score: float


@dataclass(frozen=True, slots=True)
class Matched:
    """Answer found above the match threshold."""

    value: str

    @property
    def reply(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NoMatch:
    """Default response used when no answer could be selected."""

    message: str

    @property
    def reply(self) -> str:
        return self.message


MatchResult = Matched | NoMatch

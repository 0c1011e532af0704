"""HTTP chat relay backed by a remote inference API or a local Q&A document."""

from .schema import Candidate, Entry, Matched, MatchResult, NoMatch

__all__ = ["Entry", "Candidate", "Matched", "NoMatch", "MatchResult"]

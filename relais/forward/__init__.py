"""Search-and-list and review-and-copy flows."""

from .engine import CopyRunResult, ForwardEngine, SearchOutcome

__all__ = ["CopyRunResult", "ForwardEngine", "SearchOutcome"]

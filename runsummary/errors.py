"""Exceptions raised by runsummary."""

from __future__ import annotations


class InvalidStateError(RuntimeError):
    """Raised on an illegal lifecycle transition or misuse of a run.

    Examples: finishing a node that was never started, skipping a node that
    already started, finishing a run twice, or adding to a sealed plan.
    """

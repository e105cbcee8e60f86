"""Run summary snapshot types and their text rendering."""

from __future__ import annotations

from runsummary.results.render import (
    describe_identifier,
    render_failures,
    render_overview,
    write_failures,
    write_overview,
)
from runsummary.results.summary import Counters, FailureRecord, RunSummary

__all__ = [
    "Counters",
    "FailureRecord",
    "RunSummary",
    "describe_identifier",
    "render_failures",
    "render_overview",
    "write_failures",
    "write_overview",
]

"""Plain-text rendering of a `RunSummary`.

Two sections are produced:

- the overview: run duration followed by one bracketed row per counter,
  containers first, then tests, e.g. ``[         4 containers found      ]``;
- the failures: empty when nothing failed, otherwise a ``Failures (<n>):``
  header and, per failure, its description, its source and a
  ``=> <cause>`` line.

Rendering is pure and deterministic: the same summary always yields the same
text. The ``write_*`` helpers send the text to a caller-supplied sink and let
any I/O error propagate.
"""

from __future__ import annotations

from typing import List, Optional, TextIO, Tuple

from runsummary.config import SUMMARY_CONFIG, SummaryConfig
from runsummary.model.identifier import Identifier, NodeKind
from runsummary.model.outcome import describe_cause
from runsummary.model.plan import TestPlan
from runsummary.results.summary import Counters, RunSummary

#: Overview rows in display order as (label, Counters attribute).
OVERVIEW_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("found", "found"),
    ("skipped", "skipped"),
    ("started", "started"),
    ("aborted", "aborted"),
    ("successful", "succeeded"),
    ("failed", "failed"),
)


def render_overview(
    summary: RunSummary, config: Optional[SummaryConfig] = None
) -> str:
    """Render the duration line and the counter table.

    Every counter is printed even when zero.
    """
    cfg = config or SUMMARY_CONFIG
    lines = ["", f"Test run finished after {summary.duration_ms} ms"]
    for kind in (NodeKind.CONTAINER, NodeKind.TEST):
        lines.extend(_counter_rows(kind, summary.counters_for(kind), cfg))
    return "\n".join(lines) + "\n"


def _counter_rows(kind: NodeKind, counters: Counters, cfg: SummaryConfig) -> List[str]:
    return [
        cfg.overview_line(getattr(counters, attr), f"{kind.plural} {label}")
        for label, attr in OVERVIEW_FIELDS
    ]


def render_failures(
    summary: RunSummary, config: Optional[SummaryConfig] = None
) -> str:
    """Render the failures section, or an empty string when nothing failed."""
    if not summary.failures:
        return ""

    cfg = config or SUMMARY_CONFIG
    tab = cfg.indent
    double_tab = cfg.indent * 2

    lines = ["", f"Failures ({len(summary.failures)}):"]
    for failure in summary.failures:
        identifier = failure.identifier
        lines.append(f"{tab}{describe_identifier(identifier, summary.plan)}")
        if identifier.source is not None:
            lines.append(f"{double_tab}{identifier.source}")
        lines.append(f"{double_tab}=> {describe_cause(failure.cause)}")
    return "\n".join(lines) + "\n"


def describe_identifier(
    identifier: Identifier, plan: Optional[TestPlan] = None
) -> str:
    """Join the display names of the identifier's ancestors and itself with ``:``.

    Without a plan, or for an identifier outside it, only its own display name
    is used.
    """
    parts: List[str] = []
    if plan is not None and identifier in plan:
        parts = [ancestor.display_name for ancestor in plan.get_ancestors(identifier)]
    parts.append(identifier.display_name)
    return ":".join(parts)


def write_overview(
    summary: RunSummary, sink: TextIO, config: Optional[SummaryConfig] = None
) -> None:
    """Write :func:`render_overview` output to ``sink``."""
    sink.write(render_overview(summary, config))
    sink.flush()


def write_failures(
    summary: RunSummary, sink: TextIO, config: Optional[SummaryConfig] = None
) -> None:
    """Write :func:`render_failures` output to ``sink``. Writes nothing when
    there are no failures."""
    text = render_failures(summary, config)
    if text:
        sink.write(text)
        sink.flush()

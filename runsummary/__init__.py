"""runsummary: execution-result aggregation for hierarchical test plans.

runsummary listens to the lifecycle events of a test plan run (skip, start,
finish with an outcome), keeps per-kind counters and the ordered list of
failures, and renders them as a deterministic plain-text report.

Primary API:
    TestPlan, Identifier, NodeKind - the plan tree being executed
    Outcome - how a started node finished
    SummaryAggregator - single-run listener producing a RunSummary
    render_overview(), render_failures() - text rendering of a RunSummary

Example:
    from runsummary import Identifier, Outcome, SummaryAggregator, TestPlan
    from runsummary import render_failures, render_overview

    test = Identifier.test("t1", "test_addition")
    plan = TestPlan.from_identifiers([test])

    aggregator = SummaryAggregator()
    aggregator.run_started(plan)
    aggregator.execution_started(test)
    aggregator.execution_finished(test, Outcome.failed(AssertionError("1 != 2")))
    aggregator.run_finished(plan)

    summary = aggregator.snapshot()
    print(render_overview(summary) + render_failures(summary))
"""

from __future__ import annotations

from runsummary import cli, logging
from runsummary._version import __version__
from runsummary.config import SUMMARY_CONFIG, SummaryConfig
from runsummary.dsl.loader import load_run_file, load_run_yaml
from runsummary.errors import InvalidStateError
from runsummary.exec.aggregator import NodeStatus, SummaryAggregator
from runsummary.exec.listener import ExecutionListener, LoggingListener
from runsummary.exec.replay import RecordedRun, RunEvent, replay, summarize_run
from runsummary.model.identifier import Identifier, NodeKind
from runsummary.model.outcome import (
    Outcome,
    OutcomeStatus,
    RecordedCause,
    describe_cause,
)
from runsummary.model.plan import TestPlan
from runsummary.model.source import ClassSource, FileSource, MethodSource
from runsummary.results.render import (
    render_failures,
    render_overview,
    write_failures,
    write_overview,
)
from runsummary.results.summary import Counters, FailureRecord, RunSummary

__all__ = [
    # Version
    "__version__",
    # Model
    "TestPlan",
    "Identifier",
    "NodeKind",
    "ClassSource",
    "MethodSource",
    "FileSource",
    "Outcome",
    "OutcomeStatus",
    "RecordedCause",
    "describe_cause",
    # Aggregation
    "ExecutionListener",
    "LoggingListener",
    "SummaryAggregator",
    "NodeStatus",
    "InvalidStateError",
    # Results
    "Counters",
    "FailureRecord",
    "RunSummary",
    "render_overview",
    "render_failures",
    "write_overview",
    "write_failures",
    # Recorded runs
    "RecordedRun",
    "RunEvent",
    "load_run_yaml",
    "load_run_file",
    "replay",
    "summarize_run",
    # Configuration
    "SummaryConfig",
    "SUMMARY_CONFIG",
    # Utilities
    "cli",
    "logging",
]

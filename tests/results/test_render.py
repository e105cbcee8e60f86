"""Tests for overview and failures rendering."""

from __future__ import annotations

import io

import pytest

from runsummary.config import SummaryConfig
from runsummary.exec.aggregator import SummaryAggregator
from runsummary.model.identifier import Identifier
from runsummary.model.outcome import Outcome
from runsummary.model.plan import TestPlan
from runsummary.model.source import ClassSource
from runsummary.results.render import (
    describe_identifier,
    render_failures,
    render_overview,
    write_failures,
    write_overview,
)
from runsummary.results.summary import Counters, RunSummary

LABELS = ("found", "skipped", "started", "aborted", "successful", "failed")


def _empty_summary(clock) -> RunSummary:
    plan = TestPlan()
    aggregator = SummaryAggregator(clock=clock)
    aggregator.run_started(plan)
    aggregator.run_finished(plan)
    return aggregator.snapshot()


def test_empty_report(clock) -> None:
    summary = _empty_summary(clock)
    overview = render_overview(summary)

    assert "Test run finished after 0 ms" in overview
    for kind in ("containers", "tests"):
        for label in LABELS:
            assert f"0 {kind} {label}" in overview
    assert render_failures(summary) == ""


def test_overview_exact_layout(clock) -> None:
    summary = _empty_summary(clock)
    lines = render_overview(summary).splitlines()

    assert lines[0] == ""
    assert lines[1] == "Test run finished after 0 ms"
    assert lines[2] == "[         0 containers found      ]"
    assert lines[6] == "[         0 containers successful ]"
    assert lines[8] == "[         0 tests found           ]"
    assert lines[13] == "[         0 tests failed          ]"
    assert len(lines) == 14


def test_reporting_correct_counts(flat_plan, containers, tests, clock) -> None:
    aggregator = SummaryAggregator(clock=clock)
    aggregator.run_started(flat_plan)
    aggregator.execution_skipped(containers[3], "skipped")
    aggregator.execution_skipped(tests[3], "skipped")
    for items in (containers, tests):
        successful, failed, aborted = items[:3]
        aggregator.execution_started(successful)
        aggregator.execution_finished(successful, Outcome.successful())
        aggregator.execution_started(failed)
        aggregator.execution_finished(failed, Outcome.failed(RuntimeError("failed")))
        aggregator.execution_started(aborted)
        aggregator.execution_finished(
            aborted, Outcome.aborted(RuntimeError("aborted"))
        )
    clock.advance(0.5)
    aggregator.run_finished(flat_plan)

    overview = render_overview(aggregator.snapshot())
    assert "Test run finished after 500 ms" in overview
    for kind in ("containers", "tests"):
        assert f"4 {kind} found" in overview
        assert f"1 {kind} skipped" in overview
        assert f"3 {kind} started" in overview
        assert f"1 {kind} aborted" in overview
        assert f"1 {kind} successful" in overview
        assert f"1 {kind} failed" in overview


def test_reporting_correct_failures(clock) -> None:
    failed_exception = RuntimeError("failed")
    failed = Identifier.test(
        "[root:2]", "failingTest", source=ClassSource.from_class(object)
    )
    aborted = Identifier.test("[root:3]", "abortedTest")

    aggregator = SummaryAggregator(clock=clock)
    plan = TestPlan()
    aggregator.run_started(plan)
    aggregator.execution_started(failed)
    aggregator.execution_finished(failed, Outcome.failed(failed_exception))
    aggregator.execution_started(aborted)
    aggregator.execution_finished(aborted, Outcome.aborted(RuntimeError("aborted")))
    aggregator.run_finished(plan)

    summary = aggregator.snapshot()
    # An aborted test is not a failure
    assert summary.tests.failed == 1

    failures = render_failures(summary)
    assert "Failures (1)" in failures
    assert "builtins.object" in failures
    assert "failingTest" in failures
    assert "=> RuntimeError: failed" in failures
    assert "abortedTest" not in failures


def test_failures_exact_layout_with_ancestry() -> None:
    suite = Identifier.container("suite", "CalculatorTests")
    test = Identifier.test(
        "suite/div",
        "test_divide",
        parent_id="suite",
        source=ClassSource("demo.CalculatorTests"),
    )
    bare = Identifier.test("suite/bare", "test_bare", parent_id="suite")
    plan = TestPlan.from_identifiers([suite, test, bare])
    aggregator = SummaryAggregator()
    aggregator.run_started(plan)
    for node in (test, bare):
        aggregator.execution_started(node)
    aggregator.execution_finished(
        test, Outcome.failed(ZeroDivisionError("division by zero"))
    )
    aggregator.execution_finished(bare, Outcome.failed())

    assert render_failures(aggregator.snapshot()) == (
        "\n"
        "Failures (2):\n"
        "  CalculatorTests:test_divide\n"
        "    ClassSource [className = 'demo.CalculatorTests']\n"
        "    => ZeroDivisionError: division by zero\n"
        "  CalculatorTests:test_bare\n"
        "    => <no cause>\n"
    )


def test_rendering_is_idempotent(flat_plan, tests, clock) -> None:
    aggregator = SummaryAggregator(clock=clock)
    aggregator.run_started(flat_plan)
    aggregator.execution_started(tests[0])
    aggregator.execution_finished(tests[0], Outcome.failed(AssertionError("x")))
    clock.advance(3)
    aggregator.run_finished(flat_plan)
    summary = aggregator.snapshot()

    assert render_overview(summary) == render_overview(summary)
    assert render_failures(summary) == render_failures(summary)


def test_describe_identifier_without_plan_uses_display_name() -> None:
    test = Identifier.test("x/t", "test_x", parent_id="x")
    assert describe_identifier(test) == "test_x"
    assert describe_identifier(test, TestPlan()) == "test_x"


def test_custom_config_changes_widths_and_indent() -> None:
    summary = RunSummary(
        time_started=0.0,
        time_finished=0.0,
        tests=Counters(found=1, started=1, failed=1),
        failures=(),
    )
    config = SummaryConfig(count_width=3, label_width=12, indent="\t")
    lines = render_overview(summary, config).splitlines()
    assert "[  1 tests found  ]" in lines


def test_write_helpers_write_to_sink() -> None:
    summary = RunSummary(time_started=0.0, time_finished=0.0)
    sink = io.StringIO()
    write_overview(summary, sink)
    write_failures(summary, sink)
    assert sink.getvalue() == render_overview(summary)


def test_sink_errors_propagate() -> None:
    sink = io.StringIO()
    sink.close()
    with pytest.raises(ValueError):
        write_overview(RunSummary(), sink)

"""Listener protocol for test plan execution events.

A runner calls ``run_started`` once, then per-node ``execution_skipped``,
``execution_started`` and ``execution_finished`` in tree visitation order, then
``run_finished`` once. `ExecutionListener` provides no-op hooks so listeners
override only what they need.
"""

from __future__ import annotations

import logging

from runsummary.logging import get_logger
from runsummary.model.identifier import Identifier
from runsummary.model.outcome import Outcome, OutcomeStatus, describe_cause
from runsummary.model.plan import TestPlan


class ExecutionListener:
    """Receives lifecycle events of a test plan execution."""

    def run_started(self, plan: TestPlan) -> None:
        """Called once before any node event."""

    def run_finished(self, plan: TestPlan) -> None:
        """Called once after every node event."""

    def execution_skipped(self, identifier: Identifier, reason: str) -> None:
        """Called when a node is skipped without being started."""

    def execution_started(self, identifier: Identifier) -> None:
        """Called when a node starts executing."""

    def execution_finished(self, identifier: Identifier, outcome: Outcome) -> None:
        """Called when a started node finishes with ``outcome``."""


class LoggingListener(ExecutionListener):
    """Logs every event through the package logger.

    Node events log at ``level``; failed and aborted outcomes include their
    cause, skipped nodes their reason.
    """

    def __init__(self, level: int = logging.DEBUG, logger_name: str = __name__):
        self.level = level
        self.logger = get_logger(logger_name)

    def run_started(self, plan: TestPlan) -> None:
        counts = ", ".join(
            f"{n} {kind.plural}" for kind, n in plan.count_by_kind().items()
        )
        self.logger.info(f"Test run started: {len(plan)} identifiers ({counts})")

    def run_finished(self, plan: TestPlan) -> None:
        self.logger.info("Test run finished")

    def execution_skipped(self, identifier: Identifier, reason: str) -> None:
        self.logger.log(self.level, f"Skipped {identifier.display_name}: {reason}")

    def execution_started(self, identifier: Identifier) -> None:
        self.logger.log(self.level, f"Started {identifier.display_name}")

    def execution_finished(self, identifier: Identifier, outcome: Outcome) -> None:
        status = outcome.status.name.lower()
        if outcome.status is OutcomeStatus.SUCCESSFUL:
            self.logger.log(self.level, f"Finished {identifier.display_name}: {status}")
            return
        self.logger.log(
            self.level,
            f"Finished {identifier.display_name}: {status}"
            f" => {describe_cause(outcome.cause)}",
        )

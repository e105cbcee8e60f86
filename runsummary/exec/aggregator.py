"""Execution aggregator: turns lifecycle events into counters and failures.

`SummaryAggregator` is a single-run listener. Each node moves through

    REGISTERED -> SKIPPED
    REGISTERED -> STARTED -> FINISHED

and is counted exactly once per transition. Any other transition raises
`InvalidStateError` before touching counters, so a rejected event never changes
the summary. Transitions and snapshots are serialized by one lock, making the
aggregator safe to feed from parallel executor threads.

Run-level decisions:
  - ``run_started`` may be called once per aggregator; a finished aggregator
    is never restarted (create a new one per run).
  - ``run_finished`` fails fast when the run is not in progress, including a
    second call.
  - Node events outside a run in progress fail fast.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from runsummary.config import SUMMARY_CONFIG, SummaryConfig
from runsummary.errors import InvalidStateError
from runsummary.exec.listener import ExecutionListener
from runsummary.logging import get_logger
from runsummary.model.identifier import Identifier, NodeKind
from runsummary.model.outcome import Outcome, OutcomeStatus
from runsummary.model.plan import TestPlan
from runsummary.results.summary import Counters, FailureRecord, RunSummary

logger = get_logger(__name__)


class NodeStatus(IntEnum):
    """Lifecycle status of one node within a run."""

    REGISTERED = 1
    SKIPPED = 2
    STARTED = 3
    FINISHED = 4


@dataclass(frozen=True)
class NodeRecord:
    """Status of a node that has received at least one event."""

    status: NodeStatus
    outcome: Optional[Outcome] = None


# Counters attribute incremented for each finish status
_OUTCOME_FIELDS: Dict[OutcomeStatus, str] = {
    OutcomeStatus.SUCCESSFUL: "succeeded",
    OutcomeStatus.ABORTED: "aborted",
    OutcomeStatus.FAILED: "failed",
}


class SummaryAggregator(ExecutionListener):
    """Listener that aggregates one run into a `RunSummary`.

    Example:
        >>> aggregator = SummaryAggregator()
        >>> aggregator.run_started(plan)
        >>> aggregator.execution_started(test)
        >>> aggregator.execution_finished(test, Outcome.successful())
        >>> aggregator.run_finished(plan)
        >>> aggregator.snapshot().tests.succeeded
        1
    """

    def __init__(
        self,
        config: Optional[SummaryConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize an aggregator for a single run.

        Args:
            config: Aggregation settings (defaults to ``SUMMARY_CONFIG``).
            clock: Wall-clock source in seconds since the epoch.
        """
        self.config = config or SUMMARY_CONFIG
        self._clock = clock
        self._lock = threading.Lock()

        self._plan: Optional[TestPlan] = None
        self._time_started: Optional[float] = None
        self._time_finished: Optional[float] = None

        self._counters: Dict[NodeKind, Counters] = {
            kind: Counters() for kind in NodeKind
        }
        self._records: Dict[str, NodeRecord] = {}
        self._failures: List[FailureRecord] = []

    #
    # Run events
    #
    def run_started(self, plan: TestPlan) -> None:
        with self._lock:
            if self._time_started is not None:
                raise InvalidStateError(
                    "run_started called twice; use a new aggregator per run."
                )
            plan.seal()
            found = plan.count_by_kind()
            for kind in NodeKind:
                self._counters[kind] = replace(self._counters[kind], found=found[kind])
            self._plan = plan
            self._time_started = self._clock()
        logger.debug(
            f"Run started: {found[NodeKind.CONTAINER]} containers, "
            f"{found[NodeKind.TEST]} tests found"
        )

    def run_finished(self, plan: TestPlan) -> None:
        with self._lock:
            self._require_running("run_finished")
            if plan is not self._plan:
                raise InvalidStateError(
                    "run_finished called with a different plan than run_started."
                )
            self._time_finished = self._clock()
            elapsed = self._time_finished - self._time_started  # type: ignore[operator]
        logger.debug(f"Run finished after {elapsed:.3f}s")

    #
    # Node events
    #
    def execution_skipped(self, identifier: Identifier, reason: str) -> None:
        with self._lock:
            self._require_running("execution_skipped")
            self._transition(identifier, NodeStatus.SKIPPED)
            self._increment(identifier.kind, "skipped")
        logger.debug(f"Skipped '{identifier.unique_id}': {reason}")

    def execution_started(self, identifier: Identifier) -> None:
        with self._lock:
            self._require_running("execution_started")
            self._transition(identifier, NodeStatus.STARTED)
            self._increment(identifier.kind, "started")
        logger.debug(f"Started '{identifier.unique_id}'")

    def execution_finished(self, identifier: Identifier, outcome: Outcome) -> None:
        if not isinstance(outcome, Outcome):
            raise TypeError(
                f"execution_finished expects an Outcome for "
                f"'{identifier.unique_id}', got {type(outcome).__name__}"
            )
        field_name = _OUTCOME_FIELDS[outcome.status]
        with self._lock:
            self._require_running("execution_finished")
            self._transition(identifier, NodeStatus.FINISHED, outcome)
            self._increment(identifier.kind, field_name)
            if outcome.status is OutcomeStatus.FAILED:
                self._failures.append(FailureRecord(identifier, outcome.cause))
        logger.debug(
            f"Finished '{identifier.unique_id}': {outcome.status.name.lower()}"
        )

    #
    # Queries
    #
    def snapshot(self) -> RunSummary:
        """Return a consistent read-only view of the current state.

        Safe to call mid-run; counts are then partial.
        """
        with self._lock:
            return RunSummary(
                time_started=self._time_started,
                time_finished=self._time_finished,
                containers=self._counters[NodeKind.CONTAINER],
                tests=self._counters[NodeKind.TEST],
                failures=tuple(self._failures),
                plan=self._plan,
            )

    def status_of(self, identifier: Identifier) -> NodeStatus:
        """Return the lifecycle status of ``identifier`` in this run."""
        with self._lock:
            record = self._records.get(identifier.unique_id)
        return record.status if record is not None else NodeStatus.REGISTERED

    @property
    def finished(self) -> bool:
        return self._time_finished is not None

    #
    # Internals (callers hold the lock)
    #
    def _require_running(self, operation: str) -> None:
        if self._time_started is None:
            raise InvalidStateError(f"{operation} called before run_started.")
        if self._time_finished is not None:
            raise InvalidStateError(f"{operation} called after run_finished.")

    def _transition(
        self,
        identifier: Identifier,
        target: NodeStatus,
        outcome: Optional[Outcome] = None,
    ) -> None:
        """Validate and record a transition. Raises before any mutation."""
        member = None
        if self._plan is not None:
            member = self._plan.get(identifier.unique_id)
        if member is None and self.config.strict_plan_membership:
            raise InvalidStateError(
                f"Identifier '{identifier.unique_id}' is not part of the test plan."
            )
        if member is not None and member.kind is not identifier.kind:
            raise InvalidStateError(
                f"Identifier '{identifier.unique_id}' is a {member.kind.name} in "
                f"the test plan but was reported as a {identifier.kind.name}."
            )

        record = self._records.get(identifier.unique_id)
        current = record.status if record is not None else NodeStatus.REGISTERED
        if target is NodeStatus.FINISHED:
            allowed = NodeStatus.STARTED
        else:
            allowed = NodeStatus.REGISTERED
        if current is not allowed:
            raise InvalidStateError(
                f"Illegal transition for '{identifier.unique_id}': "
                f"{current.name} -> {target.name}"
            )
        self._records[identifier.unique_id] = NodeRecord(target, outcome)

    def _increment(self, kind: NodeKind, attr: str) -> None:
        counters = self._counters[kind]
        self._counters[kind] = replace(counters, **{attr: getattr(counters, attr) + 1})

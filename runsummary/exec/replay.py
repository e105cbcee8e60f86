"""Replay a recorded run through execution listeners.

A `RecordedRun` pairs a plan with its ordered event log. `replay` drives the
full lifecycle (run start, each event, run finish) through every listener in
order; `summarize_run` does so with a fresh `SummaryAggregator` and returns its
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, cast

from runsummary.config import SummaryConfig
from runsummary.exec.aggregator import SummaryAggregator
from runsummary.exec.listener import ExecutionListener
from runsummary.logging import get_logger
from runsummary.model.identifier import Identifier
from runsummary.model.outcome import Outcome
from runsummary.model.plan import TestPlan
from runsummary.results.summary import RunSummary

logger = get_logger(__name__)


class EventType(str, Enum):
    """Per-node event kinds of a recorded run."""

    SKIPPED = "skipped"
    STARTED = "started"
    FINISHED = "finished"


@dataclass(frozen=True)
class RunEvent:
    """One per-node event of a recorded run.

    Attributes:
        type: Event kind.
        identifier: Node the event refers to.
        reason: Skip reason (``skipped`` events only).
        outcome: Finish outcome (``finished`` events only).
    """

    type: EventType
    identifier: Identifier
    reason: str = ""
    outcome: Optional[Outcome] = None

    def __post_init__(self) -> None:
        if self.type is EventType.FINISHED and self.outcome is None:
            raise ValueError(
                f"Finished event for '{self.identifier.unique_id}' has no outcome"
            )

    def dispatch(self, listener: ExecutionListener) -> None:
        """Deliver this event to ``listener``."""
        if self.type is EventType.SKIPPED:
            listener.execution_skipped(self.identifier, self.reason)
        elif self.type is EventType.STARTED:
            listener.execution_started(self.identifier)
        else:
            listener.execution_finished(self.identifier, cast(Outcome, self.outcome))


@dataclass
class RecordedRun:
    """A test plan and the ordered events emitted while executing it."""

    plan: TestPlan
    events: List[RunEvent] = field(default_factory=list)


def replay(
    plan: TestPlan,
    events: Iterable[RunEvent],
    listeners: Sequence[ExecutionListener],
) -> None:
    """Drive a complete run through ``listeners``.

    Each event is delivered to every listener, in listener order, before the
    next event. Errors raised by a listener propagate and stop the replay.
    """
    for listener in listeners:
        listener.run_started(plan)
    count = 0
    for event in events:
        for listener in listeners:
            event.dispatch(listener)
        count += 1
    for listener in listeners:
        listener.run_finished(plan)
    logger.debug(f"Replayed {count} events through {len(listeners)} listener(s)")


def summarize_run(
    run: RecordedRun,
    listeners: Sequence[ExecutionListener] = (),
    config: Optional[SummaryConfig] = None,
) -> RunSummary:
    """Replay ``run`` through a new aggregator (plus ``listeners``) and return
    the final summary."""
    aggregator = SummaryAggregator(config)
    replay(run.plan, run.events, [aggregator, *listeners])
    return aggregator.snapshot()

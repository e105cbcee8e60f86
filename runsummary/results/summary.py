"""Point-in-time run summary produced by the aggregator.

`RunSummary` is an immutable snapshot: per-kind `Counters`, the ordered
`FailureRecord` list, run timestamps, and a reference to the (read-only) plan
so failures can be described by their ancestry. Export with
:meth:`RunSummary.to_dict`, which returns a JSON-safe structure with shape
``{time_started, time_finished, duration_ms, containers, tests, failures}``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from runsummary.model.identifier import Identifier, NodeKind
from runsummary.model.outcome import describe_cause
from runsummary.model.plan import TestPlan


@dataclass(frozen=True)
class Counters:
    """Lifecycle counters for one node kind.

    Attributes:
        found: Identifiers of this kind in the plan when the run started.
        skipped: Identifiers skipped.
        started: Identifiers started.
        aborted: Started identifiers that finished aborted.
        succeeded: Started identifiers that finished successfully.
        failed: Started identifiers that finished failed.
    """

    found: int = 0
    skipped: int = 0
    started: int = 0
    aborted: int = 0
    succeeded: int = 0
    failed: int = 0

    @property
    def finished(self) -> int:
        """Started identifiers that already finished with any outcome."""
        return self.succeeded + self.aborted + self.failed

    @property
    def pending(self) -> int:
        """Started identifiers still awaiting their finish event."""
        return self.started - self.finished

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class FailureRecord:
    """A node that finished with a FAILED outcome.

    Attributes:
        identifier: The failed node.
        cause: The outcome cause, unmodified.
    """

    identifier: Identifier
    cause: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier.to_dict(),
            "cause": describe_cause(self.cause),
        }


@dataclass(frozen=True)
class RunSummary:
    """Read-only view of a run's aggregated results.

    Timestamps are seconds since the epoch as returned by the aggregator's
    clock. ``time_finished`` is ``None`` until the run finished.
    """

    time_started: Optional[float] = None
    time_finished: Optional[float] = None
    containers: Counters = field(default_factory=Counters)
    tests: Counters = field(default_factory=Counters)
    failures: Tuple[FailureRecord, ...] = ()
    plan: Optional[TestPlan] = field(default=None, compare=False, repr=False)

    @property
    def duration_ms(self) -> int:
        """Whole milliseconds between start and finish, never negative.

        Zero while the run has not both started and finished.
        """
        if self.time_started is None or self.time_finished is None:
            return 0
        return max(0, int((self.time_finished - self.time_started) * 1000))

    def counters_for(self, kind: NodeKind) -> Counters:
        return self.containers if kind is NodeKind.CONTAINER else self.tests

    @property
    def total_failure_count(self) -> int:
        return self.containers.failed + self.tests.failed

    @property
    def has_failures(self) -> bool:
        return self.total_failure_count > 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe representation of the summary."""
        return {
            "time_started": self.time_started,
            "time_finished": self.time_finished,
            "duration_ms": self.duration_ms,
            "containers": self.containers.to_dict(),
            "tests": self.tests.to_dict(),
            "failures": [failure.to_dict() for failure in self.failures],
        }

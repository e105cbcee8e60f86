"""Execution outcomes reported for finished nodes, and their causes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


class OutcomeStatus(IntEnum):
    """Closed set of finish statuses."""

    SUCCESSFUL = 1
    #: Execution started but was not completed, e.g. an assumption did not hold.
    #: Aborted nodes are never failures.
    ABORTED = 2
    FAILED = 3


@dataclass(frozen=True)
class RecordedCause:
    """Language-neutral error value carried by recorded runs.

    Renders as ``"<type_name>: <message>"``, or just ``type_name`` when the
    message is empty, matching how Python renders exceptions.
    """

    type_name: str
    message: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RecordedCause":
        return cls(_exception_type_name(exc), str(exc))

    def __str__(self) -> str:
        if self.message:
            return f"{self.type_name}: {self.message}"
        return self.type_name


def _exception_type_name(exc: BaseException) -> str:
    etype = type(exc)
    if etype.__module__ in ("builtins", "__main__"):
        return etype.__qualname__
    return f"{etype.__module__}.{etype.__qualname__}"


def describe_cause(cause: Any) -> str:
    """Return the display string of an outcome cause.

    Exceptions render the way the last line of a Python traceback does
    (``RuntimeError: failed``, module-qualified for non-builtin types). Any
    other value renders as ``str(cause)``.
    """
    if cause is None:
        return "<no cause>"
    if isinstance(cause, BaseException):
        return str(RecordedCause.from_exception(cause))
    return str(cause)


@dataclass(frozen=True)
class Outcome:
    """Outcome of a finished node.

    Use the ``successful``/``aborted``/``failed`` constructors.

    Attributes:
        status: Finish status.
        cause: Opaque error value (usually an exception) for non-successful
            outcomes. Never inspected, only stored and stringified for display.
    """

    status: OutcomeStatus
    cause: Optional[Any] = None

    def __post_init__(self) -> None:
        # Plain ints such as 3 become OutcomeStatus.FAILED; unknown values raise
        object.__setattr__(self, "status", OutcomeStatus(self.status))
        if self.status is OutcomeStatus.SUCCESSFUL and self.cause is not None:
            raise ValueError("A successful outcome cannot carry a cause")

    @classmethod
    def successful(cls) -> "Outcome":
        return cls(OutcomeStatus.SUCCESSFUL)

    @classmethod
    def aborted(cls, cause: Optional[Any] = None) -> "Outcome":
        return cls(OutcomeStatus.ABORTED, cause)

    @classmethod
    def failed(cls, cause: Optional[Any] = None) -> "Outcome":
        return cls(OutcomeStatus.FAILED, cause)

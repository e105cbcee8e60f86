"""Test plan model: identifiers, sources, outcomes and the plan tree."""

from __future__ import annotations

from runsummary.model.identifier import Identifier, NodeKind
from runsummary.model.outcome import (
    Outcome,
    OutcomeStatus,
    RecordedCause,
    describe_cause,
)
from runsummary.model.plan import TestPlan
from runsummary.model.source import (
    ClassSource,
    FileSource,
    MethodSource,
    TestSource,
    source_from_dict,
)

__all__ = [
    "ClassSource",
    "FileSource",
    "Identifier",
    "MethodSource",
    "NodeKind",
    "Outcome",
    "OutcomeStatus",
    "RecordedCause",
    "TestPlan",
    "TestSource",
    "describe_cause",
    "source_from_dict",
]

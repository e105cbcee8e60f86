"""YAML loader + schema validation for recorded runs.

A recorded run document has two top-level keys:

- ``plan``: identifiers listed parents-first, each with ``id``, ``kind``
  (``container`` or ``test``) and optional ``name``, ``parent`` and
  ``source``;
- ``events``: ordered per-node events, each with ``event`` (``skipped``,
  ``started`` or ``finished``) and ``id``; skipped events may carry a
  ``reason``, finished events an ``outcome`` and an optional
  ``cause: {type, message}``.

Identifier values (``id``, ``name``, ``parent``) and skip reasons are strings.
Unquoted scalars that YAML resolves to numbers or booleans (``id: 010``,
``id: yes``) are rejected; quote them (``id: "010"``).

Run start and finish are implicit around the event list.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml

from runsummary.exec.replay import EventType, RecordedRun, RunEvent
from runsummary.model.identifier import Identifier
from runsummary.model.outcome import Outcome, OutcomeStatus, RecordedCause
from runsummary.model.plan import TestPlan
from runsummary.utils.yaml_utils import require_string_scalars


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("runsummary.schemas")
            .joinpath("run.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged schema 'runsummary/schemas/run.json'."
        ) from exc


def load_run_yaml(yaml_str: str) -> RecordedRun:
    """Load, normalize and validate a recorded run YAML string.

    Args:
        yaml_str: YAML document text.

    Returns:
        The recorded run with its plan built and events resolved.

    Raises:
        ValueError: If the document is not a mapping, the plan is malformed, an
            identifier value is an unquoted number or boolean, or an event
            references an unknown identifier.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    plan_section = data.get("plan") or []
    events_section = data.get("events") or []
    if not isinstance(plan_section, list):
        raise ValueError("'plan' must be a list of identifiers")
    if not isinstance(events_section, list):
        raise ValueError("'events' must be a list")
    for entry in plan_section + events_section:
        if not isinstance(entry, dict):
            raise ValueError("Each plan and event entry must be a mapping")

    for index, entry in enumerate(plan_section):
        require_string_scalars(entry, ("id", "name", "parent"), f"Plan entry #{index}")
    for index, entry in enumerate(events_section):
        require_string_scalars(entry, ("id", "reason"), f"Event #{index}")

    data = {**data, "plan": plan_section, "events": events_section}
    jsonschema.validate(data, _load_schema())

    plan = TestPlan.from_identifiers(Identifier.from_dict(e) for e in data["plan"])
    events = [
        _parse_event(entry, plan, index)
        for index, entry in enumerate(data["events"])
    ]
    return RecordedRun(plan=plan, events=events)


def load_run_file(path: Union[str, Path]) -> RecordedRun:
    """Read and load a recorded run from ``path``."""
    return load_run_yaml(Path(path).read_text(encoding="utf-8"))


def _parse_event(entry: Dict[str, Any], plan: TestPlan, index: int) -> RunEvent:
    identifier = plan.get(entry["id"])
    if identifier is None:
        raise ValueError(
            f"Event #{index} references unknown identifier '{entry['id']}'"
        )

    event_type = EventType(entry["event"])
    if event_type is not EventType.FINISHED:
        if "outcome" in entry or "cause" in entry:
            raise ValueError(
                f"Event #{index} ({event_type.value}) cannot carry an outcome"
                " or cause"
            )
        return RunEvent(event_type, identifier, reason=entry.get("reason", ""))

    if "outcome" not in entry:
        raise ValueError(f"Event #{index} (finished) requires an 'outcome'")
    status = OutcomeStatus[entry["outcome"].upper()]
    cause = entry.get("cause")
    if status is OutcomeStatus.SUCCESSFUL:
        if cause is not None:
            raise ValueError(
                f"Event #{index}: a successful outcome cannot carry a cause"
            )
        outcome = Outcome.successful()
    else:
        recorded = (
            RecordedCause(cause["type"], cause.get("message", ""))
            if cause is not None
            else None
        )
        outcome = Outcome(status, recorded)
    return RunEvent(event_type, identifier, outcome=outcome)

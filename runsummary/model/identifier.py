"""Identifiers of the nodes (containers and tests) of a test plan."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from runsummary.model.source import TestSource, source_from_dict


class NodeKind(IntEnum):
    """Kind of a test plan node."""

    #: Groups other nodes, e.g. a test class or an engine root.
    CONTAINER = 1
    #: A single executable test.
    TEST = 2

    @property
    def plural(self) -> str:
        """Lowercase plural used in summaries ("containers", "tests")."""
        return "containers" if self is NodeKind.CONTAINER else "tests"

    @classmethod
    def from_string(cls, value: str) -> "NodeKind":
        """Parse a case-insensitive kind name.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ValueError(
                f"Invalid node kind '{value}'. Valid values are: {valid}"
            ) from None


@dataclass(frozen=True)
class Identifier:
    """Immutable identity and display metadata of one plan node.

    Attributes:
        unique_id: Opaque key, unique within a plan.
        display_name: Human-readable name shown in summaries.
        kind: Whether the node is a container or a test.
        source: Where the node is defined, if known.
        parent_id: Unique id of the parent node, ``None`` for roots.
    """

    unique_id: str
    display_name: str
    kind: NodeKind
    source: Optional[TestSource] = None
    parent_id: Optional[str] = None

    @classmethod
    def container(
        cls, unique_id: str, display_name: Optional[str] = None, **kwargs: Any
    ) -> "Identifier":
        """Shorthand for a container identifier (display name defaults to the id)."""
        return cls(unique_id, display_name or unique_id, NodeKind.CONTAINER, **kwargs)

    @classmethod
    def test(
        cls, unique_id: str, display_name: Optional[str] = None, **kwargs: Any
    ) -> "Identifier":
        """Shorthand for a test identifier (display name defaults to the id)."""
        return cls(unique_id, display_name or unique_id, NodeKind.TEST, **kwargs)

    @property
    def is_container(self) -> bool:
        return self.kind is NodeKind.CONTAINER

    @property
    def is_test(self) -> bool:
        return self.kind is NodeKind.TEST

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe representation."""
        return {
            "id": self.unique_id,
            "name": self.display_name,
            "kind": self.kind.name.lower(),
            "parent": self.parent_id,
            "source": self.source.to_dict() if self.source is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Identifier":
        """Build an identifier from a mapping with ``id``, ``kind`` and optional
        ``name``, ``parent`` and ``source`` keys."""
        source = data.get("source")
        return cls(
            unique_id=str(data["id"]),
            display_name=str(data.get("name") or data["id"]),
            kind=NodeKind.from_string(str(data["kind"])),
            source=source_from_dict(source) if source else None,
            parent_id=str(data["parent"]) if data.get("parent") is not None else None,
        )

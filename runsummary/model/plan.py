"""Test plan: the tree of identifiers a run executes.

`TestPlan` stores identifiers in insertion order and keeps the parent/child
structure in a `networkx.DiGraph` (edges point from parent to child). A plan is
built once before a run and sealed when the run starts; afterwards it is
read-only and may be shared across threads without synchronization.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

import networkx as nx

from runsummary.errors import InvalidStateError
from runsummary.model.identifier import Identifier, NodeKind

IdentifierRef = Union[Identifier, str]


class TestPlan:
    """Insertion-ordered registry of identifiers forming a forest.

    This class enforces:
      - No duplicate unique ids (raises ValueError).
      - Parents are added before their children (raises ValueError otherwise).
      - No additions once sealed (raises InvalidStateError).
    """

    # Keep pytest from collecting this class when imported into test modules
    __test__ = False

    def __init__(self) -> None:
        self._identifiers: Dict[str, Identifier] = {}
        self._graph = nx.DiGraph()
        self._sealed = False

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[Identifier]) -> "TestPlan":
        """Build a plan from identifiers listed parents-first."""
        plan = cls()
        for identifier in identifiers:
            plan.add(identifier)
        return plan

    #
    # Construction
    #
    def add(self, identifier: Identifier) -> None:
        """Add an identifier to the plan.

        Args:
            identifier: Identifier to add. Its ``parent_id``, when set, must
                already be present.

        Raises:
            InvalidStateError: If the plan is sealed.
            ValueError: On a duplicate id or an unknown parent.
        """
        if self._sealed:
            raise InvalidStateError(
                f"Cannot add '{identifier.unique_id}': test plan is sealed."
            )
        if identifier.unique_id in self._identifiers:
            raise ValueError(
                f"Identifier '{identifier.unique_id}' already exists in this plan."
            )
        parent_id = identifier.parent_id
        if parent_id is not None and parent_id not in self._identifiers:
            raise ValueError(
                f"Parent '{parent_id}' of '{identifier.unique_id}' is not in this plan."
            )
        self._identifiers[identifier.unique_id] = identifier
        self._graph.add_node(identifier.unique_id)
        if parent_id is not None:
            self._graph.add_edge(parent_id, identifier.unique_id)

    def seal(self) -> None:
        """Make the plan read-only. Idempotent."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    #
    # Registry access
    #
    def __len__(self) -> int:
        return len(self._identifiers)

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._identifiers.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Identifier):
            return self._identifiers.get(item.unique_id) == item
        return item in self._identifiers

    def get(self, unique_id: str) -> Optional[Identifier]:
        """Return the identifier registered under ``unique_id``, if any."""
        return self._identifiers.get(unique_id)

    def __getitem__(self, unique_id: str) -> Identifier:
        try:
            return self._identifiers[unique_id]
        except KeyError:
            raise KeyError(f"Identifier '{unique_id}' is not in this plan.") from None

    #
    # Tree queries
    #
    @property
    def roots(self) -> List[Identifier]:
        """Identifiers without a parent, in insertion order."""
        return [i for i in self._identifiers.values() if i.parent_id is None]

    def get_parent(self, ref: IdentifierRef) -> Optional[Identifier]:
        """Return the parent of ``ref`` if it is a known member of the plan."""
        unique_id = _unique_id(ref)
        if unique_id not in self._graph:
            return None
        parents = list(self._graph.predecessors(unique_id))
        return self._identifiers[parents[0]] if parents else None

    def get_children(self, ref: IdentifierRef) -> List[Identifier]:
        """Return the direct children of ``ref`` in insertion order."""
        unique_id = self._require(ref)
        return [self._identifiers[c] for c in self._graph.successors(unique_id)]

    def get_descendants(self, ref: IdentifierRef) -> List[Identifier]:
        """Return all descendants of ``ref`` in insertion order."""
        unique_id = self._require(ref)
        found = nx.descendants(self._graph, unique_id)
        return [i for uid, i in self._identifiers.items() if uid in found]

    def get_ancestors(self, ref: IdentifierRef) -> List[Identifier]:
        """Return the ancestors of ``ref`` from its root down to its parent."""
        chain: List[Identifier] = []
        parent = self.get_parent(ref)
        while parent is not None:
            chain.append(parent)
            parent = self.get_parent(parent)
        chain.reverse()
        return chain

    def count(self, predicate: Callable[[Identifier], bool]) -> int:
        """Count identifiers matching ``predicate``."""
        return sum(1 for i in self._identifiers.values() if predicate(i))

    def count_by_kind(self) -> Dict[NodeKind, int]:
        """Tally identifiers per kind in one scan. Every kind is present."""
        counts = {kind: 0 for kind in NodeKind}
        for identifier in self._identifiers.values():
            counts[identifier.kind] += 1
        return counts

    def contains_tests(self) -> bool:
        return any(i.is_test for i in self._identifiers.values())

    def _require(self, ref: IdentifierRef) -> str:
        unique_id = _unique_id(ref)
        if unique_id not in self._identifiers:
            raise KeyError(f"Identifier '{unique_id}' is not in this plan.")
        return unique_id


def _unique_id(ref: IdentifierRef) -> str:
    return ref.unique_id if isinstance(ref, Identifier) else ref

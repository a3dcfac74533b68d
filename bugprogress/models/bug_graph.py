"""
Bug Graph
=========
Read-only view over the id → Bug mapping produced by the graph builder.

Lookups of ids that were referenced but never fetched (restricted, deleted,
or beyond the depth limit) go through get_node(), which hands back a stub
instead of inserting a placeholder.
"""
from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, List

from bugprogress.models.bug import Bug


class BugGraph(Mapping):
    """Immutable mapping from bug id to Bug."""

    def __init__(self, nodes: Mapping[int, Bug]) -> None:
        self._nodes: Mapping[int, Bug] = MappingProxyType(dict(nodes))

    def __getitem__(self, bug_id: int) -> Bug:
        return self._nodes[bug_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def get_node(self, bug_id: int) -> Bug:
        """Return the fetched bug, or a stub when the id is unknown."""
        node = self._nodes.get(bug_id)
        if node is None:
            return Bug.make_stub(bug_id)
        return node

    def ordered_nodes(self) -> List[Bug]:
        """Nodes in ascending id order, the order the diagram lists them."""
        return [self._nodes[bug_id] for bug_id in sorted(self._nodes)]

    def to_dict(self) -> Dict[int, Bug]:
        return dict(self._nodes)

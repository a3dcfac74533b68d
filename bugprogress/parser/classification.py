"""
Classification
==============
Maps a bug and its dependency state to one of the diagram style classes.

States (values are the Mermaid class names used in the output):
    resolved, available, inprogress, blockedinprogress,
    blocked, unlandable, review, duplicate

Precedence:
    1. DUPLICATE resolution wins over everything, including RESOLVED
    2. RESOLVED / VERIFIED
    3. Nothing left to wait on (or leaf): review → inprogress → available
    4. Still waiting on open work:        unlandable → blockedinprogress → blocked

"Nothing left to wait on" is measured over the full transitive closure of
depends_on, ignoring duplicates and meta bugs: a bug whose every counted
dependency is closed is treated like a bug without dependencies.
"""
from dataclasses import dataclass
from typing import Dict, List

from bugprogress.models.bug import Bug
from bugprogress.models.bug_graph import BugGraph
from bugprogress.parser.status_predicates import (
    has_patch,
    is_assigned,
    is_closed,
    is_duplicate,
    is_meta_bug,
)


class State:
    """Bug state identifiers. Values double as Mermaid class names."""
    RESOLVED            = "resolved"
    AVAILABLE           = "available"
    IN_PROGRESS         = "inprogress"
    BLOCKED_IN_PROGRESS = "blockedinprogress"
    BLOCKED             = "blocked"
    UNLANDABLE          = "unlandable"
    REVIEW              = "review"
    DUPLICATE           = "duplicate"


# Style group order in the rendered output. "bugs" is the dashed-border
# group for open defects and is not a state.
STYLE_GROUPS: List[str] = [
    State.RESOLVED,
    State.AVAILABLE,
    State.IN_PROGRESS,
    State.BLOCKED_IN_PROGRESS,
    State.BLOCKED,
    State.UNLANDABLE,
    State.REVIEW,
    State.DUPLICATE,
    "bugs",
]


@dataclass(frozen=True)
class DependencyCounts:
    closed: int
    total: int

    @property
    def is_empty(self) -> bool:
        """True when no counted dependency is still open."""
        return self.total - self.closed == 0


@dataclass(frozen=True)
class NodeStatus:
    from_label: str
    to_label: str
    from_state: str


def classify(node: Bug, is_empty: bool, leaf: bool) -> str:
    """
    Return the State for `node`.

    Parameters
    ----------
    node : Bug
        The bug being classified.
    is_empty : bool
        True when the bug has no open dependencies left.
    leaf : bool
        True when the bug is rendered purely as a dependency target.
    """
    if is_duplicate(node):
        return State.DUPLICATE

    if is_closed(node):
        return State.RESOLVED

    if is_empty or leaf:
        if has_patch(node):
            return State.REVIEW
        if is_assigned(node):
            return State.IN_PROGRESS
        return State.AVAILABLE

    if has_patch(node):
        return State.UNLANDABLE
    if is_assigned(node):
        return State.BLOCKED_IN_PROGRESS
    return State.BLOCKED


def reachable_from(node: Bug, graph: BugGraph) -> List[Bug]:
    """
    Every bug reachable through depends_on from `node`, excluding `node`
    itself unless a cycle leads back to it. Unknown ids come back as stubs.
    """
    reachable: Dict[int, Bug] = {}
    work_list = list(node.depends_on)

    while work_list:
        child = work_list.pop()
        if child in reachable:
            continue
        child_node = graph.get_node(child)
        reachable[child] = child_node
        work_list.extend(child_node.depends_on)

    return list(reachable.values())


def dependency_counts(node: Bug, graph: BugGraph) -> DependencyCounts:
    """Closed vs. total transitive dependencies, skipping duplicates and meta bugs."""
    counted = [
        dep for dep in reachable_from(node, graph)
        if not is_duplicate(dep) and not is_meta_bug(dep)
    ]
    closed = [dep for dep in counted if is_closed(dep)]
    return DependencyCounts(closed=len(closed), total=len(counted))


def node_status(graph: BugGraph, from_node: Bug, to_node: Bug) -> NodeStatus:
    """
    Labels and state for one `to --> from` edge.

    The dependent side carries the closed/total count; the dependency side is
    only labelled when it has no dependencies of its own, flagged "unknown"
    when it was never fetched.
    """
    counts = dependency_counts(from_node, graph)
    from_label = f"[{from_node.id} {counts.closed}/{counts.total}]"

    to_label = ""
    if not to_node.depends_on:
        to_label = f"[{to_node.id} unknown]" if to_node.stub else f"[{to_node.id}]"

    from_state = classify(from_node, counts.is_empty, leaf=False)
    return NodeStatus(from_label=from_label, to_label=to_label, from_state=from_state)

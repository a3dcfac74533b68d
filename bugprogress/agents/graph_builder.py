"""
Graph Builder
=============
Discovers a bug's dependency graph by walking `depends_on` breadth-first.

Traversal:
    - The current level starts with a synthetic work item depending on the root.
    - Each work item costs at most one bulk fetch: its dependency ids that are
      not yet in the graph. Nothing already fetched is ever requested again.
    - Fetched records feed the next level. When the current level runs dry the
      next one takes its place and the depth counter goes up; once it passes
      max_depth the walk stops, even with work left.

max_depth bounds expansion depth, not node count: max_depth=0 fetches only
the root, max_depth=1 adds its direct dependencies, and so on. Ids referenced
past the limit stay out of the graph and render as stubs.

Data source errors are not caught here. The whole build aborts.
"""
import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Protocol

from bugprogress.core.config import MAX_DEPTH
from bugprogress.models.bug import Bug
from bugprogress.models.bug_graph import BugGraph

logger = logging.getLogger(__name__)


class BugSource(Protocol):
    async def fetch_bugs(self, ids: Iterable[int]) -> List[Bug]:
        ...


def unseen_ids(nodes: Dict[int, Bug], ids: Iterable[int]) -> List[int]:
    """Ids not yet in `nodes`, deduplicated, first occurrence order."""
    return list(dict.fromkeys(bug_id for bug_id in ids if bug_id not in nodes))


class GraphBuilder:
    """
    Builds a BugGraph from one root id against a bug source.
    """

    def __init__(self, source: BugSource, max_depth: int = MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        self.source = source
        self.max_depth = max_depth

    async def build(self, start: int) -> BugGraph:
        nodes: Dict[int, Bug] = {}
        work_list: Deque[Bug] = deque([Bug(id=0, depends_on=[start], stub=True)])
        next_work_list: Deque[Bug] = deque()
        depth = 0

        logger.info("Building dependency graph for bug %s (max_depth=%d)", start, self.max_depth)

        while work_list:
            current = work_list.pop()
            edges = unseen_ids(nodes, current.depends_on)
            if edges:
                new_nodes = await self.source.fetch_bugs(edges)
                logger.debug(
                    "Depth %d: bug %s requested %d, received %d",
                    depth, current.id, len(edges), len(new_nodes),
                )
                for node in new_nodes:
                    nodes[node.id] = node
                next_work_list.extend(new_nodes)

            if not work_list and next_work_list:
                work_list, next_work_list = next_work_list, deque()
                depth += 1
                logger.info("Level %d: %d bug(s) queued, %d known", depth, len(work_list), len(nodes))
                if depth > self.max_depth:
                    break

        logger.info("Dependency graph for bug %s complete: %d bug(s)", start, len(nodes))
        return BugGraph(nodes)

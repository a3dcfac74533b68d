"""
Progress Service
================
Builds the dependency graph for one bug and renders it as a diagram.

    fetch (GraphBuilder + BugzillaClient) → render (diagram_formatter)

No partial output: if the build fails nothing is rendered and the error
reaches the caller.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from bugprogress.agents.graph_builder import GraphBuilder
from bugprogress.core.config import MAX_DEPTH
from bugprogress.core.diagram_formatter import render
from bugprogress.models.bug_graph import BugGraph
from bugprogress.services.bugzilla_client import BugzillaClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressGraph:
    root: int
    graph: BugGraph
    diagram: str


async def create_graph(
    start: int,
    max_depth: int = MAX_DEPTH,
    filter_duplicates: bool = False,
    client: Optional[BugzillaClient] = None,
) -> ProgressGraph:
    """Fetch the dependency graph under `start` and render it."""
    client = client or BugzillaClient()
    builder = GraphBuilder(client, max_depth=max_depth)

    graph = await builder.build(start)
    diagram = render(graph, filter_duplicates=filter_duplicates, base_url=client.base_url)

    logger.info(
        "Rendered bug %s: %d node(s), filter_duplicates=%s",
        start, len(graph), filter_duplicates,
    )
    return ProgressGraph(root=start, graph=graph, diagram=diagram)

"""
GET /graph/{bug_id}, GET /api/graph/{bug_id}
=============================================
Builds the dependency graph under a bug and returns the Mermaid diagram,
either as plain text (for the page's mermaid.render call) or wrapped in JSON.

Query parameters:
    max_depth          — traversal depth, 0..MAX_DEPTH_LIMIT (default MAX_DEPTH)
    filter_duplicates  — move duplicate bugs into their own subgraph

Errors:
    502 — Bugzilla unreachable, returned an error status or an error payload
    504 — build exceeded GRAPH_BUILD_TIMEOUT
"""
import asyncio
import logging

import httpx
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from bugprogress.core.config import GRAPH_BUILD_TIMEOUT, MAX_DEPTH, MAX_DEPTH_LIMIT
from bugprogress.services.bugzilla_client import BugzillaAPIError
from bugprogress.services.progress_service import ProgressGraph, create_graph

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Graph"])


class GraphResponse(BaseModel):
    root: int
    max_depth: int
    filter_duplicates: bool
    node_count: int
    diagram: str


async def _build(bug_id: int, max_depth: int, filter_duplicates: bool) -> ProgressGraph:
    try:
        return await asyncio.wait_for(
            create_graph(bug_id, max_depth=max_depth, filter_duplicates=filter_duplicates),
            timeout=GRAPH_BUILD_TIMEOUT,
        )
    except asyncio.TimeoutError:
        logger.warning("Graph build for bug %s timed out after %.0fs", bug_id, GRAPH_BUILD_TIMEOUT)
        raise HTTPException(status_code=504, detail="Timed out fetching bug data")
    except (httpx.HTTPError, BugzillaAPIError, ValueError) as exc:
        logger.error("Graph build for bug %s failed: %s", bug_id, exc)
        raise HTTPException(status_code=502, detail=f"Bugzilla request failed: {exc}")


@router.get("/graph/{bug_id}", response_class=PlainTextResponse)
async def get_graph_text(
    bug_id: int,
    max_depth: int = Query(MAX_DEPTH, ge=0, le=MAX_DEPTH_LIMIT),
    filter_duplicates: bool = False,
):
    result = await _build(bug_id, max_depth, filter_duplicates)
    return PlainTextResponse(result.diagram)


@router.get("/api/graph/{bug_id}", response_model=GraphResponse)
async def get_graph(
    bug_id: int,
    max_depth: int = Query(MAX_DEPTH, ge=0, le=MAX_DEPTH_LIMIT),
    filter_duplicates: bool = False,
):
    result = await _build(bug_id, max_depth, filter_duplicates)
    return GraphResponse(
        root=result.root,
        max_depth=max_depth,
        filter_duplicates=filter_duplicates,
        node_count=len(result.graph),
        diagram=result.diagram,
    )

"""
Bugzilla Client
===============
Bug data source for the graph builder. Fetches bug records in bulk from the
Bugzilla REST API:

    GET {base}rest/bug?id=1,2,3&include_fields=id,blocks,depends_on,...

Failure policy:
    - No retries. HTTP error statuses raise httpx.HTTPStatusError.
    - A Bugzilla error payload ({"error": true, ...}) raises BugzillaAPIError.
    - Network errors and timeouts propagate as httpx exceptions.
    - Bugs the caller may not see are simply absent from the "bugs" array.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urljoin

import httpx

from bugprogress.core.config import BUGZILLA_API_KEY, BUGZILLA_BASE_URL, BUGZILLA_TIMEOUT
from bugprogress.core.constants import INCLUDE_FIELDS
from bugprogress.models.bug import Bug

logger = logging.getLogger(__name__)


class BugzillaAPIError(Exception):
    """Bugzilla answered with an error document instead of data."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


class BugzillaClient:
    """
    Thin async wrapper around the Bugzilla REST `bug` endpoint.
    """

    def __init__(
        self,
        base_url: str = BUGZILLA_BASE_URL,
        headers: Optional[Dict[str, str]] = None,
        api_key: Optional[str] = BUGZILLA_API_KEY,
        timeout: float = BUGZILLA_TIMEOUT,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.headers: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": "bug-progress-graph",
        }
        if api_key:
            self.headers["X-BUGZILLA-API-KEY"] = api_key
        # Caller headers are passed through verbatim and win over defaults
        if headers:
            self.headers.update(headers)

    def show_bug_url(self, bug_id: int) -> str:
        """Human-facing page for a bug, used as the diagram click target."""
        return f"{self.base_url}show_bug.cgi?id={bug_id}"

    async def _rest(self, endpoint: str, params: Dict[str, str]) -> Dict[str, Any]:
        url = urljoin(self.base_url, f"rest/{endpoint}")
        async with httpx.AsyncClient(headers=self.headers, timeout=self.timeout) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()

        if isinstance(data, dict) and data.get("error"):
            raise BugzillaAPIError(data.get("message", "Unknown Bugzilla error"), data.get("code"))
        return data

    async def fetch_bugs(self, ids: Iterable[int]) -> List[Bug]:
        """
        Fetch every bug in `ids` with a single request.

        Parameters
        ----------
        ids : Iterable[int]
            Bug numbers to fetch. Order is kept in the query string.

        Returns
        -------
        List[Bug]
            Records Bugzilla returned; may be shorter than `ids`. An empty
            `ids` returns [] without touching the network.
        """
        id_list = [str(bug_id) for bug_id in ids]
        if not id_list:
            return []

        logger.debug("Fetching %d bug(s): %s", len(id_list), ",".join(id_list))
        data = await self._rest("bug", {
            "id": ",".join(id_list),
            "include_fields": INCLUDE_FIELDS,
        })
        return [Bug.model_validate(raw) for raw in data.get("bugs") or []]

"""HTTP client for the remote Convex deployment API.

Every call returns a result object instead of raising: network errors and
non-2xx responses are reported through ``error`` so that a failure only
affects the action that triggered it.
"""

from typing import Optional
import logging

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

PAGINATED_TABLE_QUERY_PATH = "_system/frontend/paginatedTableDocuments"
DEFAULT_PAGE_SIZE = 10


class ConnectionCheckResult(BaseModel):
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class RemoteCallResult(BaseModel):
    success: bool
    body: Optional[str] = None
    error: Optional[str] = None


def _base_url(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def _auth_headers(deploy_key: str) -> dict:
    return {"Authorization": f"Convex {deploy_key}"}


class DeploymentApiClient:
    """Thin wrapper over ``httpx.Client`` for one request per call.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    http_client:
        Optional pre-built ``httpx.Client`` (tests pass one with a
        ``MockTransport``).
    """

    def __init__(self, timeout: float = 10.0, http_client: Optional[httpx.Client] = None):
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def check_connection(self, url: str, deploy_key: str) -> ConnectionCheckResult:
        """GET the deployment root. Anything below HTTP 500 counts as reachable."""
        try:
            response = self._client.get(url, headers=_auth_headers(deploy_key))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or "Connection failed"
            logger.warning(f"Connection check to {url} failed: {message}")
            return ConnectionCheckResult(success=False, error=message)

        if response.status_code < 500:
            return ConnectionCheckResult(success=True, status_code=response.status_code)
        return ConnectionCheckResult(
            success=False,
            status_code=response.status_code,
            error=f"Server error (HTTP {response.status_code})",
        )

    def fetch_schema(self, url: str, deploy_key: str) -> RemoteCallResult:
        """POST {base}/api/schema and return the raw schema text."""
        try:
            response = self._client.post(
                f"{_base_url(url)}/api/schema",
                headers=_auth_headers(deploy_key),
                json={},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or "Failed to fetch schema"
            logger.warning(f"Schema fetch from {url} failed: {message}")
            return RemoteCallResult(success=False, error=message)

        if response.is_success:
            return RemoteCallResult(success=True, body=response.text)
        return RemoteCallResult(
            success=False,
            error=f"Could not auto-fetch schema (HTTP {response.status_code}). Use manual input instead.",
        )

    def query_documents(
        self,
        url: str,
        deploy_key: str,
        table_name: str,
        cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> RemoteCallResult:
        """Request one page of a table through the paginated system query."""
        payload = {
            "path": PAGINATED_TABLE_QUERY_PATH,
            "args": {"tableName": table_name, "cursor": cursor, "pageSize": page_size},
            "format": "json",
        }
        try:
            response = self._client.post(
                f"{_base_url(url)}/api/query",
                headers=_auth_headers(deploy_key),
                json=payload,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or "Query failed"
            logger.warning(f"Document query on {url} ({table_name}) failed: {message}")
            return RemoteCallResult(success=False, error=message)

        if response.is_success:
            return RemoteCallResult(success=True, body=response.text)
        return RemoteCallResult(success=False, error=f"Query failed (HTTP {response.status_code})")

"""
GitHub API client for making authenticated requests.
Supports REST reads and GraphQL mutations with a personal access token or
an installation token obtained by the caller.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from verified_sync.config.config import (
    CONNECT_TIMEOUT_SECONDS,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    GITHUB_TOKEN,
    REQUEST_TIMEOUT_SECONDS,
)
from verified_sync.github.errors import (
    ConcurrentUpdateError,
    RemoteAPIError,
    RemoteAuthError,
    RemoteNotFoundError,
)

logger = logging.getLogger(__name__)

STALE_HEAD_MESSAGE = "Expected branch to point to"


class GitHubAPIClient:
    """Client for GitHub REST and GraphQL API interactions."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: GitHub API token (defaults to GITHUB_TOKEN)
            base_url: API root URL (defaults to GITHUB_API_URL)
            transport: Optional httpx transport, used instead of the network
        """
        self.token = token or GITHUB_TOKEN
        self.base_url = (base_url or GITHUB_API_URL).rstrip("/")
        self._transport = transport

        if not self.token:
            logger.warning("GitHub API client initialized without token - authentication will fail")

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for GitHub API requests.

        Returns:
            Headers dictionary
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST)
            path: API path (without base URL)
            data: Request body data
            params: Query parameters

        Returns:
            Response data (empty dict for empty bodies)

        Raises:
            RemoteNotFoundError: If the resource does not exist
            RemoteAuthError: If credentials are invalid or insufficient
            RemoteAPIError: For any other failed request
        """
        url = f"{self.base_url}/{path}"
        headers = self._get_headers()

        try:
            timeout_config = httpx.Timeout(REQUEST_TIMEOUT_SECONDS, connect=CONNECT_TIMEOUT_SECONDS)
            response = await self._execute_http_request(
                method, url, headers, data, params, timeout_config
            )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise RemoteAPIError(error_msg) from e

        return self._process_response(response, method, url)

    async def _execute_http_request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        timeout_config: httpx.Timeout,
    ) -> httpx.Response:
        """Execute HTTP request with method routing.

        Raises:
            ValueError: If HTTP method is unsupported
        """
        method_upper = method.upper()

        async with httpx.AsyncClient(
            timeout=timeout_config, trust_env=False, transport=self._transport
        ) as client:
            if method_upper == "GET":
                return await client.get(url, headers=headers, params=params)
            elif method_upper == "POST":
                return await client.post(url, json=data, headers=headers, params=params)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

    def _process_response(
        self, response: httpx.Response, method: str, url: str
    ) -> Dict[str, Any]:
        """Process HTTP response and extract data.

        Raises:
            RemoteAPIError: If response status indicates failure
        """
        if response.status_code in (200, 201, 204):
            logger.info(
                f"GitHub API {method} request to {url} "
                f"successful (status: {response.status_code})"
            )
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError as e:
                error_msg = (
                    f"GitHub API {method} request to {url} returned a non-JSON body "
                    f"(status {response.status_code}): {response.text[:200]}"
                )
                logger.error(error_msg)
                raise RemoteAPIError(error_msg, status_code=response.status_code) from e

        error_msg = f"GitHub API request failed (status {response.status_code}): {response.text}"
        logger.error(error_msg)

        if response.status_code in (401, 403):
            raise RemoteAuthError(error_msg, status_code=response.status_code)
        if response.status_code == 404:
            raise RemoteNotFoundError(error_msg, status_code=response.status_code)
        raise RemoteAPIError(error_msg, status_code=response.status_code)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, data=data)

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL query or mutation.

        GraphQL reports most failures with status 200 and an "errors" list;
        those are mapped onto the same exceptions as REST failures.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The "data" member of the response
        """
        response = await self.post("graphql", data={"query": query, "variables": variables or {}})

        errors = response.get("errors")
        if errors:
            raise self._graphql_error(errors)

        return response.get("data") or {}

    @staticmethod
    def _graphql_error(errors: List[Dict[str, Any]]) -> RemoteAPIError:
        """Pick the exception matching a GraphQL error list."""
        messages = "; ".join(e.get("message", "") for e in errors)
        error_msg = f"GitHub GraphQL request failed: {messages}"
        logger.error(error_msg)

        error_types = {e.get("type") for e in errors}
        if "STALE_DATA" in error_types or STALE_HEAD_MESSAGE in messages:
            return ConcurrentUpdateError(error_msg)
        if "NOT_FOUND" in error_types:
            return RemoteNotFoundError(error_msg)
        if "FORBIDDEN" in error_types:
            return RemoteAuthError(error_msg)
        return RemoteAPIError(error_msg)

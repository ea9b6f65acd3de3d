"""
GitHub branch operations.
"""

import logging
from typing import Optional
from urllib.parse import quote

from verified_sync.github.api.client import GitHubAPIClient
from verified_sync.github.errors import RemoteAPIError

logger = logging.getLogger(__name__)


class BranchOperations:
    """Handles GitHub branch reads."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        """Initialize branch operations.

        Args:
            client: GitHub API client (creates new if not provided)
        """
        self.client = client or GitHubAPIClient()

    async def get_remote_head_oid(self, owner: str, repo: str, branch: str) -> str:
        """Get the commit id at the tip of a remote branch.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch name

        Returns:
            Commit SHA of the branch head

        Raises:
            RemoteNotFoundError: If the repository or branch does not exist
            RemoteAuthError: If the credentials are rejected
        """
        # branch names may contain "/", "#" or "?"; encode as one path segment
        response = await self.client.get(
            f"repos/{owner}/{repo}/branches/{quote(branch, safe='')}"
        )

        try:
            sha = response["commit"]["sha"]
        except (KeyError, TypeError) as e:
            raise RemoteAPIError(
                f"Branch response for {owner}/{repo}@{branch} has no commit sha"
            ) from e

        logger.info(f"Remote head of {owner}/{repo}@{branch} is {sha}")
        return sha

"""
GitHub commit creation through the createCommitOnBranch mutation.

Commits created this way are signed by GitHub. The local clone is not
updated: its HEAD still points at the old commit and the changes remain
uncommitted locally.
"""

import logging
from typing import Optional

from verified_sync.github.api.client import GitHubAPIClient
from verified_sync.github.errors import RemoteAPIError
from verified_sync.github.models.types import CreateCommitOnBranchInput

logger = logging.getLogger(__name__)

CREATE_COMMIT_ON_BRANCH_MUTATION = """
mutation($input: CreateCommitOnBranchInput!) {
  createCommitOnBranch(input: $input) {
    commit {
      url
    }
  }
}
"""


class CommitOperations:
    """Handles server-side commit creation."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        """Initialize commit operations.

        Args:
            client: GitHub API client (creates new if not provided)
        """
        self.client = client or GitHubAPIClient()

    async def create_commit_on_branch(self, commit_input: CreateCommitOnBranchInput) -> str:
        """Create a commit on a remote branch.

        The mutation is rejected if the branch no longer points at
        commit_input.expected_head_oid; it is never retried here.

        Args:
            commit_input: Branch, message, expected head and file changes

        Returns:
            URL of the created commit

        Raises:
            ConcurrentUpdateError: If the branch moved past the expected head
            RemoteNotFoundError: If the repository or branch does not exist
            RemoteAuthError: If the credentials are rejected
        """
        branch = commit_input.branch
        logger.info(
            f"Creating commit on {branch.repository_name_with_owner}@{branch.branch_name} "
            f"(expected head {commit_input.expected_head_oid}, "
            f"{len(commit_input.file_changes.additions)} additions, "
            f"{len(commit_input.file_changes.deletions)} deletions)"
        )

        data = await self.client.graphql(
            CREATE_COMMIT_ON_BRANCH_MUTATION, variables=commit_input.to_variables()
        )

        try:
            url = data["createCommitOnBranch"]["commit"]["url"]
        except (KeyError, TypeError) as e:
            raise RemoteAPIError(f"createCommitOnBranch returned no commit: {data}") from e

        logger.info(f"Created commit {url}")
        return url

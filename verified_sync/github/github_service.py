"""
Main GitHub sync service - facade for verified commits and tags.

This service provides a single entry point for:
- Turning a working tree's uncommitted changes into a GitHub-signed commit
- Replacing local-only annotated tags with lightweight ones and pushing them
"""

import asyncio
import logging
import os
from typing import List, Optional

from verified_sync.config.config import GIT_REMOTE_NAME, SYNC_WORKING_DIRECTORY
from verified_sync.github.api.branches import BranchOperations
from verified_sync.github.api.client import GitHubAPIClient
from verified_sync.github.api.commits import CommitOperations
from verified_sync.github.git import file_changes, tags
from verified_sync.github.models.types import (
    CommitMessage,
    CommittableBranch,
    CreateCommitOnBranchInput,
    FileChanges,
    GitTag,
)

logger = logging.getLogger(__name__)


class GitHubSyncService:
    """
    Creates signed commits and verified tags on GitHub from a local clone.

    The working directory is resolved once at construction and passed
    explicitly to every git and file operation.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        repo_dir: Optional[str] = None,
        client: Optional[GitHubAPIClient] = None,
        remote: Optional[str] = None,
    ):
        """Initialize GitHub sync service.

        Args:
            token: GitHub API token (defaults to config)
            repo_dir: Local working tree (defaults to SYNC_WORKING_DIRECTORY,
                then the current directory at construction time)
            client: GitHub API client (created from token if not provided)
            remote: Remote used for tag sync (defaults to config)
        """
        self.repo_dir = repo_dir or SYNC_WORKING_DIRECTORY or os.getcwd()
        self.remote = remote or GIT_REMOTE_NAME
        self.api_client = client or GitHubAPIClient(token=token)
        self.branches = BranchOperations(client=self.api_client)
        self.commits = CommitOperations(client=self.api_client)

    async def get_file_changes(self) -> FileChanges:
        """Collect the working tree's uncommitted changes as a commit payload."""
        return await file_changes.get_file_changes(self.repo_dir)

    async def commit_all(
        self,
        branch: str,
        owner: str,
        repo: str,
        message: str,
        body: str = "",
    ) -> str:
        """Commit every uncommitted change of the working tree on the remote branch.

        The file payload and the remote head are gathered concurrently and
        passed straight into the mutation. The local HEAD is not moved, so
        the local clone still shows the changes as uncommitted afterwards.

        Args:
            branch: Branch to commit on
            owner: Repository owner
            repo: Repository name
            message: Commit headline
            body: Commit message body

        Returns:
            URL of the created commit

        Raises:
            ConcurrentUpdateError: If the branch moved before the mutation ran;
                re-run to retry against the new head
        """
        changes, expected_head_oid = await asyncio.gather(
            self.get_file_changes(),
            self.branches.get_remote_head_oid(owner, repo, branch),
        )

        commit_input = CreateCommitOnBranchInput(
            branch=CommittableBranch(
                branch_name=branch,
                repository_name_with_owner=f"{owner}/{repo}",
            ),
            message=CommitMessage(headline=message, body=body),
            expected_head_oid=expected_head_oid,
            file_changes=changes,
        )

        return await self.commits.create_commit_on_branch(commit_input)

    async def push_tags(
        self, repo_dir: Optional[str] = None, remote: Optional[str] = None
    ) -> List[GitTag]:
        """Push local-only tags as lightweight tags.

        Args:
            repo_dir: Working directory override for this call
            remote: Remote override for this call

        Returns:
            The recreated tags
        """
        return await tags.push_tags(repo_dir or self.repo_dir, remote or self.remote)

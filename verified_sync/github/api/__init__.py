from verified_sync.github.api.branches import BranchOperations
from verified_sync.github.api.client import GitHubAPIClient
from verified_sync.github.api.commits import CommitOperations

__all__ = ["BranchOperations", "CommitOperations", "GitHubAPIClient"]

"""
verified-sync

Creates signed commits through the GitHub GraphQL API from a working tree's
uncommitted changes, and replaces local-only annotated tags with lightweight
ones before pushing them so GitHub reports them as verified.
"""

from verified_sync.github import GitHubSyncService

__all__ = ["GitHubSyncService"]

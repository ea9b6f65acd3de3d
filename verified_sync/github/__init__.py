"""
GitHub Sync Package

Main Components:
- GitHubSyncService: facade for signed commits and verified tags
- API Client: GitHub REST/GraphQL interactions
- Git Operations: local git status and tag operations
"""

from verified_sync.github.github_service import GitHubSyncService

__all__ = ["GitHubSyncService"]

"""Tests for CommitOperations."""

import base64
import json

import httpx
import pytest

from verified_sync.github.api.client import GitHubAPIClient
from verified_sync.github.api.commits import CommitOperations
from verified_sync.github.errors import ConcurrentUpdateError, RemoteAPIError, RemoteNotFoundError
from verified_sync.github.models.types import (
    CommitMessage,
    CommittableBranch,
    CreateCommitOnBranchInput,
    FileAddition,
    FileChanges,
    FileDeletion,
)

COMMIT_URL = "https://github.com/octo/repo/commit/def456"


def client_for(handler):
    return GitHubAPIClient(
        token="test-token", base_url="https://api.github.test", transport=httpx.MockTransport(handler)
    )


def commits_for(handler):
    return CommitOperations(client=client_for(handler))


def build_input(expected_head_oid="abc123"):
    return CreateCommitOnBranchInput(
        branch=CommittableBranch(branch_name="main", repository_name_with_owner="octo/repo"),
        message=CommitMessage(
            headline="Create a new something", body="This is the body of the commit message"
        ),
        expected_head_oid=expected_head_oid,
        file_changes=FileChanges(
            additions=[
                FileAddition(path="test.txt", contents=base64.b64encode(b"hello world").decode())
            ],
            deletions=[FileDeletion(path="old.txt")],
        ),
    )


class TestCreateCommitOnBranch:
    @pytest.mark.asyncio
    async def test_sends_mutation_and_returns_url(self):
        requests = []

        def handler(request):
            requests.append(json.loads(request.content))
            return httpx.Response(
                200, json={"data": {"createCommitOnBranch": {"commit": {"url": COMMIT_URL}}}}
            )

        url = await commits_for(handler).create_commit_on_branch(build_input())

        assert url == COMMIT_URL
        assert len(requests) == 1
        assert "createCommitOnBranch(input: $input)" in requests[0]["query"]
        assert requests[0]["variables"] == {
            "input": {
                "branch": {"branchName": "main", "repositoryNameWithOwner": "octo/repo"},
                "message": {
                    "headline": "Create a new something",
                    "body": "This is the body of the commit message",
                },
                "expectedHeadOid": "abc123",
                "fileChanges": {
                    "additions": [{"path": "test.txt", "contents": "aGVsbG8gd29ybGQ="}],
                    "deletions": [{"path": "old.txt"}],
                },
            }
        }

    @pytest.mark.asyncio
    async def test_stale_head_is_not_retried(self):
        """Test a stale expectedHeadOid surfaces as ConcurrentUpdateError."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "data": {"createCommitOnBranch": None},
                    "errors": [
                        {
                            "type": "STALE_DATA",
                            "path": ["createCommitOnBranch"],
                            "message": 'Expected branch to point to "stale" but it did not. Pull and try again.',
                        }
                    ],
                },
            )

        with pytest.raises(ConcurrentUpdateError):
            await commits_for(handler).create_commit_on_branch(build_input("stale"))

        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_missing_repository(self):
        client = client_for(
            lambda request: httpx.Response(
                200,
                json={
                    "data": {"createCommitOnBranch": None},
                    "errors": [{"type": "NOT_FOUND", "message": "Could not resolve to a Repository"}],
                },
            )
        )

        with pytest.raises(RemoteNotFoundError):
            await CommitOperations(client=client).create_commit_on_branch(build_input())

    @pytest.mark.asyncio
    async def test_missing_commit_in_response(self):
        client = client_for(
            lambda request: httpx.Response(200, json={"data": {"createCommitOnBranch": None}})
        )

        with pytest.raises(RemoteAPIError):
            await CommitOperations(client=client).create_commit_on_branch(build_input())

"""
Shared types and models for GitHub sync operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

RENAME_SEPARATOR = "->"
TAGS_REF_PREFIX = "refs/tags/"


class StatusCode(str, Enum):
    """Single-character codes of `git status --porcelain=v1`."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"
    TYPE_CHANGED = "T"
    UNCHANGED = " "


@dataclass(frozen=True)
class ChangeRecord:
    """One line of porcelain status output.

    file_path holds "old -> new" for renames.
    """

    file_path: str
    index_status: str
    working_tree_status: str

    @property
    def status_code(self) -> str:
        return f"{self.index_status}{self.working_tree_status}"

    def is_rename(self) -> bool:
        return StatusCode.RENAMED.value in (self.index_status, self.working_tree_status)

    def to_porcelain_line(self) -> str:
        return f"{self.status_code} {self.file_path}"


@dataclass
class ChangeSet:
    """Paths to add and delete, in status report order."""

    additions: List[str] = field(default_factory=list)
    deletions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GitTag:
    name: str
    ref: str


class FileAddition(BaseModel):
    """A file to create or overwrite, with base64-encoded contents."""

    path: str
    contents: str


class FileDeletion(BaseModel):
    path: str


class FileChanges(BaseModel):
    additions: List[FileAddition] = Field(default_factory=list)
    deletions: List[FileDeletion] = Field(default_factory=list)


class CommittableBranch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    branch_name: str = Field(..., alias="branchName")
    repository_name_with_owner: str = Field(..., alias="repositoryNameWithOwner")


class CommitMessage(BaseModel):
    headline: str
    body: str = ""


class CreateCommitOnBranchInput(BaseModel):
    """Input of the createCommitOnBranch GraphQL mutation."""

    model_config = ConfigDict(populate_by_name=True)

    branch: CommittableBranch
    message: CommitMessage
    expected_head_oid: str = Field(..., alias="expectedHeadOid")
    file_changes: FileChanges = Field(default_factory=FileChanges, alias="fileChanges")

    def to_variables(self) -> dict:
        """Serialize as the mutation's `input` variable."""
        return {"input": self.model_dump(by_alias=True)}

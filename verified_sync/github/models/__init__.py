from verified_sync.github.models.types import (
    ChangeRecord,
    ChangeSet,
    CommitMessage,
    CommittableBranch,
    CreateCommitOnBranchInput,
    FileAddition,
    FileChanges,
    FileDeletion,
    GitTag,
    StatusCode,
)

__all__ = [
    "ChangeRecord",
    "ChangeSet",
    "CommitMessage",
    "CommittableBranch",
    "CreateCommitOnBranchInput",
    "FileAddition",
    "FileChanges",
    "FileDeletion",
    "GitTag",
    "StatusCode",
]

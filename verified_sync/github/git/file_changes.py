"""Building the fileChanges payload of a commit from the working tree."""

import asyncio
import base64
import logging
import os

from verified_sync.github.errors import FileReadError
from verified_sync.github.models.types import (
    ChangeSet,
    FileAddition,
    FileChanges,
    FileDeletion,
)
from verified_sync.utils.batch import gather_batch

from .status import (
    calculate_additions_and_deletions,
    get_git_status_porcelain_v1,
    list_changes,
)

logger = logging.getLogger(__name__)


def _read_base64(repo_dir: str, path: str) -> str:
    full_path = os.path.join(repo_dir, path)
    try:
        with open(full_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
    return base64.b64encode(data).decode("ascii")


async def read_file_addition(repo_dir: str, path: str) -> FileAddition:
    """Read one file from the working tree as a base64 addition.

    Args:
        repo_dir: Repository directory
        path: File path relative to repo_dir

    Returns:
        FileAddition with the file's current contents

    Raises:
        FileReadError: If the file is missing or unreadable
    """
    contents = await asyncio.to_thread(_read_base64, repo_dir, path)
    logger.debug(f"Read {path} for commit")
    return FileAddition(path=path, contents=contents)


async def calculate_file_changes(change_set: ChangeSet, repo_dir: str) -> FileChanges:
    """Materialize a change set into a transport-ready payload.

    File contents are read now, not when the status was taken, so a file
    removed in between surfaces as a FileReadError.

    Args:
        change_set: Paths to add and delete
        repo_dir: Repository directory the paths are relative to

    Returns:
        FileChanges with additions and deletions in change set order
    """
    additions = await gather_batch(
        (read_file_addition(repo_dir, path) for path in change_set.additions),
        description="file read",
    )
    deletions = [FileDeletion(path=path) for path in change_set.deletions]

    return FileChanges(additions=additions, deletions=deletions)


async def get_file_changes(repo_dir: str) -> FileChanges:
    """Collect the uncommitted changes of a working tree as a commit payload.

    Args:
        repo_dir: Repository directory

    Returns:
        FileChanges for every changed path reported by git status
    """
    output = await get_git_status_porcelain_v1(repo_dir)
    records = list_changes(output)
    change_set = calculate_additions_and_deletions(records)
    file_changes = await calculate_file_changes(change_set, repo_dir)

    logger.info(
        f"Collected {len(file_changes.additions)} additions and "
        f"{len(file_changes.deletions)} deletions from {repo_dir}"
    )
    return file_changes

"""Reading and interpreting `git status --porcelain=v1` output.

This module contains functions for:
- Reading the porcelain status report of a working tree
- Parsing the report into ChangeRecord entries
- Classifying records into paths to add and paths to delete
"""

import logging
import re
from typing import List

from verified_sync.github.errors import ParseError
from verified_sync.github.models.types import (
    RENAME_SEPARATOR,
    ChangeRecord,
    ChangeSet,
    StatusCode,
)

from .subprocess_helpers import run_git_cmd

logger = logging.getLogger(__name__)

STATUS_CODE_LENGTH = 2

INDEX_ADDITION_CODES = frozenset(
    {
        StatusCode.MODIFIED.value,
        StatusCode.ADDED.value,
        StatusCode.TYPE_CHANGED.value,
        StatusCode.UNTRACKED.value,
    }
)
WORKING_TREE_ADDITION_CODES = frozenset(
    {
        StatusCode.MODIFIED.value,
        StatusCode.TYPE_CHANGED.value,
        StatusCode.UNTRACKED.value,
    }
)

# git wraps unusual paths in double quotes and escapes them C-style (core.quotePath)
QUOTED_PATH_PATTERN = re.compile(r'"((?:[^"\\]|\\.)*)"')
OCTAL_ESCAPE_PATTERN = re.compile(r"[0-7]{3}")
C_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "t": b"\t",
    "n": b"\n",
    "v": b"\v",
    "f": b"\f",
    "r": b"\r",
    '"': b'"',
    "\\": b"\\",
}


async def get_git_status_porcelain_v1(repo_dir: str) -> str:
    """Get the porcelain v1 status report of a working tree.

    Args:
        repo_dir: Repository directory

    Returns:
        Raw status output, one line per changed path

    Raises:
        ProcessError: If git exits non-zero or writes to stderr
    """
    return await run_git_cmd(
        ["status", "--porcelain=v1"], cwd=repo_dir, fail_on_stderr=True
    )


def list_changes(output: str) -> List[ChangeRecord]:
    """Parse porcelain v1 status output into change records.

    Args:
        output: Output of `git status --porcelain=v1`

    Returns:
        One ChangeRecord per line, in report order

    Raises:
        ParseError: If a line has fewer than two status characters
    """
    lines = output.split("\n")
    # output ends with a line separator
    if lines and lines[-1] == "":
        lines.pop()

    records = []
    for line_number, line in enumerate(lines, start=1):
        if len(line) < STATUS_CODE_LENGTH:
            raise ParseError(
                line, "expected a two-character status code", line_number=line_number
            )

        # only the first two characters are the status, the rest is the path
        status, file_path = line[:STATUS_CODE_LENGTH], line[STATUS_CODE_LENGTH:].lstrip()
        records.append(
            ChangeRecord(
                file_path=file_path,
                index_status=status[0],
                working_tree_status=status[1],
            )
        )

    return records


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a status path.

    Unquoted paths are returned unchanged. Octal escapes are raw bytes
    and are decoded as UTF-8; undecodable bytes are kept as surrogates so
    the result still opens the same file.

    Raises:
        ParseError: If the quoted path contains an unknown escape
    """
    match = QUOTED_PATH_PATTERN.fullmatch(path)
    if not match:
        return path

    body = match.group(1)
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\":
            raw += char.encode()
            i += 1
            continue

        escape = body[i + 1]
        if escape in C_ESCAPES:
            raw += C_ESCAPES[escape]
            i += 2
        elif OCTAL_ESCAPE_PATTERN.fullmatch(body[i + 1 : i + 4]):
            raw.append(int(body[i + 1 : i + 4], 8))
            i += 4
        else:
            raise ParseError(path, f"unknown escape '\\{escape}' in quoted path")

    return raw.decode("utf-8", errors="surrogateescape")


def split_rename(file_path: str) -> tuple[str, str]:
    """Split an "old -> new" rename path into its trimmed, unquoted halves."""
    # a quoted old path may itself contain the separator
    quoted_old = QUOTED_PATH_PATTERN.match(file_path)
    if quoted_old:
        old_path = quoted_old.group(0)
        rest = file_path[quoted_old.end():].strip()
        if not rest.startswith(RENAME_SEPARATOR):
            raise ParseError(file_path, f"rename without '{RENAME_SEPARATOR}' separator")
        new_path = rest[len(RENAME_SEPARATOR):]
    elif RENAME_SEPARATOR in file_path:
        old_path, new_path = file_path.split(RENAME_SEPARATOR, 1)
    else:
        raise ParseError(file_path, f"rename without '{RENAME_SEPARATOR}' separator")

    return unquote_path(old_path.strip()), unquote_path(new_path.strip())


def calculate_additions_and_deletions(records: List[ChangeRecord]) -> ChangeSet:
    """Classify change records into paths to add and paths to delete.

    Renames contribute their old path to deletions and their new path to
    additions. Otherwise the addition and deletion rules are evaluated
    independently, so a record can land in both lists. Paths are not
    deduplicated. Quoted paths are unquoted into working-tree paths.

    Args:
        records: Parsed status records

    Returns:
        ChangeSet preserving record order within each list

    Raises:
        ParseError: If a rename record has no "->" separator or a quoted
            path is malformed
    """
    change_set = ChangeSet()

    for record in records:
        if record.is_rename():
            old_path, new_path = split_rename(record.file_path)
            change_set.deletions.append(old_path)
            change_set.additions.append(new_path)
            continue

        file_path = unquote_path(record.file_path)
        if (
            record.index_status in INDEX_ADDITION_CODES
            or record.working_tree_status in WORKING_TREE_ADDITION_CODES
        ):
            change_set.additions.append(file_path)

        if StatusCode.DELETED.value in (record.index_status, record.working_tree_status):
            change_set.deletions.append(file_path)

    logger.debug(
        f"Classified {len(records)} status entries into "
        f"{len(change_set.additions)} additions and {len(change_set.deletions)} deletions"
    )
    return change_set

"""Local git operations used by the sync service.

- subprocess_helpers: running git as an async subprocess
- status: porcelain status parsing and change classification
- file_changes: building the commit fileChanges payload
- tags: local/remote tag reconciliation
"""

from .file_changes import calculate_file_changes, get_file_changes, read_file_addition
from .status import (
    calculate_additions_and_deletions,
    get_git_status_porcelain_v1,
    list_changes,
)
from .tags import (
    compute_tag_diff,
    create_lightweight_tags,
    delete_tags,
    get_local_tags,
    get_only_local_tags,
    get_remote_tag_names,
    get_tag_types,
    push_tags,
)

__all__ = [
    "calculate_additions_and_deletions",
    "calculate_file_changes",
    "compute_tag_diff",
    "create_lightweight_tags",
    "delete_tags",
    "get_file_changes",
    "get_git_status_porcelain_v1",
    "get_local_tags",
    "get_only_local_tags",
    "get_remote_tag_names",
    "get_tag_types",
    "list_changes",
    "push_tags",
    "read_file_addition",
]

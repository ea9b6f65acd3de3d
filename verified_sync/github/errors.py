"""Exceptions raised by GitHub sync operations."""

from typing import List, Optional


class GitHubSyncError(Exception):
    """Base class for all sync errors."""

    pass


class ParseError(GitHubSyncError):
    """Raised when a porcelain status line is malformed."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        location = f" {line_number}" if line_number is not None else ""
        super().__init__(f"Malformed status line{location}: {line!r} ({reason})")


class FileReadError(GitHubSyncError):
    """Raised when a file to be committed cannot be read from the working tree."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class ProcessError(GitHubSyncError):
    """Raised when a git invocation exits non-zero or reports an error."""

    def __init__(self, cmd: List[str], returncode: Optional[int], stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command {' '.join(cmd)} failed (exit code {returncode}): {stderr.strip()}"
        )


class RemoteAPIError(GitHubSyncError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteNotFoundError(RemoteAPIError):
    """Raised when the repository or branch does not exist."""

    pass


class RemoteAuthError(RemoteAPIError):
    """Raised when the credentials are missing, invalid or lack permission."""

    pass


class ConcurrentUpdateError(RemoteAPIError):
    """Raised when the branch moved past the expected head commit."""

    pass

"""Tag reconciliation between a local clone and its remote.

Annotated tags cannot carry a signature GitHub accepts, but a lightweight
tag pointing at a signed commit shows up as verified. Tags that only exist
locally are therefore deleted, recreated as lightweight tags on the same
commit, and pushed. The annotation message is lost.
"""

import logging
from typing import Dict, List, Optional

from verified_sync.config.config import GIT_REMOTE_NAME
from verified_sync.github.models.types import TAGS_REF_PREFIX, GitTag
from verified_sync.utils.batch import gather_batch

from .subprocess_helpers import run_git_cmd

logger = logging.getLogger(__name__)


async def resolve_tag_commit(name: str, repo_dir: str) -> str:
    """Resolve a tag to the commit it ultimately points at."""
    stdout = await run_git_cmd(
        ["rev-parse", "--verify", f"{TAGS_REF_PREFIX}{name}^{{commit}}"], cwd=repo_dir
    )
    return stdout.strip()


async def get_local_tags(repo_dir: str) -> List[GitTag]:
    """List local tags with their peeled target commit.

    Args:
        repo_dir: Repository directory

    Returns:
        Tags in `git tag --list` order
    """
    stdout = await run_git_cmd(["tag", "--list"], cwd=repo_dir)
    names = [name for name in stdout.splitlines() if name]

    refs = await gather_batch(
        (resolve_tag_commit(name, repo_dir) for name in names),
        description="tag resolution",
    )
    return [GitTag(name=name, ref=ref) for name, ref in zip(names, refs)]


async def get_remote_tag_names(remote: str, repo_dir: str) -> List[str]:
    """List the tag names present on a remote.

    Args:
        remote: Remote name
        repo_dir: Repository directory

    Returns:
        Bare tag names, one per tag
    """
    # --refs drops the peeled "^{}" entries, so annotated tags appear once
    stdout = await run_git_cmd(["ls-remote", "--refs", "--tags", remote], cwd=repo_dir)

    names = []
    for line in stdout.splitlines():
        if not line:
            continue
        _ref, _, tag_ref = line.partition("\t")
        names.append(tag_ref.removeprefix(TAGS_REF_PREFIX))
    return names


def compute_tag_diff(local_tags: List[GitTag], remote_tag_names: List[str]) -> List[GitTag]:
    """Return the local tags whose name is missing from the remote, in local order."""
    remote_set = set(remote_tag_names)
    return [tag for tag in local_tags if tag.name not in remote_set]


async def get_only_local_tags(
    repo_dir: str, remote: str = GIT_REMOTE_NAME
) -> List[GitTag]:
    """List tags that exist locally but not on the remote."""
    local_tags = await get_local_tags(repo_dir)
    remote_tag_names = await get_remote_tag_names(remote, repo_dir)

    return compute_tag_diff(local_tags, remote_tag_names)


async def _delete_tag(tag: GitTag, repo_dir: str) -> GitTag:
    await run_git_cmd(["tag", "-d", tag.name], cwd=repo_dir)
    logger.debug(f"Deleted tag {tag.name}")
    return tag


async def delete_tags(tags: List[GitTag], repo_dir: str) -> List[GitTag]:
    """Delete local tags by name.

    Every deletion runs to completion before a failure is raised.
    """
    return await gather_batch(
        (_delete_tag(tag, repo_dir) for tag in tags), description="tag deletion"
    )


async def _create_lightweight_tag(tag: GitTag, repo_dir: str) -> GitTag:
    await run_git_cmd(["tag", tag.name, tag.ref], cwd=repo_dir)
    logger.debug(f"Created lightweight tag {tag.name} at {tag.ref}")
    return tag


async def create_lightweight_tags(tags: List[GitTag], repo_dir: str) -> List[GitTag]:
    """Create a lightweight tag for each entry at its recorded ref."""
    return await gather_batch(
        (_create_lightweight_tag(tag, repo_dir) for tag in tags),
        description="tag creation",
    )


async def get_tag_types(tags: List[GitTag], repo_dir: str) -> Dict[str, str]:
    """Report the object type each tag name points at.

    Lightweight tags report "commit", annotated tags report "tag".
    """

    async def _object_type(name: str) -> str:
        stdout = await run_git_cmd(["cat-file", "-t", f"{TAGS_REF_PREFIX}{name}"], cwd=repo_dir)
        return stdout.strip()

    types = await gather_batch(
        (_object_type(tag.name) for tag in tags), description="tag type lookup"
    )
    return {tag.name: object_type for tag, object_type in zip(tags, types)}


async def push_tags(repo_dir: str, remote: Optional[str] = None) -> List[GitTag]:
    """Replace local-only tags with lightweight versions and push all tags.

    Args:
        repo_dir: Repository directory
        remote: Remote to push to (defaults to GIT_REMOTE_NAME)

    Returns:
        The recreated tags
    """
    remote = remote or GIT_REMOTE_NAME
    only_local_tags = await get_only_local_tags(repo_dir, remote)
    logger.info(
        f"Found {len(only_local_tags)} local-only tags: "
        f"{', '.join(tag.name for tag in only_local_tags) or 'none'}"
    )

    await delete_tags(only_local_tags, repo_dir)
    created_tags = await create_lightweight_tags(only_local_tags, repo_dir)
    await run_git_cmd(["push", remote, "--tags"], cwd=repo_dir)

    logger.info(f"Pushed tags to {remote}")
    return created_tags

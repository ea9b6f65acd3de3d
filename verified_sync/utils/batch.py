"""Helpers for running independent per-item coroutines as one batch."""

import asyncio
import logging
from typing import Awaitable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_batch(aws: Iterable[Awaitable[T]], description: str = "batch") -> List[T]:
    """Run awaitables concurrently and wait for every one of them.

    Results are returned in input order. If any member failed, each failure
    is logged and the first one (in input order) is raised once the whole
    batch has settled, so no member is still running when the caller resumes.

    Args:
        aws: Awaitables to run, one per item
        description: Name of the batch used in log messages

    Returns:
        List of results in input order
    """
    results = await asyncio.gather(*aws, return_exceptions=True)

    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        for error in errors:
            logger.error(f"{description} member failed: {error}")
        logger.error(f"{description} failed: {len(errors)} of {len(results)} members")
        raise errors[0]

    return list(results)

"""Fan-out / fan-in helper shared by the batch operations of the stores."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Iterable, Sequence, TypeVar

from src.core.results import Result
from src.core.shared_types import ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def join_all(
    task: Callable[[T], Result[R]],
    items: Iterable[T],
    max_workers: int = 8,
) -> list[Result[R]]:
    """
    Run task(item) for every item concurrently and wait for all of them.

    Nothing is cut short when an earlier task fails. Outcomes are returned in input order and are only
    touched by the calling thread, so callers can aggregate them without locking.
    An exception escaping a task becomes a PERSISTENCE failure.
    """
    items = list(items)
    if not items:
        return []

    workers = max(1, min(max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="minimate") as executor:
        futures = [executor.submit(task, item) for item in items]
        wait(futures)

    return [_outcome(future) for future in futures]


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive chunks of at most `size` elements."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def _outcome(future: Future) -> Result:
    try:
        return future.result()
    except Exception as exc:
        logger.error("Unhandled error in concurrent task: %s", exc)
        return Result.failure(ErrorKind.PERSISTENCE, str(exc))

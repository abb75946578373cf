"""
Fan-out / join helper: run independent fetches side by side and wait for all of them.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

DEFAULT_MAX_WORKERS = 8


def gather(fn: Callable[[T], R], items: Iterable[T], max_workers: int = DEFAULT_MAX_WORKERS) -> List[R]:
    """Run fn(item) for every item and return the results in input order.

    Fails fast: on the first exception to complete, pending tasks are cancelled and that exception is
    re-raised; no partial result list is returned.
    """
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as executor:
        futures = [executor.submit(fn, item) for item in items]
        for future in as_completed(futures):
            if future.exception() is not None:
                cancelled = sum(1 for f in futures if f.cancel())
                logger.debug("Cancelled %d pending task(s) after a failure", cancelled)
                raise future.exception()
        return [future.result() for future in futures]


def gather_calls(*calls: Callable[[], R], max_workers: int = DEFAULT_MAX_WORKERS) -> List[R]:
    """Run zero-argument callables concurrently; same ordering and failure rules as gather()."""
    return gather(lambda call: call(), calls, max_workers=max_workers)

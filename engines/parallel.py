"""Row-block fan-out over a thread pool."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from models.engine_config import EngineConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def split_ranges(total: int, workers: int, min_chunk: int = 1) -> List[Tuple[int, int]]:
    """Split [0, total) into at most `workers` contiguous half-open ranges."""
    if total <= 0:
        return []
    tasks = max(1, min(workers, total // max(min_chunk, 1)))
    chunk = (total + tasks - 1) // tasks
    return [(lo, min(lo + chunk, total)) for lo in range(0, total, chunk)]


def run_row_blocks(
    func: Callable[[int, int], None],
    total: int,
    config: Optional[EngineConfig] = None
) -> None:
    """
    Call func(lo, hi) for disjoint row ranges covering [0, total).

    func must only write its own rows of a preallocated output. With a
    single range the call happens inline on the calling thread.
    """
    config = config or DEFAULT_CONFIG
    ranges = split_ranges(total, config.workers, config.min_rows_per_task)
    if len(ranges) <= 1:
        for lo, hi in ranges:
            func(lo, hi)
        return

    logger.debug("Fanning out %d rows over %d tasks", total, len(ranges))
    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures: List[Future] = [pool.submit(func, lo, hi) for lo, hi in ranges]
        for fut in futures:
            fut.result()

"""
Parallelization Utilities
==========================

Single responsibility: Size and create the pools used for frames.

Two kinds of work run in parallel:
- "render": warping frames. Torch releases the GIL inside its kernels, and
  tensors are cheap to share between threads but expensive to pickle, so
  rendering uses a ThreadPool.
- "save": PNG encoding of uint8 numpy arrays. Pillow's encoder holds the GIL
  for part of the work, so saving uses a process Pool.
"""

import multiprocessing as mp
from multiprocessing.pool import ThreadPool
from typing import Optional, Union

from line_morph.utils.logging import get_logger

logger = get_logger(__name__)

Pool = Union[ThreadPool, mp.pool.Pool]


def get_optimal_workers(task_type: str = "render") -> int:
    """
    Default worker count for a kind of work.

    Rendering keeps one core free for the main process; saving is mostly
    disk-bound and may use every core.

    Args:
        task_type: "render" or "save"

    Returns:
        Worker count (at least 1)
    """
    cores = mp.cpu_count()

    if task_type == "render":
        return max(1, cores - 1)
    if task_type == "save":
        return cores

    logger.warning(f"Unknown task_type '{task_type}', using {cores} workers")
    return cores


def create_worker_pool(task_type: str = "render", max_workers: Optional[int] = None) -> Pool:
    """
    Create a pool for one kind of work; use it as a context manager.

    map() on either pool returns results in input order, which is what
    keeps frames in ratio order.

    Args:
        task_type: "render" (thread pool) or "save" (process pool)
        max_workers: Upper bound on the worker count

    Example:
        >>> with create_worker_pool("save", max_workers=4) as pool:
        ...     results = pool.map(_save_png_worker, tasks)
    """
    workers = get_optimal_workers(task_type)
    if max_workers is not None:
        workers = max(1, min(workers, max_workers))

    if task_type == "render":
        logger.debug(f"Rendering on {workers} threads")
        return ThreadPool(processes=workers)

    logger.debug(f"Saving with {workers} processes")
    return mp.Pool(processes=workers)

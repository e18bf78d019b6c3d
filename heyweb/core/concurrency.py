import os
import threading
from contextlib import contextmanager
from typing import Iterator

from heyweb.core.logger import get_logger

logger = get_logger("heyweb.concurrency")

_semaphore: threading.BoundedSemaphore | None = None
_lock = threading.Lock()


def _slot_count() -> int:
    raw = os.getenv("HEYWEB_LLM_CONCURRENCY", "4").strip()
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning("HEYWEB_LLM_CONCURRENCY=%r is not an integer, using 4", raw)
        return 4


def init_semaphore() -> None:
    global _semaphore
    with _lock:
        _semaphore = threading.BoundedSemaphore(_slot_count())


@contextmanager
def llm_slot() -> Iterator[None]:
    """Hold one of the upstream completion slots for the duration of a call."""
    if _semaphore is None:
        init_semaphore()
    assert _semaphore is not None
    _semaphore.acquire()
    try:
        yield
    finally:
        _semaphore.release()

import logging
import random
import time
from typing import Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


class TransientError(Exception):
    """Falla reintentable (timeout, 429, 5xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def backoff_retry(
    fn: Callable,
    max_tries: int = 3,
    base_delay: float = 0.5,
    jitter: float = 0.25,
    retry_on: Tuple[Type[BaseException], ...] = (TransientError,),
    sleep: Optional[Callable[[float], None]] = None,
):
    # siempre al menos un intento
    max_tries = max(1, max_tries)
    last_exc = None
    for i in range(max_tries):
        try:
            return fn()
        except retry_on as e:
            last_exc = e
            if i == max_tries - 1:
                break
            delay = base_delay * (2 ** i) + random.random() * jitter
            logger.warning("Intento %d/%d falló (%s); reintentando en %.2fs", i + 1, max_tries, e, delay)
            (sleep or time.sleep)(delay)
    raise last_exc


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + suffix

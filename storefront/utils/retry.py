"""Retry asynchrone avec backoff exponentiel borné."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# module storefront.utils.retry
async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    initial_delay: float = 0.2,
    max_delay: float = 2.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    label: str = "operation",
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
) -> T:
    """
    Exécute func() jusqu'à max_attempts fois.
    - Seules les exceptions listées déclenchent un nouvel essai, les autres remontent
    - Délai doublé à chaque échec, plafonné à max_delay
    - Après le dernier échec, la dernière exception est relevée
    """
    sleep = sleep or asyncio.sleep
    delay = initial_delay
    attempts = max(1, max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            return await func()
        except exceptions as e:
            if attempt >= attempts:
                logger.error("%s failed after %s attempts: %s", label, attempts, e)
                raise
            logger.warning(
                "%s failed (attempt %s/%s): %s. Retrying in %.2fs...",
                label, attempt, attempts, e, delay,
            )
            await sleep(delay)
            delay = min(delay * exponential_base, max_delay)
    raise RuntimeError("unreachable")

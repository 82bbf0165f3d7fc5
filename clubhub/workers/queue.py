"""
RQ queue configuration and utilities.
Provides Redis connection and queue instances for background e-mail jobs.
"""

from typing import Any, Callable, Optional

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue

from clubhub.core.config import settings
from clubhub.core.logging import get_logger

logger = get_logger(__name__)

# Redis connection for RQ. Connecting is lazy: nothing touches the network
# until a job is enqueued.
redis_conn = Redis(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    db=settings.REDIS_DB,
)

# Default queue for background tasks
default_queue = Queue("default", connection=redis_conn)


def enqueue_task(func: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
    """
    Enqueue a background task.

    Args:
        func: Function to execute
        *args: Positional arguments for the function
        **kwargs: Keyword arguments for the function

    Returns:
        Job ID
    """
    job = default_queue.enqueue(func, *args, **kwargs)
    logger.info(f"Enqueued task {func.__name__} with job ID: {job.id}")
    return job.id


def try_enqueue(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Optional[str]:
    """
    Enqueue a task when mail is configured; never fail the caller.

    Returns:
        Job ID, or None when mail is disabled or Redis is unreachable
    """
    if not settings.mail_enabled:
        logger.info(f"Mail not configured; skipping {func.__name__}")
        return None
    try:
        return enqueue_task(func, *args, **kwargs)
    except RedisError as e:
        logger.error(f"Could not enqueue {func.__name__}: {e}")
        return None

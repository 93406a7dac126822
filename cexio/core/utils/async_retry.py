import asyncio
import functools
import logging
from typing import List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field


class AllTriesFailedException(EnvironmentError):
    pass


class RetryPolicy(BaseModel):
    """
    Bounded exponential backoff. `retries` counts the attempts made after the first one.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    retries: int = Field(default=3, ge=0)
    factor: float = Field(default=2.0, ge=1.0)
    min_timeout: float = Field(default=1.0, ge=0.0)
    max_timeout: float = Field(default=30.0, ge=0.0)

    def delay_for(self, attempt: int) -> float:
        """
        :param attempt: the 1-based number of the attempt that just failed
        :return: seconds to wait before the next attempt
        """
        return min(self.max_timeout, self.min_timeout * self.factor ** (attempt - 1))


async def _sleep(delay: float):
    """Used to mock in test cases."""
    await asyncio.sleep(delay)


def async_retry(policy: Optional[RetryPolicy] = None,
                exception_types: List[Type[Exception]] = [Exception],
                logger: logging.Logger = logging.getLogger("retry"),
                ):
    """
    :param policy: backoff policy, defaults to `RetryPolicy()`
    :param exception_types: Exception type for triggering retry
    :param logger:
    :return:
    """
    policy = policy or RetryPolicy()
    total_attempts = policy.retries + 1

    def decorator(fn):
        @functools.wraps(fn)
        async def retry(*args, **kwargs):
            last_exception: Optional[Exception] = None
            for attempt in range(1, total_attempts + 1):
                try:
                    return await fn(*args, **kwargs)
                except tuple(exception_types) as exc:
                    last_exception = exc
                    if attempt == total_attempts:
                        break
                    delay = policy.delay_for(attempt)
                    logger.info(f"Exception raised for {last_exception!r}: {fn.__name__}. "
                                f"Retrying {attempt}/{policy.retries} in {delay:.2f}s.")
                    await _sleep(delay)
            raise AllTriesFailedException(
                f"{fn.__name__} failed after {total_attempts} attempt(s)."
            ) from last_exception
        return retry

    return decorator

"""
Retry Logic Utilities

Provides automatic retry for provider calls with exponential backoff.
Only non-streaming completions are retried: once a stream has yielded text a
retry would duplicate output.
"""

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log,
    after_log
)
import httpx
import logging

from synapse_reader.config import settings
from synapse_reader.core.exceptions import ProviderError, ProviderRateLimitError

logger = logging.getLogger(__name__)


def is_transient_provider_error(error: BaseException) -> bool:
    """
    Transport failures, rate limits and 5xx answers are worth another try;
    4xx answers (bad key, bad request) are not
    """
    if isinstance(error, (httpx.TransportError, ProviderRateLimitError)):
        return True
    if isinstance(error, ProviderError) and error.status_code is not None:
        return error.status_code >= 500
    return False


def retry_on_provider_error(max_attempts: int = None, multiplier: float = 1):
    """
    Decorator for retrying async provider calls on transient errors

    Args:
        max_attempts: Maximum attempts (default: settings.RETRY_MAX_ATTEMPTS,
            1 when RETRY_ENABLED is off)
        multiplier: Backoff multiplier in seconds (0 disables waiting)

    Returns:
        Tenacity retry decorator
    """
    if max_attempts is None:
        max_attempts = settings.RETRY_MAX_ATTEMPTS if settings.RETRY_ENABLED else 1

    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=multiplier,
            min=0,
            max=20,
            exp_base=settings.RETRY_EXPONENTIAL_BASE
        ),
        retry=retry_if_exception(is_transient_provider_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.DEBUG),
        reraise=True
    )

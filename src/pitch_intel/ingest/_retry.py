import logging
from collections.abc import Callable
from typing import Any

import httpx
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (httpx.TransportError, httpx.HTTPStatusError)


def default_http_retry(label: str, attempts: int = 3) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Return a tenacity retry decorator for feed requests.

    *label* names the request in the warning logged before each retry,
    e.g. ``"Retrying <label> (attempt 2): <error>"``. The last failure is
    re-raised once *attempts* are exhausted.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s (attempt %d): %s", label, retry_state.attempt_number, retry_state.outcome)

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=1, max=10),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=_log_retry,
        reraise=True,
    )

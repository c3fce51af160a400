"""Retry policy for the delivery pipeline."""

from dataclasses import dataclass
from typing import Optional

import requests

from notifier.configuration.settings import DeliverySettings

# 501 Not Implemented will not start working on retry
NON_RETRYABLE_SERVER_STATUSES = frozenset({501})


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff retry policy.

    Attributes:
        wait_min: First backoff wait in seconds
        wait_max: Backoff ceiling in seconds
        max_retries: Retries after the original attempt
    """

    wait_min: float = 2.0
    wait_max: float = 30.0
    max_retries: int = 4

    @classmethod
    def from_settings(cls, settings: DeliverySettings) -> "RetryPolicy":
        return cls(
            wait_min=settings.retry_wait_min_seconds,
            wait_max=settings.retry_wait_max_seconds,
            max_retries=settings.retry_max,
        )

    def should_retry(self, response: Optional[requests.Response]) -> bool:
        """Decide whether an attempt outcome is transient.

        Args:
            response: The response, or None when the transport failed

        Returns:
            True for transport failures and 5xx responses, False otherwise
        """
        if response is None:
            return True
        return (
            500 <= response.status_code < 600
            and response.status_code not in NON_RETRYABLE_SERVER_STATUSES
        )

    def backoff(self, attempt: int, response: Optional[requests.Response] = None) -> float:
        """Seconds to wait before retry number attempt + 1.

        A Retry-After header on a 503 response is honored, capped at wait_max.
        """
        if response is not None and response.status_code == 503:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                try:
                    return min(float(int(retry_after)), self.wait_max)
                except ValueError:
                    pass
        return min(self.wait_min * (2**attempt), self.wait_max)

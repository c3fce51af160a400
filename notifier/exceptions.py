"""Custom exceptions for the notifier.

Every error raised by a provider ``post()`` call or by provider construction
derives from :class:`NotifierError` so the dispatcher can record it per
provider without affecting other providers.
"""

from typing import Optional


class NotifierError(Exception):
    """Base exception for all notifier errors.

    Example:
        try:
            provider.post(ctx, event)
        except NotifierError as e:
            logger.error("notification_failed", error=str(e))
    """

    pass


class ConstructionError(NotifierError):
    """Raised when a provider cannot be built from its configuration.

    Covers malformed addresses, empty required credentials and malformed
    ``owner/repo`` repository ids. Raised before any network I/O, never
    retried.

    Example:
        >>> SlackProvider(address="not a url")
        Traceback (most recent call last):
        ...
        ConstructionError: invalid Slack hook URL not a url
    """

    pass


class DeliveryError(NotifierError):
    """Raised when a delivery to a sink failed.

    Attributes:
        status_code: HTTP status code of the last response, if one was received
        body: Raw body of the last response, if one was received
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ):
        """Initialize with message and optional response details.

        Args:
            message: Error message
            status_code: HTTP status code of the rejected response
            body: Response body of the rejected response
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DeliveryCancelledError(NotifierError):
    """Raised when the caller's delivery context was cancelled or expired.

    Deliberately not a DeliveryError: the sink did not reject anything,
    the caller stopped waiting.
    """

    pass


class InputError(NotifierError):
    """Raised when an event lacks metadata a provider requires.

    Example:
        >>> provider.post(ctx, event_without_revision)
        Traceback (most recent call last):
        ...
        InputError: missing revision metadata
    """

    pass


class AmbiguousStateError(NotifierError):
    """Raised when an event cannot be mapped to a sink status."""

    pass

"""Cancellation scope for a single delivery.

A DeliveryContext carries an optional deadline and a cancellation flag.
The delivery pipeline derives request timeouts from the remaining time and
waits out backoff delays on the cancellation flag, so an expired or
cancelled context stops a post between attempts and bounds every request.
"""

import threading
import time
from typing import Optional

from notifier.exceptions import DeliveryCancelledError


class DeliveryContext:
    """Deadline and cancellation flag for one post call.

    Attributes:
        deadline: Monotonic clock deadline, or None for no deadline

    Example:
        ctx = DeliveryContext(timeout=15)
        provider.post(ctx, event)

        # From another thread
        ctx.cancel()
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """Initialize the context.

        Args:
            timeout: Seconds from now until the context expires
            cancel_event: Optional shared event; setting it cancels the context
        """
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancel_event = cancel_event or threading.Event()

    @classmethod
    def background(cls) -> "DeliveryContext":
        """A context that never expires."""
        return cls()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when there is none."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise DeliveryCancelledError if the context is done."""
        if self.cancelled:
            raise DeliveryCancelledError("delivery context cancelled")
        if self.expired:
            raise DeliveryCancelledError("delivery context deadline exceeded")

    def wait(self, seconds: float) -> None:
        """Sleep for seconds unless the context ends first.

        Raises:
            DeliveryCancelledError: if the context is cancelled or its
                deadline passes before the wait completes.
        """
        self.check()
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._cancel_event.wait(remaining)
            self.check()
            # Deadline reached without cancellation
            raise DeliveryCancelledError("delivery context deadline exceeded")
        self._cancel_event.wait(seconds)
        self.check()

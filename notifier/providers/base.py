"""Provider capability.

Every sink implements a single operation, ``post(ctx, event)``. Providers
share no state; common behavior lives in helper functions in
``notifier.providers.formatting`` and ``notifier.delivery``.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notifier.configuration.providers import TLSConfig
from notifier.delivery import (
    DeliveryContext,
    PostOptions,
    RequestModifier,
    ResponseValidator,
    RetryPolicy,
    validate_default_response,
)
from notifier.events import Event


class Provider(ABC):
    """Notification sink.

    Returning normally means the event was delivered or deliberately
    skipped. Any failure is raised as a NotifierError subclass:

    - DeliveryError: the sink rejected the event or was unreachable
    - DeliveryCancelledError: ctx was cancelled or expired
    - InputError: the event lacks metadata this sink requires
    - AmbiguousStateError: the event cannot be mapped to a sink status

    Example Implementation:
        class EchoProvider(Provider):

            def post(self, ctx: DeliveryContext, event: Event) -> None:
                if event.is_commit_status_update():
                    return
                post_message(ctx, self.address, {"text": event.message})
    """

    @abstractmethod
    def post(self, ctx: DeliveryContext, event: Event) -> None:
        """Deliver event to the sink.

        Args:
            ctx: Cancellation scope for every network operation of this call
            event: Event to deliver, never mutated
        """
        pass


def build_post_options(
    proxy: str = "",
    tls: Optional[TLSConfig] = None,
    retry_policy: Optional[RetryPolicy] = None,
    request_modifier: Optional[RequestModifier] = None,
    response_validator: Optional[ResponseValidator] = None,
) -> PostOptions:
    """Assemble delivery options from provider configuration."""
    return PostOptions(
        proxy=proxy,
        tls=tls,
        request_modifier=request_modifier,
        response_validator=response_validator or validate_default_response,
        retry_policy=retry_policy or RetryPolicy(),
    )

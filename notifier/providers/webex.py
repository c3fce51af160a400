"""Webex provider.

Setup from the Webex App:
    - create a space for the notifications
    - register a bot at https://developer.webex.com and add its email to the space
    - use the bot access token as the provider token
    - use the space's room id as the provider channel
"""

from typing import Optional

from pydantic import BaseModel

from notifier.configuration.providers import TLSConfig
from notifier.delivery import (
    DeliveryContext,
    RetryPolicy,
    post_message,
    token_auth_modifier,
    validate_address,
    validate_proxy,
)
from notifier.events import Event, Severity
from notifier.exceptions import ConstructionError
from notifier.providers.base import Provider, build_post_options
from notifier.providers.formatting import format_object_ref


class WebexPayload(BaseModel):
    roomId: Optional[str] = None
    markdown: Optional[str] = None


def build_webex_markdown(event: Event) -> str:
    emoji = "💣" if event.severity == Severity.ERROR.value else "✅"
    lines = [f"{emoji} **{format_object_ref(event)}**", event.message]
    for key, value in event.metadata_items():
        lines.append(f">**{key}**: {value}")
    return "\n".join(lines) + "\n"


class WebexProvider(Provider):
    """Webex messages API sink.

    Attributes:
        address: Messages API URL, normally https://webexapis.com/v1/messages
        room_id: Target space
        token: Bot access token
    """

    def __init__(
        self,
        address: str,
        token: str,
        channel: str = "",
        proxy: str = "",
        tls: Optional[TLSConfig] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.address = validate_address(address, "Webex hook")
        if not token:
            raise ConstructionError("Webex bot token cannot be empty")
        self.token = token
        self.room_id = channel
        self.proxy = validate_proxy(proxy)
        self.tls = tls
        self.retry_policy = retry_policy

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        if event.is_commit_status_update():
            return

        payload = WebexPayload(
            roomId=self.room_id or None,
            markdown=build_webex_markdown(event),
        )
        options = build_post_options(
            proxy=self.proxy,
            tls=self.tls,
            retry_policy=self.retry_policy,
            request_modifier=token_auth_modifier(self.token),
        )
        post_message(ctx, self.address, payload, options)

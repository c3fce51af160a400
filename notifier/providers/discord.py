"""Discord provider.

Uses Discord's Slack-compatible webhook endpoint, so the payload is the
Slack one and the address always ends in ``/slack``.
"""

from typing import Optional
from urllib.parse import urlparse, urlunparse

from notifier.delivery import (
    DeliveryContext,
    RetryPolicy,
    post_message,
    validate_address,
    validate_proxy,
)
from notifier.events import Event
from notifier.providers.base import Provider, build_post_options
from notifier.providers.slack import build_slack_payload


def slack_compatible_address(address: str) -> str:
    """Append the ``/slack`` path segment unless already present."""
    parsed = urlparse(address)
    if parsed.path.endswith("/slack"):
        return address
    return urlunparse(parsed._replace(path=parsed.path.rstrip("/") + "/slack"))


class DiscordProvider(Provider):
    """Discord webhook sink."""

    def __init__(
        self,
        address: str,
        proxy: str = "",
        username: str = "",
        channel: str = "",
        retry_policy: Optional[RetryPolicy] = None,
    ):
        validate_address(address, "Discord hook")
        self.address = slack_compatible_address(address)
        self.proxy = validate_proxy(proxy)
        self.username = username
        self.channel = channel
        self.retry_policy = retry_policy

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        if event.is_commit_status_update():
            return

        payload = build_slack_payload(event, self.username)
        options = build_post_options(proxy=self.proxy, retry_policy=self.retry_policy)
        post_message(ctx, self.address, payload, options)

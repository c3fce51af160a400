"""Slack provider.

Posts a single attachment per event, either to an incoming webhook or to
the chat.postMessage Web API. The Web API always answers 200 and signals
failure in the body, so it gets its own response validator.
"""

from typing import List, Optional

import structlog
from pydantic import BaseModel, Field

from notifier.configuration.providers import TLSConfig
from notifier.delivery import (
    DeliveryContext,
    RetryPolicy,
    post_message,
    token_auth_modifier,
    validate_address,
    validate_proxy,
    validate_slack_response,
)
from notifier.events import Event
from notifier.providers.base import Provider, build_post_options
from notifier.providers.formatting import format_object_ref, severity_color

logger = structlog.get_logger()

SLACK_CHAT_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"


class SlackField(BaseModel):
    title: str
    value: str
    short: bool = False


class SlackAttachment(BaseModel):
    color: str
    author_name: str
    text: str
    mrkdwn_in: List[str] = Field(default_factory=lambda: ["text"])
    fields: List[SlackField] = Field(default_factory=list)


class SlackPayload(BaseModel):
    """Slack message body, also accepted by Discord's Slack-compatible endpoint."""

    channel: Optional[str] = None
    username: str = ""
    icon_url: str = ""
    icon_emoji: str = ""
    text: Optional[str] = None
    attachments: List[SlackAttachment] = Field(default_factory=list)


def build_slack_payload(event: Event, username: str = "", channel: str = "") -> SlackPayload:
    """Format an event as a Slack message with one attachment."""
    fields = [SlackField(title=k, value=v) for k, v in event.metadata_items()]
    attachment = SlackAttachment(
        color=severity_color(event),
        author_name=format_object_ref(event),
        text=event.message,
        fields=fields,
    )
    return SlackPayload(
        channel=channel or None,
        username=username or event.reporting_controller,
        attachments=[attachment],
    )


class SlackProvider(Provider):
    """Slack incoming webhook or chat.postMessage sink.

    Attributes:
        address: Webhook URL or the chat.postMessage API URL
        proxy: Optional proxy URL
        token: Optional bot token sent as a bearer token
        tls: Optional TLS overrides
        username: Display name, defaults to the event's reporting controller
        channel: Optional channel override
    """

    def __init__(
        self,
        address: str,
        proxy: str = "",
        token: str = "",
        tls: Optional[TLSConfig] = None,
        username: str = "",
        channel: str = "",
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.address = validate_address(address, "Slack hook")
        self.proxy = validate_proxy(proxy)
        self.token = token
        self.tls = tls
        self.username = username
        self.channel = channel
        self.retry_policy = retry_policy

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        if event.is_commit_status_update():
            return

        payload = build_slack_payload(event, self.username, self.channel)

        validator = None
        if self.address == SLACK_CHAT_POST_MESSAGE_URL:
            validator = validate_slack_response

        options = build_post_options(
            proxy=self.proxy,
            tls=self.tls,
            retry_policy=self.retry_policy,
            request_modifier=token_auth_modifier(self.token),
            response_validator=validator,
        )
        post_message(ctx, self.address, payload, options)
        logger.debug("slack_message_posted", object=format_object_ref(event))

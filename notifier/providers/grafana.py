"""Grafana provider.

Creates a Graphite-format annotation per event. Grafana tags use ``:`` as
a separator, so ``:`` inside metadata is replaced by ``|``.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from notifier.configuration.providers import TLSConfig
from notifier.delivery import (
    DeliveryContext,
    RetryPolicy,
    credentials_auth_modifier,
    post_message,
    validate_address,
    validate_proxy,
)
from notifier.events import Event
from notifier.providers.base import Provider, build_post_options
from notifier.providers.formatting import format_object_ref

ANNOTATION_TAG = "flux"


class GraphitePayload(BaseModel):
    when: int
    text: str
    tags: List[str] = Field(default_factory=list)


def build_annotation_tags(event: Event) -> List[str]:
    tags = [ANNOTATION_TAG, event.reporting_controller]
    for key, value in event.metadata_items():
        tags.append(f"{key.replace(':', '|')}: {value.replace(':', '|')}")
    obj = event.involved_object
    tags.append(f"kind: {obj.kind}")
    tags.append(f"name: {obj.name}")
    tags.append(f"namespace: {obj.namespace}")
    return tags


class GrafanaProvider(Provider):
    """Grafana annotations API sink.

    Authenticates with the token as a bearer token when set, otherwise with
    basic auth when both username and password are set.
    """

    def __init__(
        self,
        address: str,
        proxy: str = "",
        token: str = "",
        tls: Optional[TLSConfig] = None,
        username: str = "",
        password: str = "",
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.address = validate_address(address, "Grafana")
        self.proxy = validate_proxy(proxy)
        self.token = token
        self.tls = tls
        self.username = username
        self.password = password
        self.retry_policy = retry_policy

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        if event.is_commit_status_update():
            return

        payload = GraphitePayload(
            when=int(event.timestamp.timestamp()),
            text=format_object_ref(event),
            tags=build_annotation_tags(event),
        )
        options = build_post_options(
            proxy=self.proxy,
            tls=self.tls,
            retry_policy=self.retry_policy,
            request_modifier=credentials_auth_modifier(
                token=self.token, username=self.username, password=self.password
            ),
        )
        post_message(ctx, self.address, payload, options)

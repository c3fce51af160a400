"""Opsgenie provider: one alert per event."""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from notifier.configuration.providers import TLSConfig
from notifier.delivery import (
    DeliveryContext,
    RetryPolicy,
    post_message,
    token_auth_modifier,
    validate_address,
    validate_proxy,
)
from notifier.events import Event
from notifier.exceptions import ConstructionError
from notifier.providers.base import Provider, build_post_options


class OpsgenieAlert(BaseModel):
    message: str
    description: str
    details: Dict[str, str] = Field(default_factory=dict)


class OpsgenieProvider(Provider):
    """Opsgenie alerts API sink, authenticated with ``GenieKey <token>``."""

    def __init__(
        self,
        address: str,
        token: str,
        proxy: str = "",
        tls: Optional[TLSConfig] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.address = validate_address(address, "Opsgenie hook")
        if not token:
            raise ConstructionError("empty Opsgenie apikey/token")
        self.token = token
        self.proxy = validate_proxy(proxy)
        self.tls = tls
        self.retry_policy = retry_policy

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        if event.is_commit_status_update():
            return

        details = dict(event.metadata_items())
        details["severity"] = event.severity
        obj = event.involved_object
        payload = OpsgenieAlert(
            message=f"{obj.kind}/{obj.name}",
            description=event.message,
            details=details,
        )
        options = build_post_options(
            proxy=self.proxy,
            tls=self.tls,
            retry_policy=self.retry_policy,
            request_modifier=token_auth_modifier(self.token, scheme="GenieKey"),
        )
        post_message(ctx, self.address, payload, options)

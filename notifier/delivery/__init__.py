"""Delivery pipeline shared by all broadcast providers.

Public API:
    - post_message(): retrying JSON POST with response validation
    - PostOptions: proxy, TLS, request modifier, response validator, retry policy
    - DeliveryContext: caller-supplied cancellation scope
    - RetryPolicy: exponential backoff bounds
"""

from notifier.delivery.auth import (
    RequestModifier,
    basic_auth,
    credentials_auth_modifier,
    token_auth_modifier,
)
from notifier.delivery.client import PostOptions, marshal_payload, post_message
from notifier.delivery.context import DeliveryContext
from notifier.delivery.retry import RetryPolicy
from notifier.delivery.transport import new_http_session, validate_address, validate_proxy
from notifier.delivery.validators import (
    ResponseValidator,
    validate_default_response,
    validate_slack_response,
)

__all__ = [
    "DeliveryContext",
    "PostOptions",
    "RequestModifier",
    "ResponseValidator",
    "RetryPolicy",
    "basic_auth",
    "credentials_auth_modifier",
    "marshal_payload",
    "new_http_session",
    "post_message",
    "token_auth_modifier",
    "validate_address",
    "validate_default_response",
    "validate_proxy",
    "validate_slack_response",
]

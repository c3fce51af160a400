"""Retrying JSON POST delivery.

Every broadcast provider delivers through ``post_message``:

    payload
        ↓  JSON marshal
    POST <address>  (Content-Type: application/json, request modifier applied)
        ↓  transport error or 5xx → exponential backoff, bounded retries
    final response
        ↓  response validator
    success | DeliveryError

Timeouts come exclusively from the caller's DeliveryContext; the session
itself applies no fixed deadline.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
import structlog
from pydantic import BaseModel

from notifier.configuration.providers import TLSConfig
from notifier.delivery.auth import RequestModifier
from notifier.delivery.context import DeliveryContext
from notifier.delivery.retry import RetryPolicy
from notifier.delivery.transport import new_http_session
from notifier.delivery.validators import ResponseValidator, validate_default_response
from notifier.exceptions import DeliveryCancelledError, DeliveryError

logger = structlog.get_logger()

# Failures worth another attempt; any other RequestException fails at once
RETRYABLE_TRANSPORT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


@dataclass(frozen=True)
class PostOptions:
    """Options recognized by post_message.

    Attributes:
        proxy: Route all traffic through this proxy URL
        tls: Override transport trust/identity material
        request_modifier: Mutates the outgoing request before send
        response_validator: Success predicate over (status code, body)
        retry_policy: Backoff and retry bounds
    """

    proxy: str = ""
    tls: Optional[TLSConfig] = None
    request_modifier: Optional[RequestModifier] = None
    response_validator: ResponseValidator = validate_default_response
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)


def marshal_payload(payload: Any) -> bytes:
    """Serialize a payload to JSON bytes.

    Pydantic models are dumped without None-valued fields.
    """
    try:
        if isinstance(payload, BaseModel):
            return payload.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise DeliveryError(f"marshalling notification payload failed: {e}") from e


def post_message(
    ctx: DeliveryContext,
    address: str,
    payload: Any,
    options: Optional[PostOptions] = None,
) -> None:
    """POST payload as JSON to address and validate the response.

    Args:
        ctx: Cancellation scope; bounds every request and backoff wait
        address: Validated absolute destination URL
        payload: JSON-serializable payload (dict, list or pydantic model)
        options: Delivery options; defaults apply when omitted

    Raises:
        DeliveryError: marshalling failure, transport failure or 5xx after
            retries are exhausted, unreadable body, or validator rejection
        DeliveryCancelledError: the context was cancelled or expired
    """
    options = options or PostOptions()
    data = marshal_payload(payload)

    request = requests.Request(
        "POST",
        address,
        data=data,
        headers={"Content-Type": "application/json"},
    )
    if options.request_modifier is not None:
        options.request_modifier(request)

    with new_http_session(options.proxy, options.tls) as session:
        status_code, body = _send_with_retry(ctx, session, request, options.retry_policy)

    options.response_validator(status_code, body)


def _send_with_retry(
    ctx: DeliveryContext,
    session: requests.Session,
    request: requests.Request,
    policy: RetryPolicy,
) -> tuple:
    """Send request, retrying transient failures.

    Returns:
        (status_code, body) of the first non-transient response
    """
    try:
        prepared = session.prepare_request(request)
    except (requests.RequestException, ValueError) as e:
        # The message of an invalid header quotes its value, which may be a credential
        raise DeliveryError(
            f"failed to build request: {request.method} {_redact(request.url)}: "
            f"{type(e).__name__}"
        ) from e
    settings = session.merge_environment_settings(prepared.url, {}, True, None, None)
    log = logger.bind(method=prepared.method, url=_redact(prepared.url))

    attempt = 0
    while True:
        ctx.check()
        response: Optional[requests.Response] = None
        transport_error: Optional[Exception] = None

        try:
            response = session.send(prepared, timeout=ctx.remaining(), **settings)
        except RETRYABLE_TRANSPORT_ERRORS as e:
            if ctx.cancelled or ctx.expired:
                raise DeliveryCancelledError(
                    f"delivery context ended during request: {e}"
                ) from e
            transport_error = e
        except requests.RequestException as e:
            if ctx.cancelled or ctx.expired:
                raise DeliveryCancelledError(
                    f"delivery context ended during request: {e}"
                ) from e
            log.error("delivery_failed", attempts=attempt + 1, error=str(e))
            raise DeliveryError(
                f"failed to execute request: {prepared.method} {_redact(prepared.url)}: {e}"
            ) from e

        if response is not None and not policy.should_retry(response):
            return response.status_code, _read_body(response)

        if attempt >= policy.max_retries:
            return _give_up(log, prepared, attempt, response, transport_error)

        delay = policy.backoff(attempt, response)
        log.info(
            "delivery_attempt_retrying",
            attempt=attempt + 1,
            status_code=response.status_code if response is not None else None,
            error=str(transport_error) if transport_error else None,
            delay_seconds=delay,
        )
        if response is not None:
            response.close()
        attempt += 1
        ctx.wait(delay)


def _read_body(response: requests.Response) -> bytes:
    try:
        return response.content
    except requests.RequestException as e:
        raise DeliveryError(
            f"failed to read response body: {e}",
            status_code=response.status_code,
        ) from e
    finally:
        response.close()


def _give_up(
    log,
    prepared: requests.PreparedRequest,
    attempt: int,
    response: Optional[requests.Response],
    transport_error: Optional[Exception],
):
    attempts = attempt + 1
    if response is not None:
        body = _read_body(response)
        log.error(
            "delivery_failed",
            attempts=attempts,
            status_code=response.status_code,
        )
        raise DeliveryError(
            f"{prepared.method} {_redact(prepared.url)} giving up after {attempts} "
            f"attempt(s): status code {response.status_code}, "
            f"{body.decode('utf-8', errors='replace')}",
            status_code=response.status_code,
            body=body,
        )

    log.error("delivery_failed", attempts=attempts, error=str(transport_error))
    raise DeliveryError(
        f"failed to execute request: {prepared.method} {_redact(prepared.url)} "
        f"giving up after {attempts} attempt(s): {transport_error}"
    ) from transport_error


def _redact(url: Optional[str]) -> str:
    """Drop the query string, which may carry credentials."""
    if not url:
        return ""
    return url.split("?", 1)[0]

"""Response validators.

A validator receives the status code and raw body of the final response and
raises DeliveryError when the sink did not accept the delivery.
"""

import json
from typing import Callable

from notifier.exceptions import DeliveryError

ResponseValidator = Callable[[int, bytes], None]

ACCEPTED_STATUS_CODES = frozenset({200, 201, 202})


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def validate_default_response(status_code: int, body: bytes) -> None:
    """Accept 200, 201 and 202; reject everything else."""
    if status_code in ACCEPTED_STATUS_CODES:
        return
    raise DeliveryError(
        f"request failed with status code {status_code}, {_decode(body)}",
        status_code=status_code,
        body=body,
    )


def validate_slack_response(status_code: int, body: bytes) -> None:
    """Validate a Slack chat.postMessage response.

    chat.postMessage always answers 200 and reports failure through the
    ``ok`` and ``error`` fields of the JSON body. Incoming webhooks use
    status codes instead and go through the default validator.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DeliveryError(
            f"unable to unmarshal response body: {e}",
            status_code=status_code,
            body=body,
        ) from e

    if isinstance(data, dict) and data.get("ok") is True:
        return

    error = data.get("error", "") if isinstance(data, dict) else ""
    raise DeliveryError(
        f"Slack responded with error: {error}",
        status_code=status_code,
        body=body,
    )

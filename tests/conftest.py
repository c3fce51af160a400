"""Shared fixtures for notifier tests.

Network boundaries are faked by patching ``requests.Session.send``; no test
performs real I/O.
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from notifier.delivery import DeliveryContext, RetryPolicy
from notifier.events import Event, InvolvedObject


def build_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a requests.Response without a live connection.

    dict/list bodies are JSON encoded, str bodies UTF-8 encoded.
    """
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response._content_consumed = True
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


class FakeGiteaServer:
    """Routes prepared requests to canned responses by method and path.

    Unrouted requests get a 404 with a Gitea-style error body.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[requests.PreparedRequest] = []

    def route(self, method: str, path: str, status_code: int = 200, body: Any = None):
        self.routes[(method, path)] = (status_code, body)

    def __call__(self, prepared: requests.PreparedRequest, **kwargs) -> requests.Response:
        self.requests.append(prepared)
        key = (prepared.method, urlparse(prepared.url).path)
        if key not in self.routes:
            return build_response(404, {"message": "The target couldn't be found."})
        status_code, body = self.routes[key]
        return build_response(status_code, body)

    def calls(self, method: str, path: Optional[str] = None) -> List[requests.PreparedRequest]:
        return [
            r
            for r in self.requests
            if r.method == method and (path is None or urlparse(r.url).path == path)
        ]

    @staticmethod
    def json_body(prepared: requests.PreparedRequest) -> Any:
        return json.loads(prepared.body)

    @staticmethod
    def query(prepared: requests.PreparedRequest) -> Dict[str, List[str]]:
        return parse_qs(urlparse(prepared.url).query)


@pytest.fixture
def make_response():
    """Factory for offline requests.Response objects."""
    return build_response


@pytest.fixture
def mock_send():
    """Patch requests.Session.send.

    The mock is a plain class attribute, so call args start with the
    PreparedRequest rather than the session.
    """
    with patch("requests.Session.send") as send:
        yield send


@pytest.fixture
def gitea_server():
    """Fake Gitea API answering through a patched requests.Session.send."""
    server = FakeGiteaServer()
    with patch("requests.Session.send", side_effect=server):
        yield server


@pytest.fixture
def no_wait_policy():
    """Retry policy that never sleeps between attempts."""
    return RetryPolicy(wait_min=0, wait_max=0, max_retries=4)


@pytest.fixture
def ctx():
    return DeliveryContext(timeout=30)


@pytest.fixture
def event_factory():
    """Factory for Event instances with sensible defaults."""

    def _factory(
        kind: str = "Kustomization",
        name: str = "apps",
        namespace: str = "flux-system",
        severity: str = "info",
        reason: str = "ReconciliationSucceeded",
        message: str = "Applied revision main@sha1:abc123",
        metadata: Optional[Dict[str, str]] = None,
        reporting_controller: str = "kustomize-controller",
        **kwargs,
    ) -> Event:
        return Event(
            involved_object=InvolvedObject(kind=kind, name=name, namespace=namespace),
            severity=severity,
            reason=reason,
            message=message,
            metadata=metadata,
            reporting_controller=reporting_controller,
            **kwargs,
        )

    return _factory

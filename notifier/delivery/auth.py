"""Request modifiers that inject Authorization headers."""

import base64
from typing import Callable

import requests

RequestModifier = Callable[[requests.Request], None]


def basic_auth(username: str, password: str) -> str:
    """Base64 encoded ``username:password``."""
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def token_auth_modifier(token: str, scheme: str = "Bearer") -> RequestModifier:
    """Set ``Authorization: <scheme> <token>`` when a token is configured."""

    def modify(request: requests.Request) -> None:
        if token:
            request.headers["Authorization"] = f"{scheme} {token}"

    return modify


def credentials_auth_modifier(
    token: str = "", username: str = "", password: str = ""
) -> RequestModifier:
    """Bearer token if present, else basic auth when both username and
    password are set, else no Authorization header."""

    def modify(request: requests.Request) -> None:
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        elif username and password:
            request.headers["Authorization"] = f"Basic {basic_auth(username, password)}"

    return modify

"""HTTP transport construction and address validation.

Sessions are built per delivery from immutable provider configuration, so
no connection state is shared across post calls or providers.
"""

from typing import Optional
from urllib.parse import urlparse

import requests

from notifier.configuration.providers import TLSConfig
from notifier.exceptions import ConstructionError

USER_AGENT = "reconcile-notifier/1.0"


def validate_address(address: str, label: str) -> str:
    """Ensure address is an absolute http(s) URL.

    Args:
        address: URL to validate
        label: Sink label used in the error message (e.g. "Slack hook")

    Returns:
        The address, unchanged

    Raises:
        ConstructionError: if address is not an absolute URL
    """
    try:
        parsed = urlparse(address)
    except ValueError as e:
        raise ConstructionError(f"invalid {label} URL {address}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConstructionError(f"invalid {label} URL {address}")
    return address


def validate_proxy(proxy: str) -> str:
    """Ensure an optional proxy URL is usable. Empty means no proxy."""
    if not proxy:
        return proxy
    try:
        parsed = urlparse(proxy)
    except ValueError as e:
        raise ConstructionError(f"invalid proxy URL {proxy}: {e}") from e
    if not parsed.scheme or not parsed.netloc:
        raise ConstructionError(f"invalid proxy URL {proxy}")
    return proxy


def new_http_session(
    proxy: str = "",
    tls: Optional[TLSConfig] = None,
) -> requests.Session:
    """Build a session configured with the given proxy and TLS overrides.

    No timeout is set here; the caller's DeliveryContext bounds each request.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})

    if proxy:
        session.proxies = {"http": proxy, "https": proxy}
        # Explicit proxy wins over environment proxies
        session.trust_env = False

    if tls is not None:
        if tls.insecure_skip_verify:
            session.verify = False
        elif tls.ca_file:
            session.verify = tls.ca_file
        if tls.cert_file:
            session.cert = (tls.cert_file, tls.key_file) if tls.key_file else tls.cert_file

    return session

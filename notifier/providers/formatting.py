"""Formatting helpers shared by providers."""

import re
from typing import List, Tuple

from notifier.events import Event, Severity
from notifier.exceptions import InputError

_CAMEL_CASE_WORD = re.compile(r"[A-Z][^A-Z]*")


def format_object_ref(event: Event) -> str:
    """``kind/name.namespace`` with the kind lower-cased."""
    obj = event.involved_object
    return f"{obj.kind.lower()}/{obj.name}.{obj.namespace}"


def severity_color(event: Event) -> str:
    """Slack attachment color for the event severity."""
    return "danger" if event.severity == Severity.ERROR.value else "good"


def split_camel_case(value: str) -> List[str]:
    """Split "ReconciliationSucceeded" into ["Reconciliation", "Succeeded"]."""
    words = _CAMEL_CASE_WORD.findall(value)
    if not words and value:
        return [value]
    return words


def format_name_and_description(event: Event) -> Tuple[str, str]:
    """Commit status name and description for an event.

    Returns:
        ("kind/name", "reason words") both lower-cased, e.g.
        ("kustomization/apps", "reconciliation succeeded")
    """
    obj = event.involved_object
    name = f"{obj.kind}/{obj.name}".lower()
    description = " ".join(split_camel_case(event.reason)).lower()
    return name, description


def parse_revision(revision: str) -> str:
    """Extract the commit hash from a revision string.

    Accepted formats:
        main@sha1:abc123   → abc123
        sha256:abc123      → abc123
        main/abc123        → abc123 (legacy)
        abc123             → abc123

    Raises:
        InputError: if no hash can be extracted
    """
    rev = revision.strip()
    if "@" in rev:
        rev = rev.rsplit("@", 1)[1]
    if ":" in rev:
        rev = rev.split(":", 1)[1]
    elif "/" in rev:
        rev = rev.rsplit("/", 1)[1]
    if not rev:
        raise InputError(f"failed to parse revision {revision!r}")
    return rev

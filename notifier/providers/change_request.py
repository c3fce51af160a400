"""Comment formatting for change request (pull request) sinks.

The key marker embedded in every comment is the only record that a comment
was already posted for an object. It is derived from the provider UID and
the involved object, so it stays stable while the rest of the body changes.
"""

import hashlib
import re
from dataclasses import dataclass

from notifier.events import META_CHANGE_REQUEST_KEY, Event, Severity
from notifier.exceptions import InputError
from notifier.providers.formatting import format_object_ref

COMMENT_KEY_PREFIX = "flux-pr-comment-key"

# Optionally signed ASCII decimal
_DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ChangeRequestComment:
    """Builds comment bodies and key markers for one provider.

    Attributes:
        provider_uid: Stable identity of the provider object
        comment_key_prefix: Marker prefix
    """

    provider_uid: str
    comment_key_prefix: str = COMMENT_KEY_PREFIX

    def comment_key(self, event: Event) -> str:
        obj = event.involved_object
        identity = f"{self.provider_uid}/{obj.kind}/{obj.namespace}/{obj.name}"
        return hashlib.sha256(identity.encode("utf-8")).hexdigest()

    def format_comment_key_marker(self, event: Event) -> str:
        """HTML comment identifying the comment for this provider and object."""
        return f"<!-- {self.comment_key_prefix}: {self.comment_key(event)} -->"

    def format_comment_body(self, event: Event) -> str:
        emoji = "❌" if event.severity == Severity.ERROR.value else "✅"
        lines = [f"{emoji} **{format_object_ref(event)}**", "", event.message]

        metadata = [
            (k, v) for k, v in event.metadata_items() if k != META_CHANGE_REQUEST_KEY
        ]
        if metadata:
            lines.append("")
            lines.extend(f"- **{k}**: `{v}`" for k, v in sorted(metadata))

        lines.append("")
        lines.append(self.format_comment_key_marker(event))
        return "\n".join(lines)


def get_change_request_number(event: Event) -> int:
    """Pull request number carried in the event metadata.

    Raises:
        InputError: if the key is missing or its value is not an integer
    """
    value = event.get_metadata(META_CHANGE_REQUEST_KEY)
    if value is None:
        raise InputError(f"missing {META_CHANGE_REQUEST_KEY!r} metadata key")
    if not _DECIMAL_INTEGER.fullmatch(value):
        raise InputError(f"invalid {META_CHANGE_REQUEST_KEY!r} metadata value {value!r}")
    number = int(value)
    if number <= 0:
        raise InputError(f"invalid {META_CHANGE_REQUEST_KEY!r} metadata value {value!r}")
    return number

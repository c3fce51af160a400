"""Event model consumed by every provider.

Events are constructed by the caller and never mutated by providers.
``metadata`` is optional: every accessor tolerates a missing map.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Reserved metadata keys and values
META_REVISION_KEY = "revision"
META_CHANGE_REQUEST_KEY = "change_request"
META_COMMIT_STATUS_KEY = "commit_status"
META_COMMIT_STATUS_UPDATE_VALUE = "update"

# Reason reported while a reconciliation is still in progress
PROGRESSING_REASON = "Progressing"


class Severity(str, Enum):
    """Event severity levels."""

    INFO = "info"
    ERROR = "error"


class InvolvedObject(BaseModel):
    """Reference to the resource an event concerns."""

    model_config = ConfigDict(frozen=True)

    kind: str
    name: str
    namespace: str = ""


class Event(BaseModel):
    """Reconciliation event.

    ``severity`` is kept as a plain string so that values outside
    :class:`Severity` survive construction and are rejected by the
    providers that need a total mapping.

    Attributes:
        involved_object: The resource the event concerns
        severity: "info" or "error"
        reason: Short machine-readable reason (e.g. "ReconciliationSucceeded")
        message: Human-readable description
        metadata: Optional string map carrying structured hints
        timestamp: Time of occurrence
        reporting_controller: Originating component, default display name

    Example:
        event = Event(
            involved_object=InvolvedObject(kind="Kustomization", name="apps", namespace="flux-system"),
            severity=Severity.ERROR,
            reason="HealthCheckFailed",
            message="timeout waiting for deployment/podinfo",
            metadata={"revision": "main@sha1:abc123"},
            reporting_controller="kustomize-controller",
        )
    """

    model_config = ConfigDict(frozen=True)

    involved_object: InvolvedObject
    severity: str = Severity.INFO.value
    reason: str = ""
    message: str = ""
    metadata: Optional[Dict[str, str]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reporting_controller: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v):
        """Store Severity members as their plain string value."""
        if isinstance(v, Severity):
            return v.value
        return v

    def get_metadata(self, key: str) -> Optional[str]:
        """Return the metadata value for key, or None when absent."""
        if not self.metadata:
            return None
        return self.metadata.get(key)

    def has_metadata(self, key: str, value: str) -> bool:
        """Check whether metadata carries exactly the given key/value pair."""
        return self.get_metadata(key) == value

    def metadata_items(self) -> List[Tuple[str, str]]:
        """Metadata pairs, empty when metadata is absent."""
        if not self.metadata:
            return []
        return list(self.metadata.items())

    def get_revision(self) -> Optional[str]:
        """Revision identifier carried in metadata, if any."""
        return self.get_metadata(META_REVISION_KEY)

    def has_reason(self, reason: str) -> bool:
        return self.reason == reason

    def is_commit_status_update(self) -> bool:
        """Internal commit status ping that broadcast sinks must not show."""
        return self.has_metadata(META_COMMIT_STATUS_KEY, META_COMMIT_STATUS_UPDATE_VALUE)

"""Per-provider configuration records.

A ProviderConfig is built once per sink by the embedding application and is
immutable thereafter. Field-level validation happens here; address and
credential validation happens in the provider constructors, which raise
ConstructionError.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from notifier.exceptions import ConstructionError


class TLSConfig(BaseModel):
    """Transport trust and identity overrides.

    Attributes:
        ca_file: PEM bundle used to verify the sink's certificate
        cert_file: Client certificate (PEM) for mutual TLS
        key_file: Private key for cert_file, if not bundled with it
        insecure_skip_verify: Disable certificate verification entirely
    """

    model_config = ConfigDict(frozen=True)

    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    insecure_skip_verify: bool = False

    @field_validator("key_file")
    @classmethod
    def validate_key_file(cls, v: Optional[str], info) -> Optional[str]:
        """A key without a certificate is meaningless."""
        if v and not info.data.get("cert_file"):
            raise ValueError("key_file requires cert_file")
        return v


class ProviderConfig(BaseModel):
    """Configuration for a single notification provider.

    Attributes:
        type: Provider type (slack, discord, webex, grafana, opsgenie,
            gitea, giteapullrequestcomment)
        address: Endpoint URL or repository URL
        proxy: Optional proxy URL
        tls: Optional TLS overrides
        token: Bearer/API token
        username: Display name (chat sinks) or basic auth user (grafana)
        password: Basic auth password, or token fallback for Gitea
        channel: Channel or room id (chat sinks)
        commit_status: Commit status context label (gitea)
        provider_uid: Stable provider identity used in comment key markers

    Example:
        config = ProviderConfig(
            type="gitea",
            address="https://gitea.example.com/org/repo",
            token="s3cr3t",
            commit_status="flux/apps",
        )
    """

    model_config = ConfigDict(frozen=True)

    type: str
    address: str = ""
    proxy: str = ""
    tls: Optional[TLSConfig] = None
    token: str = Field(default="", repr=False)
    username: str = ""
    password: str = Field(default="", repr=False)
    channel: str = ""
    commit_status: str = ""
    provider_uid: str = ""

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("provider type cannot be empty")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderConfig":
        """Build a config from a plain mapping, e.g. decoded YAML or JSON.

        Raises:
            ConstructionError: if the mapping does not validate
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConstructionError(f"invalid provider configuration: {e}") from e

"""Unit tests for the Opsgenie provider."""

import json

import pytest

from notifier.exceptions import ConstructionError
from notifier.providers import OpsgenieProvider

ADDRESS = "https://api.opsgenie.com/v2/alerts"


@pytest.mark.unit
class TestOpsgenieProvider:
    """Tests for OpsgenieProvider."""

    def test_token_required(self):
        with pytest.raises(ConstructionError, match="empty Opsgenie apikey/token"):
            OpsgenieProvider(address=ADDRESS, token="")

    def test_post(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(202, {"result": "Request will be processed"})
        provider = OpsgenieProvider(address=ADDRESS, token="genie-key")
        event = event_factory(severity="error", metadata={"revision": "main@sha1:abc123"})

        provider.post(ctx, event)

        prepared = mock_send.call_args.args[0]
        assert prepared.headers["Authorization"] == "GenieKey genie-key"
        assert json.loads(prepared.body) == {
            "message": "Kustomization/apps",
            "description": "Applied revision main@sha1:abc123",
            "details": {"revision": "main@sha1:abc123", "severity": "error"},
        }

    def test_commit_status_update_not_sent(self, ctx, mock_send, event_factory):
        provider = OpsgenieProvider(address=ADDRESS, token="genie-key")

        provider.post(ctx, event_factory(metadata={"commit_status": "update"}))

        mock_send.assert_not_called()

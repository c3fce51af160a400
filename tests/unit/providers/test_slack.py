"""Unit tests for the Slack provider."""

import json

import pytest

from notifier.exceptions import ConstructionError, DeliveryError
from notifier.providers import SlackProvider, build_slack_payload
from notifier.providers.slack import SLACK_CHAT_POST_MESSAGE_URL

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


@pytest.mark.unit
class TestBuildSlackPayload:
    """Tests for build_slack_payload."""

    def test_info_event(self, event_factory):
        event = event_factory(metadata={"revision": "main@sha1:abc123"})

        payload = build_slack_payload(event).model_dump(exclude_none=True)

        assert payload["username"] == "kustomize-controller"
        assert "channel" not in payload
        assert payload["attachments"] == [
            {
                "color": "good",
                "author_name": "kustomization/apps.flux-system",
                "text": "Applied revision main@sha1:abc123",
                "mrkdwn_in": ["text"],
                "fields": [{"title": "revision", "value": "main@sha1:abc123", "short": False}],
            }
        ]

    def test_error_event_is_danger(self, event_factory):
        event = event_factory(severity="error", reason="HealthCheckFailed")

        payload = build_slack_payload(event)

        assert payload.attachments[0].color == "danger"

    def test_username_and_channel_override(self, event_factory):
        payload = build_slack_payload(event_factory(), username="flux", channel="#ops")

        assert payload.username == "flux"
        assert payload.channel == "#ops"

    def test_no_metadata_no_fields(self, event_factory):
        payload = build_slack_payload(event_factory(metadata=None))

        assert payload.attachments[0].fields == []


@pytest.mark.unit
class TestSlackProvider:
    """Tests for SlackProvider."""

    def test_invalid_address(self):
        with pytest.raises(ConstructionError, match="invalid Slack hook URL"):
            SlackProvider(address="hooks.slack.com")

    def test_invalid_proxy(self):
        with pytest.raises(ConstructionError, match="invalid proxy URL"):
            SlackProvider(address=WEBHOOK, proxy="not-a-proxy")

    def test_post_webhook(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(200, "ok")
        provider = SlackProvider(address=WEBHOOK, channel="#ops")

        provider.post(ctx, event_factory())

        prepared = mock_send.call_args.args[0]
        assert prepared.url == WEBHOOK
        body = json.loads(prepared.body)
        assert body["channel"] == "#ops"
        assert body["attachments"][0]["author_name"] == "kustomization/apps.flux-system"
        assert "Authorization" not in prepared.headers

    def test_commit_status_update_not_sent(self, ctx, mock_send, event_factory):
        """Internal commit status pings are skipped without network I/O."""
        provider = SlackProvider(address=WEBHOOK)
        event = event_factory(metadata={"commit_status": "update"})

        provider.post(ctx, event)

        mock_send.assert_not_called()

    def test_token_sent_as_bearer(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(200, '{"ok": true}')
        provider = SlackProvider(address=SLACK_CHAT_POST_MESSAGE_URL, token="xoxb-token")

        provider.post(ctx, event_factory())

        prepared = mock_send.call_args.args[0]
        assert prepared.headers["Authorization"] == "Bearer xoxb-token"

    def test_chat_api_error_in_body(self, ctx, mock_send, make_response, event_factory):
        """chat.postMessage failures come back as 200 with ok=false."""
        mock_send.return_value = make_response(200, {"ok": False, "error": "not_in_channel"})
        provider = SlackProvider(address=SLACK_CHAT_POST_MESSAGE_URL, token="xoxb-token")

        with pytest.raises(DeliveryError, match="not_in_channel"):
            provider.post(ctx, event_factory())

    def test_webhook_rejection(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(403, "invalid_token")
        provider = SlackProvider(address=WEBHOOK)

        with pytest.raises(DeliveryError, match="status code 403, invalid_token"):
            provider.post(ctx, event_factory())

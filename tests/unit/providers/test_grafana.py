"""Unit tests for the Grafana provider."""

import base64
import json
from datetime import datetime, timezone

import pytest

from notifier.providers import GrafanaProvider
from notifier.providers.grafana import build_annotation_tags

ADDRESS = "https://grafana.example.com/api/annotations"


@pytest.mark.unit
class TestBuildAnnotationTags:
    """Tests for build_annotation_tags."""

    def test_tags(self, event_factory):
        event = event_factory(metadata={"revision": "main@sha1:abc123"})

        assert build_annotation_tags(event) == [
            "flux",
            "kustomize-controller",
            "revision: main@sha1|abc123",
            "kind: Kustomization",
            "name: apps",
            "namespace: flux-system",
        ]


@pytest.mark.unit
class TestGrafanaProvider:
    """Tests for GrafanaProvider."""

    def test_post_with_token(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(200, {"id": 1, "message": "Annotation added"})
        provider = GrafanaProvider(address=ADDRESS, token="glsa_token")
        event = event_factory(timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))

        provider.post(ctx, event)

        prepared = mock_send.call_args.args[0]
        assert prepared.headers["Authorization"] == "Bearer glsa_token"
        body = json.loads(prepared.body)
        assert body["when"] == 1704067200
        assert body["text"] == "kustomization/apps.flux-system"
        assert body["tags"][0] == "flux"

    def test_post_with_basic_auth(self, ctx, mock_send, make_response, event_factory):
        mock_send.return_value = make_response(200)
        provider = GrafanaProvider(address=ADDRESS, username="admin", password="pw")

        provider.post(ctx, event_factory())

        prepared = mock_send.call_args.args[0]
        expected = base64.b64encode(b"admin:pw").decode("ascii")
        assert prepared.headers["Authorization"] == f"Basic {expected}"

    def test_commit_status_update_not_sent(self, ctx, mock_send, event_factory):
        provider = GrafanaProvider(address=ADDRESS)

        provider.post(ctx, event_factory(metadata={"commit_status": "update"}))

        mock_send.assert_not_called()

"""Unit tests for NotificationDispatcher.

Tests cover:
- Fan-out to every provider
- Per-provider failure isolation
- Report aggregation
- Per-provider delivery contexts
"""

import pytest
from unittest.mock import MagicMock

from notifier.configuration import DispatcherSettings
from notifier.delivery import DeliveryContext
from notifier.dispatcher import DispatchReport, DispatchStatus, NotificationDispatcher
from notifier.exceptions import DeliveryError, InputError
from notifier.providers import Provider


@pytest.fixture
def mock_provider():
    def _factory(side_effect=None):
        provider = MagicMock(spec=Provider)
        provider.post.side_effect = side_effect
        return provider

    return _factory


@pytest.mark.unit
class TestNotificationDispatcherInitialization:
    """Tests for dispatcher initialization."""

    def test_defaults(self, mock_provider):
        provider = mock_provider()
        dispatcher = NotificationDispatcher(providers={"slack": provider})

        assert dispatcher.providers == {"slack": provider}
        assert dispatcher.max_workers == 8
        assert dispatcher.timeout_seconds == 15.0

    def test_from_settings(self, mock_provider, monkeypatch):
        monkeypatch.setenv("DISPATCHER_MAX_WORKERS", "2")
        monkeypatch.setenv("DISPATCHER_TIMEOUT_SECONDS", "5")

        dispatcher = NotificationDispatcher.from_settings({"slack": mock_provider()}, DispatcherSettings())

        assert dispatcher.max_workers == 2
        assert dispatcher.timeout_seconds == 5.0

    def test_get_available_providers(self, mock_provider):
        dispatcher = NotificationDispatcher(
            providers={"slack": mock_provider(), "gitea": mock_provider()}
        )

        assert set(dispatcher.get_available_providers()) == {"slack", "gitea"}


@pytest.mark.unit
class TestNotificationDispatcherDispatch:
    """Tests for dispatch()."""

    def test_all_providers_receive_event(self, mock_provider, event_factory):
        providers = {"slack": mock_provider(), "gitea": mock_provider()}
        event = event_factory()

        report = NotificationDispatcher(providers=providers).dispatch(event)

        assert report.is_success
        assert [r.provider for r in report.results] == ["slack", "gitea"]
        for provider in providers.values():
            provider.post.assert_called_once()
            assert provider.post.call_args.args[1] is event

    def test_failure_isolated(self, mock_provider, event_factory):
        providers = {
            "slack": mock_provider(side_effect=DeliveryError("status code 500")),
            "gitea": mock_provider(side_effect=InputError("missing revision metadata")),
            "discord": mock_provider(),
        }

        report = NotificationDispatcher(providers=providers).dispatch(event_factory())

        assert not report.is_success
        assert {r.provider for r in report.failures} == {"slack", "gitea"}
        assert report.get("discord").status == DispatchStatus.SENT
        assert report.get("gitea").error_type == "InputError"
        assert isinstance(report.get("slack").error, DeliveryError)
        providers["discord"].post.assert_called_once()

    def test_unexpected_exception_recorded(self, mock_provider, event_factory):
        providers = {"slack": mock_provider(side_effect=RuntimeError("bug"))}

        report = NotificationDispatcher(providers=providers).dispatch(event_factory())

        assert report.get("slack").status == DispatchStatus.FAILED
        assert report.get("slack").error_type == "RuntimeError"

    def test_each_provider_gets_own_context(self, mock_provider, event_factory):
        providers = {"slack": mock_provider(), "gitea": mock_provider()}

        NotificationDispatcher(providers=providers, timeout_seconds=5).dispatch(event_factory())

        contexts = [p.post.call_args.args[0] for p in providers.values()]
        assert all(isinstance(c, DeliveryContext) for c in contexts)
        assert contexts[0] is not contexts[1]
        assert all(0 < c.remaining() <= 5 for c in contexts)

    def test_no_providers(self, event_factory):
        report = NotificationDispatcher(providers={}).dispatch(event_factory())

        assert report.results == []
        assert report.is_success


@pytest.mark.unit
class TestDispatchReport:
    """Tests for DispatchReport."""

    def test_get_unknown_provider(self):
        assert DispatchReport().get("slack") is None

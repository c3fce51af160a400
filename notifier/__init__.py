"""Reconciliation event notifier.

Dispatches reconciliation events to chat channels, incident tools,
dashboards and version-control commit status / pull request comment APIs.

Public API:
    - Event, InvolvedObject, Severity: the canonical notification payload
    - DeliveryContext: cancellation/deadline scope for one post
    - Provider: the capability every sink implements
    - create_provider(), create_providers(): build providers from ProviderConfig records
    - NotificationDispatcher: fan one event out to many providers
    - configure_logging(), get_settings(): entry points for the embedding application

Example:
    from notifier import (
        Event,
        InvolvedObject,
        NotificationDispatcher,
        ProviderConfig,
        configure_logging,
        create_providers,
        get_settings,
    )

    # Once at application startup
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.is_production)

    providers = create_providers(
        {"slack": ProviderConfig(type="slack", address="https://hooks.slack.com/services/T/B/X")},
        settings,
    )
    dispatcher = NotificationDispatcher.from_settings(providers, settings.dispatcher)
    report = dispatcher.dispatch(
        Event(
            involved_object=InvolvedObject(kind="Kustomization", name="apps", namespace="flux-system"),
            severity="info",
            reason="ReconciliationSucceeded",
            message="Applied revision main@sha1:abc123",
        )
    )
"""

from notifier.configuration import NotifierSettings, ProviderConfig, TLSConfig, get_settings
from notifier.delivery import DeliveryContext
from notifier.dispatcher import DispatchReport, DispatchResult, NotificationDispatcher
from notifier.events import Event, InvolvedObject, Severity
from notifier.exceptions import (
    AmbiguousStateError,
    ConstructionError,
    DeliveryCancelledError,
    DeliveryError,
    InputError,
    NotifierError,
)
from notifier.logging import configure_logging
from notifier.providers import Provider, create_provider, create_providers

__all__ = [
    "AmbiguousStateError",
    "ConstructionError",
    "DeliveryCancelledError",
    "DeliveryContext",
    "DeliveryError",
    "DispatchReport",
    "DispatchResult",
    "Event",
    "InputError",
    "InvolvedObject",
    "NotificationDispatcher",
    "NotifierError",
    "NotifierSettings",
    "Provider",
    "ProviderConfig",
    "Severity",
    "TLSConfig",
    "configure_logging",
    "create_provider",
    "create_providers",
    "get_settings",
]

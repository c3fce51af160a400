"""Event dispatcher with one worker per provider.

Posts one event to every configured provider concurrently and records the
outcome per provider. Providers share no mutable state, so a failure or a
slow sink never affects the other deliveries. Whether a partial failure is
fatal is left to the caller.

Usage Example:
    from notifier.dispatcher import NotificationDispatcher

    dispatcher = NotificationDispatcher(
        providers={"slack": slack_provider, "gitea": gitea_provider},
        timeout_seconds=15,
    )
    report = dispatcher.dispatch(event)
    if not report.is_success:
        for result in report.failures:
            logger.error("delivery_failed", provider=result.provider, error=str(result.error))
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import structlog

from notifier.configuration.settings import DispatcherSettings
from notifier.delivery.context import DeliveryContext
from notifier.events import Event
from notifier.providers.base import Provider

logger = structlog.get_logger()


class DispatchStatus(Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass
class DispatchResult:
    """Outcome of posting one event to one provider.

    Attributes:
        provider: Provider name
        status: SENT (delivered or deliberately skipped) or FAILED
        error: The raised exception when FAILED
    """

    provider: str
    status: DispatchStatus
    error: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        return self.status == DispatchStatus.SENT

    @property
    def error_type(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None


@dataclass
class DispatchReport:
    """Aggregated outcome of one dispatch."""

    results: List[DispatchResult] = field(default_factory=list)

    @property
    def failures(self) -> List[DispatchResult]:
        return [r for r in self.results if not r.is_success]

    @property
    def is_success(self) -> bool:
        return not self.failures

    def get(self, provider: str) -> Optional[DispatchResult]:
        for result in self.results:
            if result.provider == provider:
                return result
        return None


class NotificationDispatcher:
    """Fan-out of events to many providers.

    Attributes:
        providers: Dict mapping provider name to Provider instance
        max_workers: Maximum providers posted concurrently
        timeout_seconds: Deadline given to each provider post
    """

    def __init__(
        self,
        providers: Dict[str, Provider],
        max_workers: int = 8,
        timeout_seconds: Optional[float] = 15.0,
    ):
        self.providers = providers
        self.max_workers = max(1, max_workers)
        self.timeout_seconds = timeout_seconds

        logger.info(
            "initialized_notification_dispatcher",
            providers=list(providers.keys()),
            max_workers=self.max_workers,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(
        cls, providers: Dict[str, Provider], settings: DispatcherSettings
    ) -> "NotificationDispatcher":
        return cls(
            providers=providers,
            max_workers=settings.max_workers,
            timeout_seconds=settings.timeout_seconds,
        )

    def get_available_providers(self) -> List[str]:
        return list(self.providers.keys())

    def dispatch(self, event: Event) -> DispatchReport:
        """Post event to every provider.

        Args:
            event: Event to deliver

        Returns:
            DispatchReport with one result per provider, in provider order
        """
        if not self.providers:
            return DispatchReport()

        workers = min(self.max_workers, len(self.providers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="notifier") as pool:
            futures = [
                pool.submit(self._post, name, provider, event)
                for name, provider in self.providers.items()
            ]
            report = DispatchReport(results=[f.result() for f in futures])

        logger.info(
            "event_dispatched",
            object_kind=event.involved_object.kind,
            object_name=event.involved_object.name,
            reason=event.reason,
            provider_count=len(report.results),
            failure_count=len(report.failures),
        )
        return report

    def _post(self, name: str, provider: Provider, event: Event) -> DispatchResult:
        ctx = DeliveryContext(timeout=self.timeout_seconds)
        try:
            provider.post(ctx, event)
        except Exception as e:
            logger.error(
                "provider_post_failed",
                provider=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return DispatchResult(provider=name, status=DispatchStatus.FAILED, error=e)

        logger.debug("provider_post_succeeded", provider=name)
        return DispatchResult(provider=name, status=DispatchStatus.SENT)

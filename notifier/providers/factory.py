"""Provider construction from configuration records."""

from typing import Callable, Dict, Optional

import structlog

from notifier.configuration.providers import ProviderConfig
from notifier.configuration.settings import NotifierSettings
from notifier.delivery import RetryPolicy
from notifier.exceptions import ConstructionError
from notifier.providers.base import Provider
from notifier.providers.discord import DiscordProvider
from notifier.providers.gitea import GiteaProvider
from notifier.providers.gitea_pull_request_comment import GiteaPullRequestCommentProvider
from notifier.providers.grafana import GrafanaProvider
from notifier.providers.opsgenie import OpsgenieProvider
from notifier.providers.slack import SlackProvider
from notifier.providers.webex import WebexProvider

logger = structlog.get_logger()


def _gitea_token(config: ProviderConfig) -> str:
    """The token, falling back to the password when only that is set."""
    if not config.token and config.password:
        return config.password
    return config.token


def _slack(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return SlackProvider(
        address=config.address,
        proxy=config.proxy,
        token=config.token,
        tls=config.tls,
        username=config.username,
        channel=config.channel,
        retry_policy=retry_policy,
    )


def _discord(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return DiscordProvider(
        address=config.address,
        proxy=config.proxy,
        username=config.username,
        channel=config.channel,
        retry_policy=retry_policy,
    )


def _webex(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return WebexProvider(
        address=config.address,
        token=config.token,
        channel=config.channel,
        proxy=config.proxy,
        tls=config.tls,
        retry_policy=retry_policy,
    )


def _grafana(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return GrafanaProvider(
        address=config.address,
        proxy=config.proxy,
        token=config.token,
        tls=config.tls,
        username=config.username,
        password=config.password,
        retry_policy=retry_policy,
    )


def _opsgenie(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return OpsgenieProvider(
        address=config.address,
        token=config.token,
        proxy=config.proxy,
        tls=config.tls,
        retry_policy=retry_policy,
    )


def _gitea(config: ProviderConfig, retry_policy: RetryPolicy, debug: bool) -> Provider:
    return GiteaProvider(
        commit_status=config.commit_status,
        address=config.address,
        token=_gitea_token(config),
        proxy=config.proxy,
        tls=config.tls,
        debug=debug,
    )


def _gitea_pull_request_comment(
    config: ProviderConfig, retry_policy: RetryPolicy, debug: bool
) -> Provider:
    return GiteaPullRequestCommentProvider(
        provider_uid=config.provider_uid,
        address=config.address,
        token=_gitea_token(config),
        proxy=config.proxy,
        tls=config.tls,
        debug=debug,
    )


PROVIDER_BUILDERS: Dict[str, Callable[[ProviderConfig, RetryPolicy, bool], Provider]] = {
    "slack": _slack,
    "discord": _discord,
    "webex": _webex,
    "grafana": _grafana,
    "opsgenie": _opsgenie,
    "gitea": _gitea,
    "giteapullrequestcomment": _gitea_pull_request_comment,
}


def create_provider(
    config: ProviderConfig,
    retry_policy: Optional[RetryPolicy] = None,
    debug: bool = False,
) -> Provider:
    """Build the provider described by config.

    Args:
        config: Provider configuration
        retry_policy: Delivery retry bounds for broadcast providers
        debug: Verbose upsert logging for the Gitea providers

    Raises:
        ConstructionError: unknown provider type or invalid configuration
    """
    builder = PROVIDER_BUILDERS.get(config.type)
    if builder is None:
        raise ConstructionError(f"unsupported provider type {config.type!r}")

    provider = builder(config, retry_policy or RetryPolicy(), debug)
    logger.info("provider_created", provider_type=config.type)
    return provider


def create_providers(
    configs: Dict[str, ProviderConfig], settings: NotifierSettings
) -> Dict[str, Provider]:
    """Build named providers with delivery tuning and debug flag from settings.

    Args:
        configs: Provider configuration by provider name
        settings: Application settings (DELIVERY_RETRY_*, GITEA_DEBUG)

    Raises:
        ConstructionError: for the first provider that cannot be built
    """
    retry_policy = RetryPolicy.from_settings(settings.delivery)
    return {
        name: create_provider(config, retry_policy=retry_policy, debug=settings.GITEA_DEBUG)
        for name, config in configs.items()
    }

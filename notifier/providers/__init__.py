"""Notification providers.

Broadcast providers (Slack, Discord, Webex, Grafana, Opsgenie) send every
event independently. Upsert providers (Gitea commit status, Gitea pull
request comment) read remote state first and skip or update instead of
duplicating side effects.
"""

from notifier.providers.base import Provider, build_post_options
from notifier.providers.change_request import ChangeRequestComment, get_change_request_number
from notifier.providers.discord import DiscordProvider
from notifier.providers.factory import PROVIDER_BUILDERS, create_provider, create_providers
from notifier.providers.gitea import GiteaProvider, is_duplicate_status, to_gitea_state
from notifier.providers.gitea_pull_request_comment import GiteaPullRequestCommentProvider
from notifier.providers.grafana import GrafanaProvider
from notifier.providers.opsgenie import OpsgenieProvider
from notifier.providers.slack import SlackProvider, build_slack_payload
from notifier.providers.webex import WebexProvider

__all__ = [
    "ChangeRequestComment",
    "DiscordProvider",
    "GiteaProvider",
    "GiteaPullRequestCommentProvider",
    "GrafanaProvider",
    "OpsgenieProvider",
    "PROVIDER_BUILDERS",
    "Provider",
    "SlackProvider",
    "WebexProvider",
    "build_post_options",
    "build_slack_payload",
    "create_provider",
    "create_providers",
    "get_change_request_number",
    "is_duplicate_status",
    "to_gitea_state",
]

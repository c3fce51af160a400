"""Gitea integration module."""

from notifier.clients.gitea.address import parse_git_address, split_repository_id
from notifier.clients.gitea.client import GiteaClient, GiteaClientInfo, new_gitea_client
from notifier.clients.gitea.models import (
    CreateStatusOption,
    GiteaComment,
    GiteaStatus,
    GiteaUser,
    StatusState,
)

__all__ = [
    "CreateStatusOption",
    "GiteaClient",
    "GiteaClientInfo",
    "GiteaComment",
    "GiteaStatus",
    "GiteaUser",
    "StatusState",
    "new_gitea_client",
    "parse_git_address",
    "split_repository_id",
]

"""Git repository address parsing."""

import re
from typing import Tuple
from urllib.parse import urlparse

from notifier.exceptions import ConstructionError

# scp-like syntax: git@host:owner/repo.git
_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


def parse_git_address(address: str) -> Tuple[str, str]:
    """Split a repository address into API host and repository id.

    SSH addresses are mapped to an https host on the same server.

    Args:
        address: e.g. "https://gitea.example.com/org/repo.git",
            "ssh://git@gitea.example.com/org/repo" or "git@gitea.example.com:org/repo"

    Returns:
        (host, id) such as ("https://gitea.example.com", "org/repo")

    Raises:
        ConstructionError: if the address cannot be parsed
    """
    if not address:
        raise ConstructionError("repository address cannot be empty")

    if "://" not in address:
        match = _SCP_LIKE.match(address)
        if not match:
            raise ConstructionError(f"failed parsing repository address {address!r}")
        scheme, netloc, path = "https", match.group("host"), match.group("path")
    else:
        try:
            parsed = urlparse(address)
            port = parsed.port
        except ValueError as e:
            raise ConstructionError(f"failed parsing repository address {address!r}: {e}") from e
        scheme = parsed.scheme
        if scheme in ("ssh", "git+ssh"):
            scheme = "https"
        # Host and port only, credentials never end up in the API host
        netloc = parsed.hostname or ""
        if port:
            netloc = f"{netloc}:{port}"
        path = parsed.path

    if scheme not in ("http", "https") or not netloc:
        raise ConstructionError(f"failed parsing host of repository address {address!r}")

    repo_id = path.lstrip("/")
    if repo_id.endswith(".git"):
        repo_id = repo_id[: -len(".git")]
    return f"{scheme}://{netloc}", repo_id


def split_repository_id(repo_id: str) -> Tuple[str, str]:
    """Split "owner/repo" into its two components.

    Raises:
        ConstructionError: unless repo_id has exactly two non-empty parts
    """
    components = repo_id.split("/")
    if len(components) != 2 or not all(components):
        raise ConstructionError(f"invalid repository id {repo_id!r}")
    return components[0], components[1]

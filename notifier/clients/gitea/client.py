"""Gitea REST client.

Covers the operations the commit status and pull request comment providers
need: identity lookup, list/create commit statuses, and list/create/edit
issue comments. Each call honors the caller's DeliveryContext and opens its
own session from the immutable client configuration.

Usage:
    info = new_gitea_client(
        address="https://gitea.example.com/org/repo",
        token="s3cr3t",
        fetch_user_login=True,
    )
    statuses = info.client.list_statuses(ctx, info.owner, info.repo, "abc123")
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from notifier.clients.gitea.address import parse_git_address, split_repository_id
from notifier.clients.gitea.models import (
    CreateStatusOption,
    GiteaComment,
    GiteaStatus,
    GiteaUser,
)
from notifier.configuration.providers import TLSConfig
from notifier.delivery.context import DeliveryContext
from notifier.delivery.transport import new_http_session, validate_proxy
from notifier.exceptions import (
    ConstructionError,
    DeliveryCancelledError,
    DeliveryError,
    NotifierError,
)
from notifier.logging import get_module_logger

logger = get_module_logger()

API_PREFIX = "/api/v1"


class GiteaClient:
    """Authenticated Gitea API client.

    Attributes:
        host: Server base URL (scheme://host[:port])
        proxy: Optional proxy URL
        tls: Optional TLS overrides
    """

    def __init__(
        self,
        host: str,
        token: str,
        proxy: str = "",
        tls: Optional[TLSConfig] = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.proxy = proxy
        self.tls = tls
        self._token = token
        self._logger = logger.bind(host=self.host)

    def get_my_user_info(self, ctx: DeliveryContext) -> GiteaUser:
        """Get the authenticated user."""
        return self._request(ctx, "GET", "/user", model=GiteaUser)

    def list_statuses(
        self,
        ctx: DeliveryContext,
        owner: str,
        repo: str,
        sha: str,
        page: int = 1,
        page_size: int = 50,
    ) -> List[GiteaStatus]:
        """List one page of statuses for a commit, most recent first."""
        return self._request(
            ctx,
            "GET",
            f"/repos/{_seg(owner)}/{_seg(repo)}/statuses/{_seg(sha)}",
            params={"page": page, "limit": page_size},
            model=GiteaStatus,
            many=True,
        )

    def create_status(
        self,
        ctx: DeliveryContext,
        owner: str,
        repo: str,
        sha: str,
        option: CreateStatusOption,
    ) -> GiteaStatus:
        return self._request(
            ctx,
            "POST",
            f"/repos/{_seg(owner)}/{_seg(repo)}/statuses/{_seg(sha)}",
            json_data=option.model_dump(mode="json"),
            model=GiteaStatus,
        )

    def list_issue_comments(
        self,
        ctx: DeliveryContext,
        owner: str,
        repo: str,
        index: int,
        page: int = 1,
        page_size: int = 100,
    ) -> List[GiteaComment]:
        """List one page of comments on an issue or pull request."""
        return self._request(
            ctx,
            "GET",
            f"/repos/{_seg(owner)}/{_seg(repo)}/issues/{index}/comments",
            params={"page": page, "limit": page_size},
            model=GiteaComment,
            many=True,
        )

    def create_issue_comment(
        self,
        ctx: DeliveryContext,
        owner: str,
        repo: str,
        index: int,
        body: str,
    ) -> GiteaComment:
        return self._request(
            ctx,
            "POST",
            f"/repos/{_seg(owner)}/{_seg(repo)}/issues/{index}/comments",
            json_data={"body": body},
            model=GiteaComment,
        )

    def edit_issue_comment(
        self,
        ctx: DeliveryContext,
        owner: str,
        repo: str,
        comment_id: int,
        body: str,
    ) -> GiteaComment:
        return self._request(
            ctx,
            "PATCH",
            f"/repos/{_seg(owner)}/{_seg(repo)}/issues/comments/{comment_id}",
            json_data={"body": body},
            model=GiteaComment,
        )

    def _request(
        self,
        ctx: DeliveryContext,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        model: Optional[Type[BaseModel]] = None,
        many: bool = False,
    ) -> Any:
        """Send an API request and return the decoded JSON body.

        With a model, the body is validated into one instance, or a list of
        instances when many is set.

        Raises:
            DeliveryError: transport failure, non-2xx response or malformed body
            DeliveryCancelledError: the context was cancelled or expired
        """
        ctx.check()
        url = f"{self.host}{API_PREFIX}{path}"
        log = self._logger.bind(method=method, path=path)
        log.debug("gitea_api_request")

        headers = {
            "Authorization": f"token {self._token}",
            "Accept": "application/json",
        }

        try:
            with new_http_session(self.proxy, self.tls) as session:
                response = session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    headers=headers,
                    timeout=ctx.remaining(),
                )
        except requests.RequestException as e:
            if ctx.cancelled or ctx.expired:
                raise DeliveryCancelledError(
                    f"delivery context ended during {method} {path}: {e}"
                ) from e
            log.warning("gitea_api_transport_error", error=str(e))
            raise DeliveryError(f"{method} {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            message = _extract_error_message(response)
            log.warning(
                "gitea_api_error",
                status_code=response.status_code,
                error=message,
            )
            raise DeliveryError(
                f"{method} {path} failed with status code {response.status_code}: {message}",
                status_code=response.status_code,
                body=response.content,
            )

        if not response.content:
            data = [] if many else {}
        else:
            try:
                data = response.json()
            except ValueError as e:
                raise _malformed_body(method, path, response, e) from e

        if model is None:
            return data
        try:
            if many:
                if not isinstance(data, list):
                    raise TypeError(f"expected a JSON array, got {type(data).__name__}")
                return [model.model_validate(item) for item in data]
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return model.model_validate(data)
        except (ValidationError, TypeError) as e:
            log.warning("gitea_api_malformed_body", error=str(e))
            raise _malformed_body(method, path, response, e) from e


@dataclass(frozen=True)
class GiteaClientInfo:
    """A Gitea client together with the repository it addresses.

    Attributes:
        owner: Repository owner
        repo: Repository name
        username: Login of the authenticated user, empty unless fetched
        client: The API client
    """

    owner: str
    repo: str
    username: str
    client: GiteaClient


def new_gitea_client(
    address: str,
    token: str,
    proxy: str = "",
    tls: Optional[TLSConfig] = None,
    fetch_user_login: bool = False,
    ctx: Optional[DeliveryContext] = None,
) -> GiteaClientInfo:
    """Validate the repository address and credentials and build a client.

    Args:
        address: Repository URL, e.g. "https://gitea.example.com/org/repo"
        token: API token
        proxy: Optional proxy URL
        tls: Optional TLS overrides
        fetch_user_login: Look up the authenticated user's login, needed by
            providers that must recognize their own comments
        ctx: Context for the identity lookup

    Raises:
        ConstructionError: empty token, malformed address or repository id,
            invalid proxy, or failed identity lookup
    """
    if not token:
        raise ConstructionError("gitea token cannot be empty")

    host, repo_id = parse_git_address(address)
    owner, repo = split_repository_id(repo_id)
    validate_proxy(proxy)

    client = GiteaClient(host, token, proxy=proxy, tls=tls)

    username = ""
    if fetch_user_login:
        try:
            user = client.get_my_user_info(ctx or DeliveryContext.background())
        except NotifierError as e:
            raise ConstructionError(f"failed to get authenticated user info: {e}") from e
        username = user.login

    return GiteaClientInfo(owner=owner, repo=repo, username=username, client=client)


def _seg(value: str) -> str:
    """Escape a single path segment."""
    return quote(value, safe="")


def _malformed_body(
    method: str, path: str, response: requests.Response, error: Exception
) -> DeliveryError:
    return DeliveryError(
        f"{method} {path} returned a malformed response body: {error}",
        status_code=response.status_code,
        body=response.content,
    )


def _extract_error_message(response: requests.Response) -> str:
    """Extract an error message from an API error response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ["message", "error", "detail"]:
            if key in data:
                return str(data[key])
    text = response.text
    return text[:200] if text else "Unknown error"

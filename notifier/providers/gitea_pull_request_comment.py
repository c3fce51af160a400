"""Gitea pull request comment provider.

Keeps a single comment per provider and object on the pull request named by
the event: the comment is edited in place when found, created otherwise.
"""

from typing import Optional

import structlog

from notifier.clients.gitea import GiteaClientInfo, GiteaComment, new_gitea_client
from notifier.configuration.providers import TLSConfig
from notifier.delivery import DeliveryContext
from notifier.events import Event
from notifier.exceptions import ConstructionError, DeliveryError
from notifier.providers.base import Provider
from notifier.providers.change_request import ChangeRequestComment, get_change_request_number

logger = structlog.get_logger()

# Only the first page is scanned. The comment is normally created right
# after the pull request is opened, so it sits on that page; a comment
# pushed beyond it is not found and a new one gets created.
COMMENT_PAGE_SIZE = 100


class GiteaPullRequestCommentProvider(Provider):
    """Gitea pull request comment sink.

    Attributes:
        owner: Repository owner
        repo: Repository name
        username: Login of the token's user, resolved once at construction
        comment: Comment body and key marker formatting
    """

    def __init__(
        self,
        provider_uid: str,
        address: str,
        token: str,
        proxy: str = "",
        tls: Optional[TLSConfig] = None,
        debug: bool = False,
        client_info: Optional[GiteaClientInfo] = None,
        ctx: Optional[DeliveryContext] = None,
    ):
        """Initialize the provider and resolve the authenticated user.

        Args:
            provider_uid: Stable provider identity used in comment key markers
            address: Repository URL
            token: API token
            proxy: Optional proxy URL
            tls: Optional TLS overrides
            debug: Log every upsert decision
            client_info: Pre-built client with username, skips the lookup
            ctx: Context for the identity lookup
        """
        if not provider_uid:
            raise ConstructionError("provider UID cannot be empty")

        info = client_info or new_gitea_client(
            address, token, proxy=proxy, tls=tls, fetch_user_login=True, ctx=ctx
        )
        if not info.username:
            raise ConstructionError("authenticated user login cannot be empty")

        self.owner = info.owner
        self.repo = info.repo
        self.username = info.username
        self.client = info.client
        self.comment = ChangeRequestComment(provider_uid=provider_uid)
        self.debug = debug
        self._logger = logger.bind(
            provider="giteapullrequestcomment", owner=self.owner, repo=self.repo
        )

    @property
    def provider_uid(self) -> str:
        return self.comment.provider_uid

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        body = self.comment.format_comment_body(event)
        pr_number = get_change_request_number(event)
        log = self._logger.bind(pull_request=pr_number)

        try:
            comments = self.client.list_issue_comments(
                ctx, self.owner, self.repo, pr_number, page=1, page_size=COMMENT_PAGE_SIZE
            )
        except DeliveryError as e:
            raise DeliveryError(
                f"failed to list pull request comments: {e}",
                status_code=e.status_code,
                body=e.body,
            ) from e

        existing = self.find_own_comment(comments, self.comment.format_comment_key_marker(event))

        if existing is not None:
            try:
                self.client.edit_issue_comment(ctx, self.owner, self.repo, existing.id, body)
            except DeliveryError as e:
                raise DeliveryError(
                    f"failed to update pull request comment: {e}",
                    status_code=e.status_code,
                    body=e.body,
                ) from e
            if self.debug:
                log.info("gitea_comment_updated", comment_id=existing.id)
            return

        try:
            created = self.client.create_issue_comment(ctx, self.owner, self.repo, pr_number, body)
        except DeliveryError as e:
            raise DeliveryError(
                f"failed to create pull request comment: {e}",
                status_code=e.status_code,
                body=e.body,
            ) from e
        if self.debug:
            log.info("gitea_comment_created", comment_id=created.id)

    def find_own_comment(self, comments, marker: str) -> Optional[GiteaComment]:
        """First comment by the authenticated user containing marker."""
        for comment in comments:
            if (
                comment.user is not None
                and comment.user.login == self.username
                and marker in comment.body
            ):
                return comment
        return None

"""Gitea commit status provider.

Reports the reconciliation state of a revision as a commit status. The most
recent page of statuses is read first so that redelivered or retried events
do not stack identical statuses on the commit.
"""

from typing import List, Optional

import structlog

from notifier.clients.gitea import (
    CreateStatusOption,
    GiteaClientInfo,
    GiteaStatus,
    StatusState,
    new_gitea_client,
)
from notifier.configuration.providers import TLSConfig
from notifier.delivery import DeliveryContext
from notifier.events import PROGRESSING_REASON, Event, Severity
from notifier.exceptions import AmbiguousStateError, ConstructionError, DeliveryError, InputError
from notifier.providers.base import Provider
from notifier.providers.formatting import format_name_and_description, parse_revision

logger = structlog.get_logger()

STATUS_PAGE_SIZE = 50


def to_gitea_state(event: Event) -> StatusState:
    """Map an event to a commit status state.

    Progressing events are pending; otherwise info means success and error
    means failure.

    Raises:
        AmbiguousStateError: for any other severity
    """
    if event.has_reason(PROGRESSING_REASON):
        return StatusState.PENDING
    if event.severity == Severity.INFO.value:
        return StatusState.SUCCESS
    if event.severity == Severity.ERROR.value:
        return StatusState.FAILURE
    raise AmbiguousStateError(
        f"can't convert severity {event.severity!r} to a gitea state"
    )


def is_duplicate_status(
    statuses: Optional[List[GiteaStatus]], status: Optional[CreateStatusOption]
) -> bool:
    """Check whether the latest status with the same context matches.

    Statuses are scanned in the order returned (most recent first) and the
    first one sharing the context decides: identical state and description
    is a duplicate, anything else is not. Incomplete statuses are ignored.
    """
    if status is None or statuses is None:
        return False

    for existing in statuses:
        if not existing.context or not existing.state or not existing.description:
            continue

        if existing.context == status.context:
            return (
                existing.state == status.state.value
                and existing.description == status.description
            )

    return False


class GiteaProvider(Provider):
    """Gitea commit status sink.

    Attributes:
        owner: Repository owner
        repo: Repository name
        commit_status: Status context label owned by this provider
        debug: Log every upsert decision
    """

    def __init__(
        self,
        commit_status: str,
        address: str,
        token: str,
        proxy: str = "",
        tls: Optional[TLSConfig] = None,
        debug: bool = False,
        client_info: Optional[GiteaClientInfo] = None,
    ):
        """Initialize the provider.

        Args:
            commit_status: Status context label, required
            address: Repository URL
            token: API token
            proxy: Optional proxy URL
            tls: Optional TLS overrides
            debug: Log every upsert decision
            client_info: Pre-built client, skips address/token handling
        """
        if not commit_status:
            raise ConstructionError("commit status cannot be empty")

        info = client_info or new_gitea_client(address, token, proxy=proxy, tls=tls)
        self.owner = info.owner
        self.repo = info.repo
        self.client = info.client
        self.commit_status = commit_status
        self.debug = debug
        self._logger = logger.bind(provider="gitea", owner=self.owner, repo=self.repo)

    def post(self, ctx: DeliveryContext, event: Event) -> None:
        revision = event.get_revision()
        if revision is None:
            raise InputError("missing revision metadata")
        rev = parse_revision(revision)
        state = to_gitea_state(event)

        _, description = format_name_and_description(event)
        status = CreateStatusOption(
            state=state,
            target_url="",
            description=description,
            context=self.commit_status,
        )
        log = self._logger.bind(commit_hash=rev, context=status.context)

        try:
            statuses = self.client.list_statuses(
                ctx, self.owner, self.repo, rev, page=1, page_size=STATUS_PAGE_SIZE
            )
        except DeliveryError as e:
            raise DeliveryError(
                f"could not list commit statuses: {e}",
                status_code=e.status_code,
                body=e.body,
            ) from e

        if is_duplicate_status(statuses, status):
            if self.debug:
                log.info("gitea_status_duplicate_skipped", state=state.value)
            return

        if self.debug:
            log.info("gitea_status_create_begin", state=state.value, description=description)

        try:
            created = self.client.create_status(ctx, self.owner, self.repo, rev, status)
        except DeliveryError as e:
            if self.debug:
                log.error("gitea_status_create_failed", error=str(e))
            raise

        if self.debug:
            log.info("gitea_status_created", status_id=created.id)

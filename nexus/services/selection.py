"""
Supervisor Selection

Composes the directory, request ledger, capacity controller and invite
dispatcher into per-supervisor cards for the student's mentor picker,
and drives the invite -> refresh cycle.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from nexus.core.logging_config import logger, set_project_id
from nexus.models.supervision import MilestoneStep, RequestStatus, StepState
from nexus.schemas.project import ProjectFeed
from nexus.schemas.supervisor import SupervisorEntry
from nexus.services import status_resolver
from nexus.services.capacity import CapacityReport, evaluate_supervisor
from nexus.services.directory import SupervisorDirectory
from nexus.services.invite_dispatcher import DenialReason, InviteDispatcher, InviteOutcome, OptimisticOverlay
from nexus.services.notifications import NotificationCenter
from nexus.services.request_ledger import RequestLedger
from nexus.utils.api_client import NexusAPIClient

ALREADY_SUPERVISED_MESSAGE = "Your project already has an assigned mentor."
INVITE_SUCCESS_MESSAGE = "Supervision request transmitted successfully!"
PROJECT_SUPERVISED_REASON = DenialReason.PROJECT_SUPERVISED


@dataclass(frozen=True)
class SupervisorCard:
    """Everything the picker needs to render one supervisor"""
    supervisor: SupervisorEntry
    status: RequestStatus
    capacity: CapacityReport
    is_requesting: bool
    project_supervised: bool

    @property
    def can_invite(self) -> bool:
        return not (
            self.capacity.is_full
            or self.is_requesting
            or self.project_supervised
            or self.status != RequestStatus.NONE
        )

    @property
    def badge(self) -> Optional[str]:
        if self.status != RequestStatus.NONE:
            return self.status.value
        if self.capacity.is_full:
            return "Locked"
        return None

    @property
    def button_label(self) -> str:
        if self.is_requesting:
            return "Sending Request..."
        if self.status == RequestStatus.SENT:
            return "Invitation Pending"
        if self.status == RequestStatus.ACCEPTED:
            return "Confirmed Mentor"
        if self.status == RequestStatus.REJECTED:
            return "Request Declined"
        if self.project_supervised:
            return "Mentor Assigned"
        if self.capacity.is_full:
            return "Closed for Requests"
        return "Transmit Request"


class SupervisorSelection:
    """Mentor picker state for one project"""

    def __init__(
        self,
        client: NexusAPIClient,
        project: ProjectFeed,
        notifier: Optional[NotificationCenter] = None,
    ):
        if project.id is None:
            raise ValueError("SupervisorSelection needs a project with an id")

        self.client = client
        self.project = project
        self.notifier = notifier if notifier is not None else NotificationCenter()
        self.directory = SupervisorDirectory(client, notifier=self.notifier)
        self.ledger = RequestLedger(project.supervision_requests)
        self.dispatcher = InviteDispatcher(
            dispatch=client.invite_dispatch_for(project.id),
            ledger=self.ledger,
            overlay=OptimisticOverlay(),
            notifier=self.notifier,
            capacity_lookup=self._capacity_for,
        )
        set_project_id(project.id)

    def _capacity_for(self, supervisor_id: str) -> Optional[CapacityReport]:
        entry = self.directory.get(supervisor_id)
        return evaluate_supervisor(entry) if entry is not None else None

    # ==================== Reads ====================

    def status_of(self, supervisor_id: str) -> RequestStatus:
        return self.dispatcher.status_of(supervisor_id)

    def card_for(self, entry: SupervisorEntry) -> SupervisorCard:
        return SupervisorCard(
            supervisor=entry,
            status=self.status_of(entry.id),
            capacity=evaluate_supervisor(entry),
            is_requesting=self.dispatcher.overlay.is_in_flight(entry.id),
            project_supervised=self.project.has_supervisor,
        )

    def cards(self, query: Optional[str] = None) -> List[SupervisorCard]:
        return [self.card_for(entry) for entry in self.directory.search(query)]

    def timeline(self) -> List[Tuple[MilestoneStep, StepState]]:
        return status_resolver.resolve_timeline(self.project.status, bool(self.project.supervisor_linked))

    def progress_fraction(self) -> float:
        return status_resolver.progress_fraction(self.project.status)

    # ==================== Actions ====================

    async def load(self) -> List[SupervisorCard]:
        await self.directory.fetch()
        return self.cards()

    async def invite(self, supervisor_id: str) -> InviteOutcome:
        if self.project.has_supervisor:
            self.notifier.error(ALREADY_SUPERVISED_MESSAGE)
            return InviteOutcome(
                supervisor_id=supervisor_id,
                admitted=False,
                reason=PROJECT_SUPERVISED_REASON,
            )

        outcome = await self.dispatcher.invite(supervisor_id)
        if outcome.success:
            self.notifier.success(INVITE_SUCCESS_MESSAGE)
            await self.refresh_project()
        return outcome

    async def refresh_project(self) -> Optional[ProjectFeed]:
        """Reload the project, replace the ledger's authoritative layer, reconcile the overlay"""
        if self.dispatcher.closed:
            return None

        response = await self.client.get_project(self.project.id)
        if not response.success:
            logger.warning(f"Project refresh failed with status {response.status}")
            return None

        payload: Any = response.data
        if isinstance(payload, dict) and isinstance(payload.get("project"), dict):
            payload = payload["project"]
        try:
            project = ProjectFeed.model_validate(payload)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed project payload: {e.error_count()} error(s)")
            return None

        if self.dispatcher.closed:
            return None

        if project.id is None:
            project.id = self.project.id
        self.project = project
        self.ledger.refresh(project.supervision_requests)
        self.dispatcher.reconcile()
        return project

    def close(self) -> None:
        """Tear down the view; late dispatch results are discarded"""
        self.dispatcher.close()

"""
Optimistic Overlay & Invite Dispatcher

Sends supervision requests with an optimistic "Sent" status.

Per-supervisor lifecycle:

    idle ──invite──> dispatching ──ok────> confirmed
                          │
                          └──failure──> rolled_back ──> idle

- The overlay entry is written before the dispatch is awaited, so the
  ledger reports Sent immediately.
- A second invite for an id that is still dispatching is a no-op.
- A failed dispatch removes the entry and posts an error notice; it is
  never retried.
- After close(), late dispatch results are dropped without touching state.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Optional

from nexus.core.exceptions import AdmissionDeniedError, DispatchError
from nexus.core.logging_config import logger
from nexus.models.supervision import DispatchPhase, OptimisticEntry, RequestStatus
from nexus.services.capacity import CapacityReport
from nexus.services.notifications import NotificationCenter
from nexus.services.request_ledger import RequestLedger

DispatchFn = Callable[[str], Awaitable[Any]]
CapacityLookup = Callable[[str], Optional[CapacityReport]]

DEFAULT_FAILURE_MESSAGE = "Failed to transmit request."


class DenialReason(str, Enum):
    CAPACITY_FULL = "capacity_full"
    ALREADY_REQUESTED = "already_requested"
    IN_FLIGHT = "in_flight"
    CLOSED = "closed"
    PROJECT_SUPERVISED = "project_supervised"


@dataclass
class InviteOutcome:
    """Result of one invite attempt"""
    supervisor_id: str
    admitted: bool
    dispatched: bool = False
    success: bool = False
    reason: Optional[DenialReason] = None
    message: Optional[str] = None

    def raise_for_outcome(self) -> None:
        if not self.admitted:
            raise AdmissionDeniedError(self.supervisor_id, self.reason.value if self.reason else "denied")
        if self.dispatched and not self.success:
            raise DispatchError(self.supervisor_id, self.message or DEFAULT_FAILURE_MESSAGE)


class OptimisticOverlay:
    """At most one entry per supervisor id; never persisted"""

    def __init__(self):
        self._entries: Dict[str, OptimisticEntry] = {}

    def ids(self) -> FrozenSet[str]:
        """Overlay set consulted first by the ledger"""
        return frozenset(self._entries)

    def get(self, supervisor_id: str) -> Optional[OptimisticEntry]:
        return self._entries.get(supervisor_id)

    def is_in_flight(self, supervisor_id: str) -> bool:
        entry = self._entries.get(supervisor_id)
        return entry is not None and entry.in_flight

    def phase_of(self, supervisor_id: str) -> DispatchPhase:
        entry = self._entries.get(supervisor_id)
        return entry.phase if entry else DispatchPhase.IDLE

    def begin(self, supervisor_id: str) -> OptimisticEntry:
        entry = OptimisticEntry(supervisor_id=supervisor_id)
        self._entries[supervisor_id] = entry
        return entry

    def confirm(self, supervisor_id: str) -> Optional[OptimisticEntry]:
        entry = self._entries.get(supervisor_id)
        if entry is not None:
            entry.in_flight = False
            entry.phase = DispatchPhase.CONFIRMED
            entry.settled_at = datetime.now(timezone.utc)
        return entry

    def rollback(self, supervisor_id: str) -> Optional[OptimisticEntry]:
        entry = self._entries.pop(supervisor_id, None)
        if entry is not None:
            entry.in_flight = False
            entry.phase = DispatchPhase.ROLLED_BACK
            entry.settled_at = datetime.now(timezone.utc)
        return entry

    def supersede(self, supervisor_id: str) -> bool:
        """Drop a settled entry once the feed reports the same request"""
        entry = self._entries.get(supervisor_id)
        if entry is None or entry.in_flight:
            return False
        del self._entries[supervisor_id]
        return True

    def __contains__(self, supervisor_id: object) -> bool:
        return supervisor_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _result_failed(result: Any) -> bool:
    if result is False:
        return True
    if isinstance(result, dict):
        return result.get("success") is False
    return getattr(result, "success", True) is False


def _failure_message(result: Any = None, error: Optional[BaseException] = None) -> str:
    data = result.get("data", result) if isinstance(result, dict) else getattr(result, "data", None)
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    if isinstance(error, DispatchError):
        return error.message
    return DEFAULT_FAILURE_MESSAGE


class InviteDispatcher:
    """
    Admission gate plus optimistic dispatch of supervision requests.

    The gate rejects an invite before any dispatch when the supervisor is at
    capacity, when the ledger already reports a status other than None, or
    when a dispatch for the same id is still in flight.
    """

    def __init__(
        self,
        dispatch: DispatchFn,
        ledger: RequestLedger,
        overlay: Optional[OptimisticOverlay] = None,
        notifier: Optional[NotificationCenter] = None,
        capacity_lookup: Optional[CapacityLookup] = None,
    ):
        self._dispatch = dispatch
        self.ledger = ledger
        self.overlay = overlay if overlay is not None else OptimisticOverlay()
        self.notifier = notifier
        self._capacity_lookup = capacity_lookup
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down; outstanding dispatches resolve into nothing"""
        self._closed = True

    def status_of(self, supervisor_id: str) -> RequestStatus:
        return self.ledger.status_of(supervisor_id, self.overlay.ids())

    def check_admission(self, supervisor_id: str,
                        capacity: Optional[CapacityReport] = None) -> Optional[DenialReason]:
        """Denial reason, or None when the invite may be dispatched"""
        if self._closed:
            return DenialReason.CLOSED
        if self.overlay.is_in_flight(supervisor_id):
            return DenialReason.IN_FLIGHT
        if capacity is None and self._capacity_lookup is not None:
            capacity = self._capacity_lookup(supervisor_id)
        if capacity is not None and capacity.is_full:
            return DenialReason.CAPACITY_FULL
        if self.status_of(supervisor_id) != RequestStatus.NONE:
            return DenialReason.ALREADY_REQUESTED
        return None

    async def invite(self, supervisor_id: str,
                     capacity: Optional[CapacityReport] = None) -> InviteOutcome:
        reason = self.check_admission(supervisor_id, capacity)
        if reason is not None:
            logger.log_admission(supervisor_id, False, reason=reason.value)
            return InviteOutcome(supervisor_id=supervisor_id, admitted=False, reason=reason)

        # Overlay first: readers see Sent before the dispatch is even issued
        self.overlay.begin(supervisor_id)
        logger.log_admission(supervisor_id, True)
        logger.log_dispatch_event(supervisor_id, "started")

        result: Any = None
        error: Optional[Exception] = None
        try:
            result = await self._dispatch(supervisor_id)
        except asyncio.CancelledError:
            if not self._closed:
                self.overlay.rollback(supervisor_id)
            raise
        except Exception as e:
            error = e

        if self._closed:
            logger.debug(f"Dispatch for {supervisor_id} resolved after teardown; dropping result")
            return InviteOutcome(
                supervisor_id=supervisor_id,
                admitted=True,
                dispatched=True,
                success=False,
                reason=DenialReason.CLOSED,
            )

        if error is None and not _result_failed(result):
            self.overlay.confirm(supervisor_id)
            logger.log_dispatch_event(supervisor_id, "confirmed")
            return InviteOutcome(
                supervisor_id=supervisor_id,
                admitted=True,
                dispatched=True,
                success=True,
            )

        message = _failure_message(result, error)
        self.overlay.rollback(supervisor_id)
        logger.log_dispatch_event(
            supervisor_id,
            "rolled_back",
            success=False,
            error_type=type(error).__name__ if error else "failed_result",
            error_message=str(error) if error else message,
        )
        if self.notifier is not None:
            self.notifier.error(message)

        return InviteOutcome(
            supervisor_id=supervisor_id,
            admitted=True,
            dispatched=True,
            success=False,
            message=message,
        )

    def reconcile(self) -> List[str]:
        """
        Drop settled overlay entries the feed now reports.

        Call after every ledger refresh. In-flight entries are never touched.
        """
        superseded = []
        for supervisor_id in sorted(self.overlay.ids()):
            if self.ledger.authoritative_status(supervisor_id) == RequestStatus.NONE:
                continue
            if self.overlay.supersede(supervisor_id):
                superseded.append(supervisor_id)
        if superseded:
            logger.debug(f"Overlay superseded by feed: {', '.join(superseded)}")
        return superseded

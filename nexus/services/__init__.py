from nexus.services.capacity import CapacityReport, evaluate, evaluate_supervisor
from nexus.services.request_ledger import RequestLedger, status_of
from nexus.services.invite_dispatcher import (
    InviteDispatcher,
    InviteOutcome,
    OptimisticOverlay,
    DenialReason,
)
from nexus.services.notifications import NotificationCenter, Notification, NotificationKind
from nexus.services.directory import SupervisorDirectory, filter_supervisors, parse_directory
from nexus.services.ai_service import AIService
from nexus.services.selection import SupervisorSelection, SupervisorCard

__all__ = [
    # Capacity admission
    "CapacityReport",
    "evaluate",
    "evaluate_supervisor",
    # Request lifecycle
    "RequestLedger",
    "status_of",
    "InviteDispatcher",
    "InviteOutcome",
    "OptimisticOverlay",
    "DenialReason",
    # Directory & selection
    "SupervisorDirectory",
    "filter_supervisors",
    "parse_directory",
    "SupervisorSelection",
    "SupervisorCard",
    # Notifications
    "NotificationCenter",
    "Notification",
    "NotificationKind",
    # AI
    "AIService",
]

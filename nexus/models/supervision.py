"""
Supervision Domain Models

Enumerations and in-memory records shared by the supervision services:
- Project milestone sequence (fixed, four steps)
- Supervision request statuses
- Optimistic overlay entries for in-flight invites
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple


# ==================== Enums ====================

class ProjectStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


class RequestStatus(str, Enum):
    NONE = "None"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class StepState(str, Enum):
    COMPLETED = "completed"
    ACTIVE = "active"
    PENDING = "pending"


class DispatchPhase(str, Enum):
    """Per-supervisor invite lifecycle"""
    IDLE = "idle"
    DISPATCHING = "dispatching"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


# Total order of the milestone sequence
STATUS_ORDER: Tuple[str, ...] = tuple(s.value for s in ProjectStatus)

# Connecting-line breakpoints; fixed values, not a step ratio
PROGRESS_FRACTIONS: Dict[str, float] = {
    ProjectStatus.PENDING.value: 0.0,
    ProjectStatus.APPROVED.value: 0.33,
    ProjectStatus.ONGOING.value: 0.66,
    ProjectStatus.COMPLETED.value: 1.0,
}


def status_value(status) -> str:
    """Raw string for a status given as an Enum member or a string"""
    if isinstance(status, Enum):
        return status.value
    return "" if status is None else str(status)


def parse_request_status(value) -> RequestStatus:
    """Map a feed string onto RequestStatus; unknown values become NONE"""
    if isinstance(value, RequestStatus):
        return value
    try:
        return RequestStatus(status_value(value))
    except ValueError:
        return RequestStatus.NONE


# ==================== Records ====================

@dataclass(frozen=True)
class MilestoneStep:
    """One stage of the project lifecycle display"""
    id: ProjectStatus
    ordinal_position: int
    label: str
    description: str


MILESTONE_STEPS: Tuple[MilestoneStep, ...] = (
    MilestoneStep(ProjectStatus.PENDING, 0, "Proposal Submitted", "Awaiting Admin Review"),
    MilestoneStep(ProjectStatus.APPROVED, 1, "Dept. Approved", "Proposal Accepted"),
    MilestoneStep(ProjectStatus.ONGOING, 2, "Supervisor Linked", "Project in Progress"),
    MilestoneStep(ProjectStatus.COMPLETED, 3, "Final Completion", "Ready for Viva"),
)


@dataclass
class OptimisticEntry:
    """Client-local record of an invite believed sent; never persisted"""
    supervisor_id: str
    in_flight: bool = True
    phase: DispatchPhase = DispatchPhase.DISPATCHING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    settled_at: Optional[datetime] = None

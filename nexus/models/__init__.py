# Re-export all models for convenient imports
from nexus.models.supervision import (
    ProjectStatus,
    RequestStatus,
    StepState,
    DispatchPhase,
    MilestoneStep,
    OptimisticEntry,
    MILESTONE_STEPS,
    STATUS_ORDER,
    PROGRESS_FRACTIONS,
)
from nexus.models.session import Session

__all__ = [
    # Milestones
    "ProjectStatus",
    "StepState",
    "MilestoneStep",
    "MILESTONE_STEPS",
    "STATUS_ORDER",
    "PROGRESS_FRACTIONS",
    # Supervision requests
    "RequestStatus",
    "DispatchPhase",
    "OptimisticEntry",
    # Session
    "Session",
]

"""
Project Status Resolver

Maps a project's coarse status and supervisor link onto the four-step
milestone display.

Rules (first match wins):
1. Completed project -> every step completed
2. Ongoing step with a linked supervisor -> completed (fast-forward)
3. Step equal to the project status -> active
4. Step ordinal below the project ordinal -> completed, else pending

Unknown statuses have ordinal -1 and fall through to pending.
"""

from typing import List, Tuple, Union

from nexus.core.config import settings
from nexus.core.exceptions import UnknownStatusError
from nexus.core.logging_config import logger
from nexus.models.supervision import (
    MILESTONE_STEPS,
    PROGRESS_FRACTIONS,
    STATUS_ORDER,
    MilestoneStep,
    ProjectStatus,
    StepState,
    status_value,
)

StatusLike = Union[ProjectStatus, str, None]


def ordinal_of(status: StatusLike) -> int:
    """Position in the milestone sequence, -1 when unknown"""
    value = status_value(status)
    try:
        return STATUS_ORDER.index(value)
    except ValueError:
        return -1


def is_known_status(status: StatusLike) -> bool:
    return ordinal_of(status) >= 0


def validate_status(status: StatusLike) -> str:
    """
    Check a status against the milestone sequence.

    Raises UnknownStatusError only when STRICT_STATUS_VALIDATION is on;
    otherwise the unknown value is logged and returned unchanged.
    """
    value = status_value(status)
    if not is_known_status(value):
        if settings.STRICT_STATUS_VALIDATION:
            raise UnknownStatusError(value, STATUS_ORDER)
        logger.debug(f"Unrecognized project status '{value}', degrading to pending")
    return value


def resolve(overall_status: StatusLike, supervisor_linked: bool, step_id: StatusLike) -> StepState:
    overall = status_value(overall_status)
    step = status_value(step_id)

    if overall == ProjectStatus.COMPLETED.value:
        return StepState.COMPLETED

    # Supervisor link counts as the "Supervisor Linked" milestone even if the status lags
    if step == ProjectStatus.ONGOING.value and supervisor_linked:
        return StepState.COMPLETED

    if step == overall:
        return StepState.ACTIVE

    if ordinal_of(step) < ordinal_of(overall):
        return StepState.COMPLETED
    return StepState.PENDING


def progress_fraction(overall_status: StatusLike) -> float:
    """Width of the connecting progress line: 0.0, 0.33, 0.66 or 1.0"""
    return PROGRESS_FRACTIONS.get(status_value(overall_status), 0.0)


def resolve_timeline(
    overall_status: StatusLike,
    supervisor_linked: bool
) -> List[Tuple[MilestoneStep, StepState]]:
    """Derived state for every milestone step, in catalog order"""
    validate_status(overall_status)
    return [
        (step, resolve(overall_status, supervisor_linked, step.id))
        for step in MILESTONE_STEPS
    ]

"""
Capacity Admission Controller

Advisory load metrics for a supervisor. Never mutates load; the invite
dispatcher consults `is_full` before admitting a request.
"""

from dataclasses import dataclass
from typing import Optional

from nexus.core.config import settings
from nexus.schemas.supervisor import SupervisorEntry


@dataclass(frozen=True)
class CapacityReport:
    """Admission decision and load-bar metrics for one supervisor"""
    active_load: int
    capacity_limit: int
    is_full: bool
    is_near_limit: bool
    load_percent: float

    @property
    def remaining_slots(self) -> int:
        return max(0, self.capacity_limit - self.active_load)

    @property
    def tone(self) -> str:
        """Load bar colour band"""
        if self.is_full:
            return "full"
        if self.is_near_limit:
            return "near_limit"
        return "available"

    @property
    def label(self) -> str:
        return f"{self.active_load} / {self.capacity_limit}"


def evaluate(active_load: Optional[int] = None, capacity_limit: Optional[int] = None) -> CapacityReport:
    active = 0 if active_load is None else active_load
    limit = settings.DEFAULT_CAPACITY_LIMIT if capacity_limit is None else capacity_limit

    is_full = active >= limit
    is_near_limit = not is_full and active >= limit - 1

    if limit <= 0:
        load_percent = 0.0
    else:
        load_percent = min(max(active / limit * 100, 0.0), 100.0)

    return CapacityReport(
        active_load=active,
        capacity_limit=limit,
        is_full=is_full,
        is_near_limit=is_near_limit,
        load_percent=load_percent,
    )


def evaluate_supervisor(entry: SupervisorEntry) -> CapacityReport:
    """Evaluate a directory entry directly"""
    return evaluate(entry.active_load, entry.capacity_limit)

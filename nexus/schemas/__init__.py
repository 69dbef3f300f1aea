# Pydantic schemas for the inbound data feed
from nexus.schemas.common import normalize_identity
from nexus.schemas.project import ProjectFeed, SupervisionRequestRecord
from nexus.schemas.supervisor import SupervisorEntry
from nexus.schemas.roadmap import RoadmapPhase, ChatMessage, ChatTurn

__all__ = [
    "normalize_identity",
    "ProjectFeed",
    "SupervisionRequestRecord",
    "SupervisorEntry",
    "RoadmapPhase",
    "ChatMessage",
    "ChatTurn",
]

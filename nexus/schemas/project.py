from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator, model_validator
from typing import Optional, List, Any
from datetime import datetime

from nexus.core.logging_config import logger
from nexus.models.supervision import ProjectStatus, RequestStatus, parse_request_status, status_value
from nexus.schemas.common import normalize_identity


_REQUEST_ID_KEYS = ("supervisorId", "teacherId", "supervisor_id")


class SupervisionRequestRecord(BaseModel):
    """Authoritative supervision request as delivered by the project feed"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    supervisor_id: str = Field(
        ...,
        validation_alias=AliasChoices("supervisorId", "teacherId", "supervisor_id"),
        description="Canonical supervisor id (bare or nested form on the wire)"
    )
    request_status: RequestStatus = Field(
        default=RequestStatus.NONE,
        validation_alias=AliasChoices("requestStatus", "request_status")
    )
    request_date: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("requestDate", "request_date")
    )

    @field_validator("supervisor_id", mode="before")
    @classmethod
    def normalize_supervisor_id(cls, v: Any) -> str:
        identity = normalize_identity(v)
        if identity is None:
            raise ValueError("supervision request has no supervisor id")
        return identity

    @field_validator("request_status", mode="before")
    @classmethod
    def coerce_request_status(cls, v: Any) -> RequestStatus:
        return parse_request_status(v)


class ProjectFeed(BaseModel):
    """Read-only project snapshot, refreshed wholesale on every fetch"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    technologies: str = ""
    status: str = ProjectStatus.PENDING.value
    assigned_supervisor_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("supervisor", "assigned_supervisor_id")
    )
    supervisor_linked: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("supervisorLinked", "supervisor_linked")
    )
    supervision_requests: List[SupervisionRequestRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("supervisionRequests", "supervision_requests")
    )

    @field_validator("id", "assigned_supervisor_id", mode="before")
    @classmethod
    def normalize_reference(cls, v: Any) -> Optional[str]:
        return normalize_identity(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> str:
        # Unknown strings are kept as-is; the resolver degrades them
        if v is None:
            return ProjectStatus.PENDING.value
        return status_value(v)

    @field_validator("title", "technologies", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("supervision_requests", mode="before")
    @classmethod
    def drop_unidentified_requests(cls, v: Any) -> List[Any]:
        if v is None:
            return []
        if not isinstance(v, list):
            logger.warning(f"supervisionRequests is {type(v).__name__}, expected list; ignoring")
            return []

        kept = []
        for item in v:
            if isinstance(item, SupervisionRequestRecord):
                kept.append(item)
                continue
            raw_id = None
            if isinstance(item, dict):
                raw_id = next((item[k] for k in _REQUEST_ID_KEYS if k in item), None)
            if normalize_identity(raw_id) is None:
                logger.warning(f"Skipping supervision request without supervisor id: {item!r}")
                continue
            kept.append(item)
        return kept

    @model_validator(mode="after")
    def derive_supervisor_link(self) -> "ProjectFeed":
        if self.supervisor_linked is None:
            self.supervisor_linked = self.assigned_supervisor_id is not None
        return self

    @property
    def has_supervisor(self) -> bool:
        return self.assigned_supervisor_id is not None

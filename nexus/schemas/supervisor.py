"""Pydantic schemas for the faculty directory feed"""
from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from typing import Optional, List, Any

from nexus.core.config import settings
from nexus.schemas.common import normalize_identity


class SupervisorEntry(BaseModel):
    """One faculty member as listed by the directory feed"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    department: str = ""
    email: Optional[str] = None
    active_load: int = Field(
        default=0,
        validation_alias=AliasChoices("activeLoad", "currentProjectsCount", "active_load"),
        description="Projects currently supervised"
    )
    capacity_limit: int = Field(
        default_factory=lambda: settings.DEFAULT_CAPACITY_LIMIT,
        validation_alias=AliasChoices("capacityLimit", "maxProjects", "capacity_limit"),
        description="Maximum concurrent projects"
    )
    avatar_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("avatarUrl", "profilePicture", "avatar_url")
    )
    bio: str = ""
    expertise: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        identity = normalize_identity(v)
        if identity is None:
            raise ValueError("directory entry has no id")
        return identity

    @field_validator("name", "department", "bio", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("active_load", mode="before")
    @classmethod
    def clamp_active_load(cls, v: Any) -> int:
        if v is None:
            return 0
        return max(0, int(v))

    @field_validator("capacity_limit", mode="before")
    @classmethod
    def default_capacity_limit(cls, v: Any) -> int:
        if v is None:
            return settings.DEFAULT_CAPACITY_LIMIT
        return int(v)

    @field_validator("expertise", mode="before")
    @classmethod
    def split_expertise(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return [str(item) for item in v if item]

    @property
    def initial(self) -> str:
        """First letter of the name, shown when there is no avatar"""
        return self.name[:1].upper()

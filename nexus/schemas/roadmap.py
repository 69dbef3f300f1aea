from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from typing import Optional, List, Any


class RoadmapPhase(BaseModel):
    """One phase of an AI-drafted project timeline"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    phase: str = Field(..., validation_alias=AliasChoices("phase", "title", "name"))
    date_range: str = Field(
        default="",
        validation_alias=AliasChoices("dateRange", "date_range", "description")
    )
    tasks: List[str] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_tasks(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(task) for task in v]

    def to_wire(self) -> dict:
        return {"phase": self.phase, "dateRange": self.date_range, "tasks": list(self.tasks)}


class ChatMessage(BaseModel):
    role: str = Field(..., pattern="^(user|assistant)$")
    content: str


class ChatTurn(BaseModel):
    """Assistant reply from the roadmap chat"""
    reply: str
    display_text: str
    staged_roadmap: Optional[List[RoadmapPhase]] = None

    @property
    def has_roadmap(self) -> bool:
        return bool(self.staged_roadmap)

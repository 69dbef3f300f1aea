"""
AI Proposal & Roadmap Service

Client side of the remote AI endpoints. Text generation happens on the
server; this module only validates inputs, calls the API and shapes the
responses.

Roadmap chat replies may embed a machine-readable roadmap between
JSON_START and JSON_END markers. That block is extracted as a staged
roadmap and stripped from the text shown to the user.
"""

import json
import re
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from nexus.core.config import settings
from nexus.core.exceptions import AIResponseParseError, AIServiceError, ValidationError
from nexus.core.logging_config import logger
from nexus.schemas.roadmap import ChatMessage, ChatTurn, RoadmapPhase
from nexus.utils.api_client import APIResponse, NexusAPIClient

ROADMAP_BLOCK_PATTERN = re.compile(r"JSON_START([\s\S]*?)JSON_END")

DateLike = Union[date, datetime, str]


def _to_date(value: DateLike, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"Invalid date '{value}'", field=field)


def parse_roadmap(payload: Any) -> List[RoadmapPhase]:
    """Accept a bare phase list or an object wrapping one under roadmap/phases"""
    if isinstance(payload, dict):
        payload = payload.get("roadmap") or payload.get("phases")
    if not isinstance(payload, list):
        raise AIResponseParseError("Roadmap response is not a list of phases")
    try:
        return [RoadmapPhase.model_validate(item) for item in payload]
    except PydanticValidationError as e:
        raise AIResponseParseError(f"Invalid roadmap phase: {e.error_count()} error(s)")


def extract_staged_roadmap(reply: str) -> Optional[List[RoadmapPhase]]:
    """Roadmap embedded in a chat reply, or None when absent or unparseable"""
    match = ROADMAP_BLOCK_PATTERN.search(reply or "")
    if not match:
        return None
    try:
        return parse_roadmap(json.loads(match.group(1).strip()))
    except (json.JSONDecodeError, AIResponseParseError) as e:
        logger.warning(f"Could not parse staged roadmap from chat reply: {e}")
        return None


def strip_roadmap_blocks(reply: str) -> str:
    return ROADMAP_BLOCK_PATTERN.sub("", reply or "").strip()


class AIService:
    """Opaque request/response client for proposal and roadmap generation"""

    def __init__(self, client: NexusAPIClient):
        self.client = client

    @staticmethod
    def _raise_for_response(response: APIResponse, action: str) -> None:
        if response.success:
            return
        message = response.message or f"{action} failed"
        logger.warning(f"AI {action} failed with status {response.status}: {message}")
        raise AIServiceError(message, status_code=response.status)

    async def generate_proposal(self, title: str, tech_stack: str) -> str:
        if not title or not title.strip():
            raise ValidationError("Project title is required", field="title")

        response = await self.client.generate_proposal(title.strip(), tech_stack or "")
        self._raise_for_response(response, "proposal generation")

        if isinstance(response.data, dict) and isinstance(response.data.get("proposal"), str):
            return response.data["proposal"]
        raise AIResponseParseError("Proposal response has no proposal text")

    async def generate_roadmap(self, title: str, tech_stack: str,
                               start_date: DateLike, end_date: DateLike) -> List[RoadmapPhase]:
        start = _to_date(start_date, "start_date")
        end = _to_date(end_date, "end_date")
        if (end - start).days < settings.MIN_ROADMAP_DAYS:
            raise ValidationError("Project duration must be at least 1 week.", field="end_date")

        response = await self.client.generate_roadmap(
            title, tech_stack or "", start.isoformat(), end.isoformat()
        )
        self._raise_for_response(response, "roadmap generation")
        phases = parse_roadmap(response.data)
        logger.info(f"Roadmap drafted with {len(phases)} phases for '{title}'")
        return phases

    async def chat_roadmap(self, history: Sequence[Union[ChatMessage, dict]]) -> ChatTurn:
        messages = [
            (m if isinstance(m, ChatMessage) else ChatMessage.model_validate(m)).model_dump()
            for m in history
        ]
        if not messages:
            raise ValidationError("Chat history is empty", field="messages")

        response = await self.client.chat_roadmap(messages)
        self._raise_for_response(response, "roadmap chat")

        reply = response.data.get("reply") if isinstance(response.data, dict) else None
        if not isinstance(reply, str):
            raise AIResponseParseError("Chat response has no reply text")

        return ChatTurn(
            reply=reply,
            display_text=strip_roadmap_blocks(reply),
            staged_roadmap=extract_staged_roadmap(reply),
        )

    async def apply_roadmap(self, project_id: str, phases: Sequence[RoadmapPhase]) -> Any:
        if not phases:
            raise ValidationError("No staged roadmap to apply", field="roadmapData")

        response = await self.client.apply_roadmap(project_id, [p.to_wire() for p in phases])
        self._raise_for_response(response, "roadmap apply")
        logger.info(f"Applied {len(phases)}-phase roadmap to project {project_id}")
        return response.data.get("project") if isinstance(response.data, dict) else None

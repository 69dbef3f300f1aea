"""
Supervisor Directory Service

Loads the faculty directory and filters it for the search box.
Malformed payloads degrade to an empty directory; nothing raises to the
caller unless strict parsing is requested.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from nexus.core.exceptions import MalformedFeedError
from nexus.core.logging_config import logger
from nexus.schemas.supervisor import SupervisorEntry
from nexus.services.notifications import NotificationCenter
from nexus.utils.api_client import NexusAPIClient

DIRECTORY_FEED = "supervisor_directory"
SYNC_FAILED_MESSAGE = "Failed to sync faculty directory."


def parse_directory(payload: Any, strict: bool = False) -> List[SupervisorEntry]:
    """
    Parse a directory payload into entries.

    A non-list payload is treated as empty (or raises MalformedFeedError
    when strict). Individual entries that fail validation are skipped.
    """
    if not isinstance(payload, list):
        if strict:
            raise MalformedFeedError(DIRECTORY_FEED, type(payload).__name__)
        logger.warning(
            f"Directory feed returned {type(payload).__name__}, expected list; treating as empty"
        )
        return []

    entries = []
    for raw in payload:
        if isinstance(raw, SupervisorEntry):
            entries.append(raw)
            continue
        try:
            entries.append(SupervisorEntry.model_validate(raw))
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid directory entry: {e.error_count()} error(s) in {raw!r}")
    return entries


def _field_matches(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def filter_supervisors(entries: Iterable[SupervisorEntry], query: Optional[str]) -> List[SupervisorEntry]:
    """Case-insensitive substring match on name OR department"""
    needle = (query or "").strip().lower()
    if not needle:
        return list(entries)
    return [
        entry for entry in entries
        if _field_matches(entry.name, needle) or _field_matches(entry.department, needle)
    ]


class SupervisorDirectory:
    """Directory snapshot, refreshed wholesale on every fetch"""

    def __init__(self, client: NexusAPIClient, notifier: Optional[NotificationCenter] = None):
        self.client = client
        self.notifier = notifier
        self._entries: List[SupervisorEntry] = []
        self._by_id: Dict[str, SupervisorEntry] = {}

    @property
    def entries(self) -> List[SupervisorEntry]:
        return list(self._entries)

    def get(self, supervisor_id: str) -> Optional[SupervisorEntry]:
        return self._by_id.get(supervisor_id)

    def load(self, payload: Any) -> List[SupervisorEntry]:
        """Replace the snapshot from an already fetched payload"""
        self._entries = parse_directory(payload)
        self._by_id = {entry.id: entry for entry in self._entries}
        logger.log_feed_event(DIRECTORY_FEED, "loaded", count=len(self._entries))
        return self.entries

    async def fetch(self) -> List[SupervisorEntry]:
        response = await self.client.get_supervisors()
        if not response.success:
            logger.warning(f"Directory fetch failed with status {response.status}")
            if self.notifier is not None:
                self.notifier.error(SYNC_FAILED_MESSAGE)
            self._entries, self._by_id = [], {}
            return []
        return self.load(response.data)

    def search(self, query: Optional[str]) -> List[SupervisorEntry]:
        return filter_supervisors(self._entries, query)

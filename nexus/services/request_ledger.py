"""
Request Ledger

Resolves the display status of a supervision request for a supervisor.

Two layers are consulted, in order:
1. The optimistic overlay (ids believed sent but not yet in the feed) -> Sent
2. The authoritative records from the last project fetch -> their status
3. Otherwise -> None

The merge is a pure function (`status_of`). `RequestLedger` only holds the
authoritative layer, which is replaced wholesale on every refresh.
"""

from typing import Any, Collection, Dict, Iterable, Mapping, Optional, Union

from nexus.core.logging_config import logger
from nexus.models.supervision import RequestStatus, parse_request_status
from nexus.schemas.common import normalize_identity
from nexus.schemas.project import SupervisionRequestRecord

RecordLike = Union[SupervisionRequestRecord, Mapping[str, Any]]

_RAW_ID_KEYS = ("supervisorId", "teacherId", "supervisor_id")
_RAW_STATUS_KEYS = ("requestStatus", "request_status")


def _record_identity(record: RecordLike) -> Optional[str]:
    if isinstance(record, SupervisionRequestRecord):
        return record.supervisor_id
    for key in _RAW_ID_KEYS:
        if key in record:
            return normalize_identity(record[key])
    return None


def _record_status(record: RecordLike) -> RequestStatus:
    if isinstance(record, SupervisionRequestRecord):
        return record.request_status
    for key in _RAW_STATUS_KEYS:
        if key in record:
            return parse_request_status(record[key])
    return RequestStatus.NONE


def status_of(
    supervisor_id: str,
    authoritative: Union[Iterable[RecordLike], Mapping[str, RequestStatus]],
    overlay: Collection[str],
) -> RequestStatus:
    """
    Display status for one supervisor.

    `authoritative` is either a list of request records (parsed or raw feed
    dicts) or an already-normalized {supervisor_id: status} map.
    """
    if supervisor_id in overlay:
        return RequestStatus.SENT

    if isinstance(authoritative, Mapping):
        return authoritative.get(supervisor_id, RequestStatus.NONE)

    for record in authoritative or ():
        # First matching record wins
        if _record_identity(record) == supervisor_id:
            return _record_status(record)
    return RequestStatus.NONE


class RequestLedger:
    """Authoritative request map, refreshed wholesale from the project feed"""

    def __init__(self, records: Optional[Iterable[RecordLike]] = None):
        self._authoritative: Dict[str, RequestStatus] = {}
        if records is not None:
            self.refresh(records)

    def refresh(self, records: Iterable[RecordLike]) -> None:
        """Replace the authoritative layer with the latest fetch"""
        authoritative: Dict[str, RequestStatus] = {}
        for record in records or ():
            identity = _record_identity(record)
            if identity is None:
                logger.warning(f"Ledger refresh skipped a record without supervisor id: {record!r}")
                continue
            authoritative.setdefault(identity, _record_status(record))
        self._authoritative = authoritative
        logger.log_feed_event("supervision_requests", "refreshed", count=len(authoritative))

    def status_of(self, supervisor_id: str, overlay: Collection[str] = ()) -> RequestStatus:
        return status_of(supervisor_id, self._authoritative, overlay)

    def authoritative_status(self, supervisor_id: str) -> RequestStatus:
        """Status from the feed alone, ignoring any overlay"""
        return self._authoritative.get(supervisor_id, RequestStatus.NONE)

    def snapshot(self) -> Dict[str, RequestStatus]:
        return dict(self._authoritative)

    def __len__(self) -> int:
        return len(self._authoritative)

"""
Nexus Supervision - Test Configuration and Fixtures
"""
import os
import asyncio
from typing import Any, Dict, List, Optional

import pytest
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['LOG_LEVEL'] = 'DEBUG'
os.environ['LOG_FILE'] = ''
os.environ['API_BASE_URL'] = 'http://test/api'
os.environ['STRICT_STATUS_VALIDATION'] = 'false'

from nexus.schemas.supervisor import SupervisorEntry

fake = Faker()


class ControlledDispatch:
    """
    Dispatch collaborator whose calls stay pending until the test settles them.

    Each call records the supervisor id and awaits a future that the test
    resolves with succeed() or fail().
    """

    def __init__(self):
        self.calls: List[str] = []
        self._pending: Dict[str, List[asyncio.Future]] = {}

    async def __call__(self, supervisor_id: str) -> Any:
        self.calls.append(supervisor_id)
        future = asyncio.get_running_loop().create_future()
        self._pending.setdefault(supervisor_id, []).append(future)
        return await future

    def succeed(self, supervisor_id: str, result: Any = True) -> None:
        self._pending[supervisor_id].pop(0).set_result(result)

    def fail(self, supervisor_id: str, error: Optional[BaseException] = None) -> None:
        self._pending[supervisor_id].pop(0).set_exception(error or ConnectionError("network down"))


def supervisor_payload(**overrides) -> Dict[str, Any]:
    """Raw directory entry as the feed would send it"""
    payload = {
        "_id": fake.uuid4(),
        "name": fake.name(),
        "department": "Computer Science",
        "currentProjectsCount": 1,
        "maxProjects": 5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def dispatch() -> ControlledDispatch:
    return ControlledDispatch()


@pytest.fixture
def make_supervisor():
    def _make(**overrides) -> SupervisorEntry:
        return SupervisorEntry.model_validate(supervisor_payload(**overrides))
    return _make


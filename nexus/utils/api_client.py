"""
Nexus API Client
================
Thin async wrapper over the remote Nexus API.

The session is passed in explicitly; the client never reads tokens from
ambient storage. Transport failures are returned as unsuccessful
responses instead of raised, so callers branch on `response.success`.

Usage:
    from nexus.utils.api_client import NexusAPIClient

    async with NexusAPIClient(session=session) as client:
        response = await client.get_supervisors()
        if response.success:
            ...
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from nexus.core.config import settings
from nexus.core.exceptions import AuthenticationError
from nexus.core.logging_config import logger, get_request_id
from nexus.models.session import Session


@dataclass
class APIResponse:
    """API Response wrapper"""
    status: int
    data: Any
    success: bool
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> Optional[str]:
        if isinstance(self.data, dict):
            return self.data.get("message") or self.data.get("error")
        return None


class NexusAPIClient:
    """API client for the Nexus backend"""

    def __init__(
        self,
        session: Optional[Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip('/')
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(
                timeout or settings.REQUEST_TIMEOUT,
                connect=settings.CONNECT_TIMEOUT,
            ),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _get_headers(self, auth: bool = True) -> Dict[str, str]:
        """Get request headers"""
        headers = {"Content-Type": "application/json"}
        if auth and self.session is not None:
            headers.update(self.session.auth_headers())
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        auth: bool = True,
    ) -> APIResponse:
        """Make HTTP request"""
        try:
            response = await self._client.request(
                method, endpoint, json=data, headers=self._get_headers(auth)
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed: {type(e).__name__}: {e}")
            return APIResponse(status=0, data={"error": str(e)}, success=False)

        try:
            response_data = response.json()
        except ValueError:
            response_data = response.text

        if response.status_code == 401 and self.session is not None:
            logger.warning("Unauthorized response; clearing session token")
            self.session.clear()

        return APIResponse(
            status=response.status_code,
            data=response_data,
            success=response.is_success,
            headers=dict(response.headers),
        )

    # ==================== Directory ====================
    async def get_supervisors(self) -> APIResponse:
        """Faculty directory with real-time load"""
        return await self._request("GET", "/users/supervisors")

    # ==================== Projects ====================
    async def get_project(self, project_id: str) -> APIResponse:
        return await self._request("GET", f"/projects/{project_id}")

    async def get_my_project(self) -> APIResponse:
        """Project led by the current student"""
        if self.session is None or not self.session.is_authenticated:
            raise AuthenticationError("Log in to load your project")
        return await self._request("GET", "/projects/my")

    async def request_supervisor(self, project_id: str, supervisor_id: str) -> APIResponse:
        """Send a supervision request for a project"""
        return await self._request(
            "PUT",
            f"/projects/{project_id}/request-supervisor",
            data={"teacherId": supervisor_id},
        )

    def invite_dispatch_for(self, project_id: str):
        """Dispatch collaborator for InviteDispatcher bound to one project"""
        async def dispatch(supervisor_id: str) -> APIResponse:
            return await self.request_supervisor(project_id, supervisor_id)
        return dispatch

    # ==================== AI ====================
    async def generate_proposal(self, title: str, tech_stack: str) -> APIResponse:
        return await self._request("POST", "/ai/proposal", data={"title": title, "techStack": tech_stack})

    async def generate_roadmap(self, title: str, tech_stack: str,
                               start_date: str, end_date: str) -> APIResponse:
        return await self._request(
            "POST",
            "/ai/roadmap",
            data={
                "title": title,
                "techStack": tech_stack,
                "startDate": start_date,
                "endDate": end_date,
            },
        )

    async def chat_roadmap(self, messages: List[Dict[str, str]]) -> APIResponse:
        return await self._request("POST", "/ai/chat-roadmap", data={"messages": messages})

    async def apply_roadmap(self, project_id: str, roadmap: List[Dict[str, Any]]) -> APIResponse:
        return await self._request(
            "POST",
            "/ai/apply-roadmap",
            data={"projectId": project_id, "roadmapData": roadmap},
        )

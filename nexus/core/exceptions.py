"""
Custom Exceptions for Nexus Supervision
=======================================

Use these instead of generic Exception to:
1. Make errors more specific and debuggable
2. Give callers a stable error code to branch on
3. Provide meaningful error messages to users

Usage:
    from nexus.core.exceptions import AdmissionDeniedError, AIServiceError

    outcome = await dispatcher.invite(supervisor_id, capacity)
    outcome.raise_for_outcome()

    try:
        proposal = await ai_service.generate_proposal(title, tech_stack)
    except AIServiceError as e:
        logger.error(f"Proposal generation failed: {e}")
        raise
"""

from typing import Optional, Any, Dict, Iterable


class NexusError(Exception):
    """Base exception for all Nexus errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication Errors
# ============================================

class AuthenticationError(NexusError):
    """No usable session for an authenticated call"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_REQUIRED")


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(NexusError):
    """Input validation failed"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class UnknownStatusError(ValidationError):
    """Project status string outside the milestone sequence"""

    def __init__(self, status: Any, known: Iterable[str]):
        known = list(known)
        super().__init__(
            f"Unknown project status '{status}'. Known: {', '.join(known)}",
            field="status"
        )
        self.code = "UNKNOWN_STATUS"
        self.details["status"] = status
        self.details["known_statuses"] = known


# ============================================
# Feed Errors
# ============================================

class FeedError(NexusError):
    """Upstream data feed could not be used"""

    def __init__(self, message: str, feed: Optional[str] = None):
        super().__init__(message, code="FEED_ERROR")
        if feed:
            self.details["feed"] = feed


class MalformedFeedError(FeedError):
    """Feed payload had the wrong shape"""

    def __init__(self, feed: str, received_type: str):
        super().__init__(
            f"Expected a list from the {feed} feed, got {received_type}",
            feed=feed
        )
        self.code = "MALFORMED_FEED"
        self.details["received_type"] = received_type


# ============================================
# Supervision Request Errors
# ============================================

class SupervisionError(NexusError):
    """Supervision request lifecycle error"""

    def __init__(self, message: str, supervisor_id: Optional[str] = None, code: str = "SUPERVISION_ERROR"):
        super().__init__(message, code=code)
        if supervisor_id:
            self.details["supervisor_id"] = supervisor_id


class AdmissionDeniedError(SupervisionError):
    """Invite rejected by the admission gate before dispatch"""

    def __init__(self, supervisor_id: str, reason: str):
        super().__init__(
            f"Supervision request to '{supervisor_id}' not admitted: {reason}",
            supervisor_id=supervisor_id,
            code="ADMISSION_DENIED"
        )
        self.details["reason"] = reason


class DispatchError(SupervisionError):
    """Remote dispatch of a supervision request failed"""

    def __init__(self, supervisor_id: str, message: str = "Failed to transmit request."):
        super().__init__(message, supervisor_id=supervisor_id, code="DISPATCH_FAILED")


# ============================================
# AI Service Errors
# ============================================

class AIServiceError(NexusError):
    """Remote AI proposal/roadmap service error"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, code="AI_SERVICE_ERROR")
        if status_code is not None:
            self.details["status_code"] = status_code


class AIResponseParseError(AIServiceError):
    """Failed to parse AI response"""

    def __init__(self, message: str = "Failed to parse AI response"):
        super().__init__(message)
        self.code = "AI_PARSE_ERROR"


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: NexusError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }

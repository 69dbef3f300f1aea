"""
Unit Tests for Feed Schemas
Tests for: identity normalization, project and directory ingestion, roadmap models
"""
import pytest
from pydantic import ValidationError

from nexus.core.config import settings
from nexus.models.supervision import RequestStatus
from nexus.schemas import (
    ChatMessage,
    ProjectFeed,
    RoadmapPhase,
    SupervisionRequestRecord,
    SupervisorEntry,
    normalize_identity,
)


class TestNormalizeIdentity:
    """Test the dual-shape identity reduction"""

    def test_bare_and_nested_agree(self):
        """Test bare ids and populated objects reduce to the same id"""
        assert normalize_identity("abc") == "abc"
        assert normalize_identity({"_id": "abc", "name": "Dr. A"}) == "abc"
        assert normalize_identity({"id": "abc"}) == "abc"

    def test_nested_object_attribute(self):
        """Test objects exposing an id attribute"""
        class Ref:
            id = "abc"

        assert normalize_identity(Ref()) == "abc"

    def test_numbers_and_whitespace(self):
        """Test numeric ids stringify and blanks are rejected"""
        assert normalize_identity(42) == "42"
        assert normalize_identity("  abc ") == "abc"
        assert normalize_identity("   ") is None

    def test_missing(self):
        """Test values without an id give None"""
        assert normalize_identity(None) is None
        assert normalize_identity(True) is None
        assert normalize_identity({"name": "no id"}) is None
        assert normalize_identity(["abc"]) is None


class TestSupervisionRequestRecord:
    """Test request record ingestion"""

    def test_teacher_id_alias(self):
        """Test teacherId is accepted as the supervisor reference"""
        record = SupervisionRequestRecord.model_validate({"teacherId": "t1", "requestStatus": "Accepted"})

        assert record.supervisor_id == "t1"
        assert record.request_status == RequestStatus.ACCEPTED

    def test_unknown_status(self):
        """Test unknown statuses map to None"""
        record = SupervisionRequestRecord.model_validate({"supervisorId": "t1", "requestStatus": "Archived"})

        assert record.request_status == RequestStatus.NONE

    def test_missing_supervisor_fails(self):
        """Test records without a supervisor are invalid"""
        with pytest.raises(ValidationError):
            SupervisionRequestRecord.model_validate({"supervisorId": {"name": "x"}, "requestStatus": "Sent"})


class TestProjectFeed:
    """Test project ingestion"""

    def test_full_payload(self):
        """Test a populated project payload"""
        project = ProjectFeed.model_validate({
            "_id": "p1",
            "title": "Smart Campus",
            "status": "Ongoing",
            "supervisor": {"_id": "t1", "name": "Dr. A"},
            "supervisionRequests": [
                {"supervisorId": {"_id": "t1"}, "requestStatus": "Accepted", "requestDate": "2025-01-10T10:00:00Z"},
            ],
        })

        assert project.id == "p1"
        assert project.assigned_supervisor_id == "t1"
        assert project.supervisor_linked is True
        assert project.has_supervisor is True
        assert project.supervision_requests[0].supervisor_id == "t1"
        assert project.supervision_requests[0].request_date.year == 2025

    def test_defaults(self):
        """Test missing fields fall back to safe defaults"""
        project = ProjectFeed.model_validate({"_id": "p1", "status": None, "title": None})

        assert project.status == "Pending"
        assert project.title == ""
        assert project.supervisor_linked is False
        assert project.supervision_requests == []

    def test_explicit_link_flag_kept(self):
        """Test an explicit supervisorLinked flag overrides derivation"""
        project = ProjectFeed.model_validate({"_id": "p1", "supervisorLinked": True})

        assert project.supervisor_linked is True
        assert project.has_supervisor is False

    def test_unknown_status_kept(self):
        """Test unknown statuses pass through for the resolver to degrade"""
        assert ProjectFeed.model_validate({"status": "Rejected"}).status == "Rejected"

    def test_requests_without_id_dropped(self):
        """Test request entries with no supervisor id are skipped"""
        project = ProjectFeed.model_validate({
            "supervisionRequests": [
                {"requestStatus": "Sent"},
                {"supervisorId": None, "requestStatus": "Sent"},
                {"supervisorId": "t2", "requestStatus": "Sent"},
            ],
        })

        assert [r.supervisor_id for r in project.supervision_requests] == ["t2"]

    def test_requests_not_a_list(self):
        """Test a malformed request collection is treated as empty"""
        project = ProjectFeed.model_validate({"supervisionRequests": "oops"})

        assert project.supervision_requests == []


class TestSupervisorEntry:
    """Test directory entry ingestion"""

    def test_feed_aliases(self):
        """Test the directory feed's field names map onto the entry"""
        entry = SupervisorEntry.model_validate({
            "_id": "t1",
            "name": "ana lopez",
            "department": "React Lab",
            "currentProjectsCount": 3,
            "maxProjects": 4,
            "profilePicture": "https://cdn.example.com/a.png",
            "expertise": "React, Node ,  ",
        })

        assert entry.id == "t1"
        assert entry.active_load == 3
        assert entry.capacity_limit == 4
        assert entry.avatar_url == "https://cdn.example.com/a.png"
        assert entry.expertise == ["React", "Node"]
        assert entry.initial == "A"

    def test_missing_limit_and_negative_load(self):
        """Test missing limit defaults and negative load clamps"""
        entry = SupervisorEntry.model_validate({"_id": "t1", "currentProjectsCount": -2})

        assert entry.active_load == 0
        assert entry.capacity_limit == settings.DEFAULT_CAPACITY_LIMIT

    def test_missing_id_fails(self):
        """Test an entry without an id is invalid"""
        with pytest.raises(ValidationError):
            SupervisorEntry.model_validate({"name": "No Id"})


class TestRoadmapSchemas:
    """Test roadmap and chat models"""

    def test_phase_aliases(self):
        """Test alternative phase keys are accepted"""
        phase = RoadmapPhase.model_validate({"title": "Research", "description": "Week 1", "tasks": "Survey"})

        assert phase.to_wire() == {"phase": "Research", "dateRange": "Week 1", "tasks": ["Survey"]}

    def test_chat_role_restricted(self):
        """Test only user and assistant roles are allowed"""
        with pytest.raises(ValidationError):
            ChatMessage(role="system", content="hi")

"""
Unit Tests for the Notification Center
"""
from datetime import timedelta

from nexus.services.notifications import Notification, NotificationCenter, NotificationKind


class TestNotificationCenter:
    """Test posting and expiring notices"""

    def test_post_by_kind(self):
        """Test helpers post notices of the right kind"""
        center = NotificationCenter()
        center.success("Saved")
        center.error("Failed")
        center.info("FYI")

        assert [n.kind for n in center.drain()] == [
            NotificationKind.SUCCESS,
            NotificationKind.ERROR,
            NotificationKind.INFO,
        ]
        assert len(center) == 0

    def test_dismiss(self):
        """Test dismissing a notice removes only that one"""
        center = NotificationCenter()
        first = center.info("one")
        center.info("two")

        center.dismiss(first.id)

        assert [n.message for n in center.active()] == ["two"]

    def test_expiry(self):
        """Test notices drop out of the active list after the TTL"""
        center = NotificationCenter(ttl_seconds=4)
        notice = center.info("short lived")

        assert center.active(now=notice.created_at + timedelta(seconds=3)) == [notice]
        assert center.active(now=notice.created_at + timedelta(seconds=5)) == []

    def test_expired_notices_released(self):
        """Test expired notices are removed from the store, not just hidden"""
        center = NotificationCenter(ttl_seconds=4)
        notices = [center.info(str(i)) for i in range(50)]
        later = notices[-1].created_at + timedelta(seconds=5)

        assert center.active(now=later) == []
        assert len(center) == 0

    def test_posting_prunes_expired(self):
        """Test a new notice drops the ones already past their window"""
        center = NotificationCenter(ttl_seconds=4)
        old = center.info("old")
        old.created_at -= timedelta(seconds=10)

        center.info("new")

        assert [n.message for n in center.drain()] == ["new"]

    def test_prune_reports_count(self):
        """Test prune returns the number of dropped notices"""
        center = NotificationCenter(ttl_seconds=4)
        first = center.info("one")
        center.info("two")

        assert center.prune(now=first.created_at + timedelta(seconds=1)) == 0
        assert center.prune(now=first.created_at + timedelta(minutes=1)) == 2
        assert len(center) == 0

    def test_listener_receives_notices(self):
        """Test the listener is called for every notice"""
        seen = []
        center = NotificationCenter(listener=seen.append)
        center.error("boom")

        assert [n.message for n in seen] == ["boom"]

    def test_listener_failure_does_not_raise(self):
        """Test a failing listener never breaks posting"""
        def listener(notification: Notification):
            raise RuntimeError("ui gone")

        center = NotificationCenter(listener=listener)
        notice = center.success("still posted")

        assert center.drain() == [notice]

    def test_ids_unique(self):
        """Test each notice gets its own id"""
        center = NotificationCenter()
        ids = {center.info(str(i)).id for i in range(20)}

        assert len(ids) == 20

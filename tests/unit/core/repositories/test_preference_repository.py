"""Unit tests for PreferenceRepository."""

import pytest

from core.exceptions import ConflictError
from core.repositories import PreferenceRepository


@pytest.mark.django_db
def test_create_and_get_round_trip():
    """Test that a created record can be read back."""
    PreferenceRepository.create("user-1", email="a@example.com")

    record = PreferenceRepository.get("user-1")

    assert record is not None
    assert record.email == "a@example.com"
    assert record.timezone == "UTC"
    assert record.frequency == "weekly"
    assert record.topics == {"marketing": False, "newsletter": False, "updates": False}
    assert record.channels == {"email": False, "sms": False, "push": False}


@pytest.mark.django_db
def test_get_missing_returns_none():
    """Test that an absent user reads as None."""
    assert PreferenceRepository.get("missing") is None
    assert PreferenceRepository.exists("missing") is False


@pytest.mark.django_db
def test_create_duplicate_user_raises_conflict():
    """Test that user IDs are unique."""
    PreferenceRepository.create("user-1", email="a@example.com")

    with pytest.raises(ConflictError):
        PreferenceRepository.create("user-1", email="b@example.com")


@pytest.mark.django_db
def test_update_merges_nested_documents():
    """Test that topics and channels merge key by key."""
    PreferenceRepository.create(
        "user-1",
        email="a@example.com",
        topics={"marketing": True, "newsletter": True, "updates": False},
    )

    record = PreferenceRepository.update(
        "user-1", {"topics": {"updates": True}, "timezone": "Asia/Tokyo"}
    )

    assert record.topics == {"marketing": True, "newsletter": True, "updates": True}
    assert record.timezone == "Asia/Tokyo"
    reloaded = PreferenceRepository.get("user-1")
    assert reloaded.topics == record.topics
    assert reloaded.updated_at >= reloaded.created_at


@pytest.mark.django_db
def test_update_missing_returns_none():
    """Test that updating an absent user returns None."""
    assert PreferenceRepository.update("missing", {"frequency": "daily"}) is None


@pytest.mark.django_db
def test_delete_reports_whether_a_record_existed():
    """Test that delete returns True once, then False."""
    PreferenceRepository.create("user-1", email="a@example.com")

    assert PreferenceRepository.delete("user-1") is True
    assert PreferenceRepository.delete("user-1") is False

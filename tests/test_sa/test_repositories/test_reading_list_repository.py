# tests/test_sa/test_repositories/test_reading_list_repository.py
import pytest
from core.exceptions import NotFoundError, ValidationError
from core.sa.models import ReadingListEntry, ReadingStatus

def _entries(db_session, user_id, book_id):
    return (
        db_session.query(ReadingListEntry)
        .filter(ReadingListEntry.user_id == user_id, ReadingListEntry.book_id == book_id)
        .all()
    )

def test_add_same_status_twice_is_idempotent(reading_list_repo, db_session, sample_book):
    first = reading_list_repo.upsert_status("user-1", sample_book.id, "want_to_read")
    second = reading_list_repo.upsert_status("user-1", sample_book.id, "want_to_read")

    entries = _entries(db_session, "user-1", sample_book.id)
    assert len(entries) == 1
    assert entries[0].status == "want_to_read"
    assert first.id == second.id

def test_new_status_overwrites_without_duplicate(reading_list_repo, db_session, sample_book):
    reading_list_repo.upsert_status("user-1", sample_book.id, ReadingStatus.WANT_TO_READ)
    entry = reading_list_repo.upsert_status("user-1", sample_book.id, ReadingStatus.CURRENTLY_READING)

    entries = _entries(db_session, "user-1", sample_book.id)
    assert len(entries) == 1
    assert entries[0].status == "currently_reading"
    assert entry.status == "currently_reading"

def test_same_book_for_different_users(reading_list_repo, db_session, sample_book):
    reading_list_repo.upsert_status("user-1", sample_book.id, "want_to_read")
    reading_list_repo.upsert_status("user-2", sample_book.id, "currently_reading")
    assert db_session.query(ReadingListEntry).count() == 2

def test_invalid_status_rejected(reading_list_repo, db_session, sample_book):
    with pytest.raises(ValidationError):
        reading_list_repo.upsert_status("user-1", sample_book.id, "finished")
    assert db_session.query(ReadingListEntry).count() == 0

def test_unknown_book_rejected(reading_list_repo):
    with pytest.raises(NotFoundError):
        reading_list_repo.upsert_status("user-1", "missing-book", "want_to_read")

def test_list_for_user_includes_books(reading_list_repo, two_memberships):
    entries = reading_list_repo.list_for_user("user-1")
    assert len(entries) == 2
    assert {e.book.title for e in entries} == {"Test Book 1", "Test Book 2"}
    assert reading_list_repo.list_for_user("someone-else") == []

def test_delete_entry(reading_list_repo, db_session, two_memberships):
    reading, wanted = two_memberships
    assert reading_list_repo.delete_entry(reading.id) is True
    remaining = db_session.query(ReadingListEntry).all()
    assert [e.id for e in remaining] == [wanted.id]

def test_delete_missing_entry_leaves_others(reading_list_repo, db_session, two_memberships):
    assert reading_list_repo.delete_entry("does-not-exist") is False
    assert db_session.query(ReadingListEntry).count() == 2

def test_delete_entry_of_other_user(reading_list_repo, db_session, two_memberships):
    reading, _ = two_memberships
    assert reading_list_repo.delete_entry(reading.id, user_id="user-2") is False
    assert db_session.query(ReadingListEntry).count() == 2

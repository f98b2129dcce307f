# tests/test_sa/test_repositories/test_book_repository.py
import pytest
from unittest.mock import Mock
from sqlalchemy.exc import OperationalError
from core.exceptions import DataServiceError, ValidationError
from core.sa.repositories.book import BookRepository

def test_get_by_id(book_repo, sample_book):
    """Test fetching a book by ID"""
    book = book_repo.get_by_id(sample_book.id)
    assert book is not None
    assert book.title == "Dune"
    assert book.pdf_file_path == "sample-dune.pdf"

def test_get_by_nonexistent_id(book_repo):
    assert book_repo.get_by_id("nonexistent_id") is None

def test_list_all_newest_first(book_repo, multiple_books):
    """Test that the catalog comes back in reverse creation order"""
    books = book_repo.list_all()
    assert [b.title for b in books] == [f"Test Book {i}" for i in range(5, 0, -1)]

def test_list_all_with_limit_and_offset(book_repo, multiple_books):
    books = book_repo.list_all(limit=2, offset=1)
    assert [b.title for b in books] == ["Test Book 4", "Test Book 3"]

def test_count_books(book_repo, multiple_books):
    assert book_repo.count_books() == 5

def test_create_book_with_only_required_fields(book_repo):
    """Optional fields stay null rather than empty or zero"""
    book = book_repo.create_book(title="  Dune ", author="Frank Herbert", pdf_file_path="abc-dune.pdf")
    assert book.id
    assert book.title == "Dune"
    assert book.description is None
    assert book.genre is None
    assert book.published_year is None
    assert book.page_count is None
    assert book.cover_image_url is None
    assert book_repo.count_books() == 1

@pytest.mark.parametrize("title, author, message", [
    ("", "Frank Herbert", "Title is required"),
    ("Dune", "   ", "Author is required"),
])
def test_create_book_requires_title_and_author(book_repo, title, author, message):
    with pytest.raises(ValidationError, match=message):
        book_repo.create_book(title=title, author=author)
    assert book_repo.count_books() == 0

def test_query_failure_is_wrapped():
    """SQLAlchemy errors surface as DataServiceError and roll the session back"""
    session = Mock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    repo = BookRepository(session)

    with pytest.raises(DataServiceError):
        repo.list_all()
    session.rollback.assert_called_once()

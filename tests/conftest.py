# tests/conftest.py
import sys
import pytest
from io import BytesIO
from pathlib import Path
from datetime import datetime, timedelta, UTC
from sqlalchemy.orm import Session
from PIL import Image

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.auth import AuthClient, Identity, SessionContext
from core.config import Settings
from core.sa.database import Database
from core.sa.models import Book, ReadingListEntry, ReadingStatus
from core.sa.repositories import BookRepository, ReadingListRepository, SessionRepository
from core.storage import LocalObjectStore

TEST_SECRET = "test-secret"
TEST_USER_ID = "user-1"

@pytest.fixture
def test_db_path(tmp_path):
    """Temporary file for the test database"""
    return tmp_path / "test_booknest.db"

@pytest.fixture
def database(test_db_path):
    """Create a test database with a fresh schema"""
    db = Database(f"sqlite:///{test_db_path}")
    db.init_db()
    yield db
    db.dispose()

@pytest.fixture
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def book_repo(db_session):
    return BookRepository(db_session)

@pytest.fixture
def reading_list_repo(db_session):
    return ReadingListRepository(db_session)

@pytest.fixture
def store(tmp_path):
    """Object store rooted in a temporary directory"""
    return LocalObjectStore(tmp_path / "storage", secret=TEST_SECRET, public_url="http://testserver")

@pytest.fixture
def auth_client(db_session):
    return AuthClient(TEST_SECRET, SessionRepository(db_session))

@pytest.fixture
def session_context(auth_client):
    """A signed-in user"""
    return SessionContext(Identity(user_id=TEST_USER_ID, session_id="session-1"), auth_client)

@pytest.fixture
def anonymous_context(auth_client):
    return SessionContext(None, auth_client)

@pytest.fixture
def settings(tmp_path, test_db_path):
    return Settings(
        database_url=f"sqlite:///{test_db_path}",
        storage_root=str(tmp_path / "storage"),
        public_url="http://testserver",
        jwt_secret=TEST_SECRET,
        log_level="DEBUG",
    )

@pytest.fixture
def pdf_bytes():
    return b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"

@pytest.fixture
def png_bytes():
    """A small valid PNG"""
    buffer = BytesIO()
    Image.new("RGB", (40, 60), color=(200, 120, 40)).save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def sample_book(db_session, store, pdf_bytes):
    """A book whose PDF is in the books bucket"""
    store.upload("books", "sample-dune.pdf", pdf_bytes)
    book = Book(
        title="Dune",
        author="Frank Herbert",
        description="Desert planet",
        genre="Science Fiction",
        published_year=1965,
        page_count=412,
        pdf_file_path="sample-dune.pdf",
    )
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def book_without_pdf(db_session):
    book = Book(title="Unfinished", author="Nobody")
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def multiple_books(db_session):
    """Create books with increasing creation times"""
    start = datetime.now(UTC) - timedelta(days=10)
    books = []
    for i in range(1, 6):
        book = Book(
            title=f"Test Book {i}",
            author=f"Author {i}",
            created_at=start + timedelta(days=i),
            updated_at=start + timedelta(days=i),
        )
        db_session.add(book)
        books.append(book)
    db_session.commit()
    return books

@pytest.fixture
def two_memberships(db_session, multiple_books):
    """One currently reading and one want to read entry for the test user"""
    reading = ReadingListEntry(
        user_id=TEST_USER_ID,
        book_id=multiple_books[0].id,
        status=ReadingStatus.CURRENTLY_READING.value,
    )
    wanted = ReadingListEntry(
        user_id=TEST_USER_ID,
        book_id=multiple_books[1].id,
        status=ReadingStatus.WANT_TO_READ.value,
    )
    db_session.add_all([reading, wanted])
    db_session.commit()
    return reading, wanted

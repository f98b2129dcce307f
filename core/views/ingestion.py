# core/views/ingestion.py
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.auth.session import SessionContext
from core.exceptions import BookNestError, ValidationError
from core.models.book import BookDetail
from core.models.view import IngestionForm, IngestionState, SubmissionStatus
from core.sa.models import Book
from core.sa.repositories.book import BookRepository
from core.storage import BOOKS_BUCKET, COVERS_BUCKET, LocalObjectStore, make_object_path
from core.utils.image import CoverImage, cover_filename, inspect_cover
from .base import ProtectedView

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


@dataclass
class SelectedFile:
    """A file picked in one of the form's file inputs."""
    filename: str
    data: bytes
    content_type: Optional[str] = None


def parse_optional_int(value: Optional[str], field_name: str) -> Optional[int]:
    """Parse a numeric form field. Blank means absent, not zero."""
    if value is None or not str(value).strip():
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class IngestionView(ProtectedView):
    """Admin upload form: one PDF, an optional cover, and the book's metadata.

    The form moves idle -> submitting -> idle. A successful submit resets the
    form; a failed one keeps everything the user entered. Uploads are not
    rolled back when a later step fails.

    The submit lock guards one long-lived form instance, such as an embedded
    or CLI session. The HTTP API builds a fresh view per request, so two
    requests are two independent submits.
    """

    def __init__(self, session: SessionContext, books: BookRepository, store: LocalObjectStore):
        super().__init__(session)
        self.books = books
        self.store = store
        self.form = IngestionForm()
        self.pdf_file: Optional[SelectedFile] = None
        self.cover_file: Optional[SelectedFile] = None
        self.status = SubmissionStatus.IDLE
        self._submit_lock = threading.Lock()

    def update_form(self, **fields) -> IngestionState:
        unknown = set(fields) - set(IngestionForm.model_fields)
        if unknown:
            raise ValueError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.form = self.form.model_copy(update={k: "" if v is None else str(v) for k, v in fields.items()})
        return self.state()

    def select_pdf(self, file: Optional[SelectedFile]) -> IngestionState:
        self.pdf_file = file
        return self.state()

    def select_cover(self, file: Optional[SelectedFile]) -> IngestionState:
        self.cover_file = file
        return self.state()

    def reset(self) -> None:
        self.form = IngestionForm()
        self.pdf_file = None
        self.cover_file = None

    def state(self) -> IngestionState:
        return IngestionState(
            status=self.status,
            form=self.form.model_copy(),
            pdf_filename=self.pdf_file.filename if self.pdf_file else None,
            cover_filename=self.cover_file.filename if self.cover_file else None,
        )

    def submit(self) -> IngestionState:
        """Upload the files and create the book record.

        Returns:
            IngestionState with a success or error notification. While a submit
            is already running, the current state is returned and nothing else
            happens.
        """
        gated = self._gate(self.state())
        if gated:
            return gated

        if not self._submit_lock.acquire(blocking=False):
            logger.warning("Ignoring submit while an upload is in progress")
            return self.state()

        self.status = SubmissionStatus.SUBMITTING
        try:
            book = self._ingest()
        except BookNestError as e:
            logger.error(f"Book upload failed: {str(e)}")
            self.status = SubmissionStatus.IDLE
            state = self.state()
            state.notify_error("Error", str(e))
            return state
        finally:
            self.status = SubmissionStatus.IDLE
            self._submit_lock.release()

        self.reset()
        state = self.state()
        state.book = BookDetail.model_validate(book)
        state.notify("Success!", "Book uploaded successfully")
        return state

    def _validate(self) -> Tuple[SelectedFile, Optional[CoverImage], dict]:
        if self.pdf_file is None:
            raise ValidationError("Please select a PDF file")
        if not self.pdf_file.data.startswith(PDF_MAGIC):
            raise ValidationError(f"{self.pdf_file.filename} is not a PDF file")

        if not self.form.title.strip():
            raise ValidationError("Title is required")
        if not self.form.author.strip():
            raise ValidationError("Author is required")

        fields = {
            "title": self.form.title.strip(),
            "author": self.form.author.strip(),
            "description": optional_text(self.form.description),
            "genre": optional_text(self.form.genre),
            "published_year": parse_optional_int(self.form.published_year, "Published year"),
            "page_count": parse_optional_int(self.form.page_count, "Page count"),
        }
        cover = inspect_cover(self.cover_file.data) if self.cover_file else None
        return self.pdf_file, cover, fields

    def _ingest(self) -> Book:
        pdf, cover, fields = self._validate()
        stored: List[Tuple[str, str]] = []

        pdf_path = make_object_path(pdf.filename)
        self.store.upload(BOOKS_BUCKET, pdf_path, pdf.data, upsert=True)
        stored.append((BOOKS_BUCKET, pdf_path))

        try:
            cover_url = None
            if cover is not None:
                cover_path = make_object_path(cover_filename(self.cover_file.filename, cover))
                self.store.upload(COVERS_BUCKET, cover_path, cover.data)
                stored.append((COVERS_BUCKET, cover_path))
                cover_url = self.store.get_public_url(COVERS_BUCKET, cover_path)

            return self.books.create_book(
                pdf_file_path=pdf_path,
                cover_image_url=cover_url,
                **fields,
            )
        except BookNestError:
            for bucket, path in stored:
                logger.warning(f"Upload left without a book record: {bucket}/{path}")
            raise

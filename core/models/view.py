# core/models/view.py

from pydantic import BaseModel, ConfigDict, Field, computed_field
from enum import Enum
from typing import List, Optional

from .book import BookSummary, BookDetail

class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"

class Notification(BaseModel):
    title: str
    description: Optional[str] = None
    variant: NotificationVariant = NotificationVariant.DEFAULT

class ViewState(BaseModel):
    """What a view hands back to its caller after an operation.

    ``redirect`` is set when the caller has to navigate away instead of
    rendering this state.
    """
    notifications: List[Notification] = Field(default_factory=list)
    redirect: Optional[str] = None

    def notify(self, title: str, description: Optional[str] = None) -> None:
        self.notifications.append(Notification(title=title, description=description))

    def notify_error(self, title: str, description: Optional[str] = None) -> None:
        self.notifications.append(
            Notification(title=title, description=description, variant=NotificationVariant.DESTRUCTIVE)
        )

    @property
    def has_errors(self) -> bool:
        return any(n.variant == NotificationVariant.DESTRUCTIVE for n in self.notifications)

class CatalogCard(BookSummary):
    link: str

class CatalogState(ViewState):
    books: List[CatalogCard] = Field(default_factory=list)

class ReaderState(ViewState):
    book: Optional[BookDetail] = None
    pdf_url: Optional[str] = None

    @computed_field
    @property
    def content_available(self) -> bool:
        return self.pdf_url is not None

class ReadingListItem(BaseModel):
    id: str
    status: str
    book: BookSummary
    link: str

    model_config = ConfigDict(from_attributes=True)

class ReadingListState(ViewState):
    currently_reading: List[ReadingListItem] = Field(default_factory=list)
    want_to_read: List[ReadingListItem] = Field(default_factory=list)

class ListActionResult(ViewState):
    """Outcome of an add-to-list action."""
    entry_id: Optional[str] = None
    status: Optional[str] = None

class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"

class IngestionForm(BaseModel):
    """Raw form fields, kept as typed by the user."""
    title: str = ""
    author: str = ""
    description: str = ""
    genre: str = ""
    published_year: str = ""
    page_count: str = ""

class IngestionState(ViewState):
    status: SubmissionStatus = SubmissionStatus.IDLE
    form: IngestionForm = Field(default_factory=IngestionForm)
    pdf_filename: Optional[str] = None
    cover_filename: Optional[str] = None
    book: Optional[BookDetail] = None

    @computed_field
    @property
    def busy(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING

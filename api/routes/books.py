# api/routes/books.py

from fastapi import APIRouter, Depends, status

from api.dependencies import get_catalog_view, get_reader_view
from api.responses import render
from api.schemas.book import AddToListRequest, StatusLabel, StatusLabelList
from core.models.view import CatalogState, ListActionResult, ReaderState
from core.sa.models import STATUS_LABELS
from core.views import CatalogView, ReaderView

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=CatalogState)
def list_books(view: CatalogView = Depends(get_catalog_view)):
    """
    List every book in the library, newest first.

    A failing fetch still answers 200 with an empty list and an error
    notification.
    """
    return render(view.load())

@router.get("/statuses", response_model=StatusLabelList)
def list_statuses():
    """The reading list statuses and their display labels."""
    return StatusLabelList(
        items=[StatusLabel(value=s.value, label=label) for s, label in STATUS_LABELS.items()]
    )

@router.get("/{book_id}", response_model=ReaderState)
def get_book(book_id: str, view: ReaderView = Depends(get_reader_view)):
    """
    Get one book with a signed URL for its PDF.

    Args:
        book_id: The ID of the book

    Returns:
        ReaderState; ``pdf_url`` is null when the book has no readable PDF.
        A missing book answers 404 with a redirect to the library.
    """
    return render(view.load(book_id))

@router.post("/{book_id}/list", response_model=ListActionResult)
def add_to_list(
    book_id: str,
    payload: AddToListRequest,
    view: CatalogView = Depends(get_catalog_view),
):
    """Put a book on the current user's want-to-read or currently-reading list."""
    return render(view.add_to_list(book_id, payload.status), error_status=status.HTTP_400_BAD_REQUEST)

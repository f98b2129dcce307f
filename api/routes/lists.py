# api/routes/lists.py

from fastapi import APIRouter, Depends, status

from api.dependencies import get_reading_list_view
from api.responses import render
from core.models.view import ReadingListState
from core.views import ReadingListView

router = APIRouter(prefix="/lists", tags=["lists"])

@router.get("", response_model=ReadingListState)
def get_lists(view: ReadingListView = Depends(get_reading_list_view)):
    """Get the current user's lists, split into currently reading and want to read."""
    return render(view.load())

@router.delete("/{entry_id}", response_model=ReadingListState)
def remove_from_list(entry_id: str, view: ReadingListView = Depends(get_reading_list_view)):
    """
    Remove one book from the current user's lists.

    Answers with both lists as they are after the removal. Removing an entry
    that does not exist answers 404 and leaves the lists as they were.
    """
    return render(view.remove(entry_id), error_status=status.HTTP_404_NOT_FOUND)

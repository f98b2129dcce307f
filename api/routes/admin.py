# api/routes/admin.py

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_ingestion_view
from api.responses import render
from core.models.view import IngestionState
from core.views import IngestionView, SelectedFile

router = APIRouter(prefix="/admin", tags=["admin"])

async def _selected(upload: Optional[UploadFile]) -> Optional[SelectedFile]:
    if upload is None or not upload.filename:
        return None
    return SelectedFile(
        filename=upload.filename,
        data=await upload.read(),
        content_type=upload.content_type,
    )

@router.post("/books", response_model=IngestionState)
async def upload_book(
    title: str = Form(""),
    author: str = Form(""),
    description: str = Form(""),
    genre: str = Form(""),
    published_year: str = Form(""),
    page_count: str = Form(""),
    pdf: Optional[UploadFile] = File(None),
    cover: Optional[UploadFile] = File(None),
    view: IngestionView = Depends(get_ingestion_view),
):
    """
    Upload a book: the PDF, an optional cover image and its metadata.

    On failure the response echoes the submitted form so the client can keep
    it populated; on success the form comes back empty.
    """
    view.update_form(
        title=title,
        author=author,
        description=description,
        genre=genre,
        published_year=published_year,
        page_count=page_count,
    )
    view.select_pdf(await _selected(pdf))
    view.select_cover(await _selected(cover))
    state = await run_in_threadpool(view.submit)
    return render(state, error_status=status.HTTP_400_BAD_REQUEST)

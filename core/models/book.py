# core/models/book.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class BookSummary(BaseModel):
    """Fields shown on catalog and reading list cards."""
    id: str
    title: str
    author: str
    description: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = None
    cover_image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class BookDetail(BookSummary):
    page_count: Optional[int] = None
    pdf_file_path: Optional[str] = None
    created_at: Optional[datetime] = None

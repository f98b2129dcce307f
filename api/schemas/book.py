# api/schemas/book.py
from typing import List
from pydantic import BaseModel, ConfigDict

from core.sa.models import ReadingStatus

class AddToListRequest(BaseModel):
    status: ReadingStatus

    model_config = ConfigDict(use_enum_values=True)

class StatusLabel(BaseModel):
    value: str
    label: str

class StatusLabelList(BaseModel):
    items: List[StatusLabel]

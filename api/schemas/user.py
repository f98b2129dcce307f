# api/schemas/user.py
from typing import Optional
from pydantic import BaseModel, ConfigDict

class IdentityResponse(BaseModel):
    user_id: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class SignOutResponse(BaseModel):
    redirect: str

# api/routes/auth.py

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_session_context
from api.schemas.user import IdentityResponse, SignOutResponse
from core.auth import SessionContext
from core.exceptions import BookNestError

router = APIRouter(prefix="/auth", tags=["auth"])

def _not_authenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

@router.get("/me", response_model=IdentityResponse)
def read_current_identity(session: SessionContext = Depends(get_session_context)):
    """Get the signed-in identity."""
    if not session.is_authenticated:
        raise _not_authenticated()
    return session.identity

@router.post("/sign-out", response_model=SignOutResponse)
def sign_out(session: SessionContext = Depends(get_session_context)):
    """End the current session. The token stops working immediately."""
    if not session.is_authenticated:
        raise _not_authenticated()
    try:
        redirect = session.sign_out()
    except BookNestError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return SignOutResponse(redirect=redirect.path)

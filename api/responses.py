# api/responses.py
from fastapi import status
from fastapi.responses import JSONResponse

from core.models.view import ViewState
from core.navigation import SIGN_IN_PATH


def render(state: ViewState, error_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Turn a view state into a response.

    A sign-in redirect becomes 401, any other redirect 404 (the record the
    view was asked for is gone). ``error_status`` applies to states that
    carry an error notification but no redirect.
    """
    if state.redirect == SIGN_IN_PATH:
        code = status.HTTP_401_UNAUTHORIZED
    elif state.redirect:
        code = status.HTTP_404_NOT_FOUND
    elif state.has_errors:
        code = error_status
    else:
        code = status.HTTP_200_OK

    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(content=state.model_dump(mode="json"), status_code=code, headers=headers)

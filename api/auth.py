"""
Evidence Manager - Authentication Routes
Login with username/password and introspection of the current officer.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_login
from api.rbac import require_police_officer
from api.responses import to_response
from core.database import Officer
from core.mapping import officer_to_view_model
from core.responses import BaseResponseWithValue
from core.usecases import Login
from core.viewmodels import LoginViewModel, OfficerViewModel


router = APIRouter(prefix="/authorization", tags=["Authorization"])


@router.post("/login")
async def login(
    login_data: LoginViewModel,
    use_case: Login = Depends(get_login),
):
    """Login and get an access token.

    200 with the token on success, 401 with InvalidCredentials otherwise.
    """
    response = await use_case.run(login_data)
    return to_response(response)


@router.get("/me", response_model=BaseResponseWithValue[OfficerViewModel])
async def get_me(current_officer: Officer = Depends(require_police_officer)):
    """Get current officer info."""
    return BaseResponseWithValue[OfficerViewModel].ok(
        value=officer_to_view_model(current_officer)
    )

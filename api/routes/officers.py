"""Evidence Manager - Officer Routes"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_create_officer
from api.rbac import require_administrator
from api.responses import to_response
from core.database import Officer
from core.usecases import CreateOfficer
from core.viewmodels import CreateOfficerViewModel


router = APIRouter(prefix="/officers", tags=["Officers"])


@router.post("")
async def create_officer(
    officer_data: CreateOfficerViewModel,
    use_case: CreateOfficer = Depends(get_create_officer),
    current_officer: Officer = Depends(require_administrator),
):
    """Register a new officer. Administrators only."""
    response = await use_case.run(officer_data)
    return to_response(response, success_status=status.HTTP_201_CREATED)

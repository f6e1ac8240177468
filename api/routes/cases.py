"""
Evidence Manager - Case Routes
Each handler runs one use case and maps its envelope to a status code.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies import (
    get_case_by_id,
    get_cases_by_officer_id,
    get_create_case,
    get_delete_case,
    get_update_case,
)
from api.rbac import require_police_officer
from api.responses import to_response
from core.database import Officer
from core.usecases import (
    CreateCase,
    DeleteCase,
    GetCaseById,
    GetCasesByOfficerId,
    UpdateCase,
)
from core.viewmodels import CreateCaseViewModel, UpdateCaseViewModel

router = APIRouter(prefix="/cases", tags=["Cases"])


@router.get("/officer/{officer_id}")
async def get_cases_by_officer(
    officer_id: UUID,
    use_case: GetCasesByOfficerId = Depends(get_cases_by_officer_id),
    current_officer: Officer = Depends(require_police_officer),
):
    """Get all cases of a police officer."""
    response = await use_case.run(officer_id)
    return to_response(response)


@router.get("/{case_id}")
async def get_case(
    case_id: UUID,
    use_case: GetCaseById = Depends(get_case_by_id),
    current_officer: Officer = Depends(require_police_officer),
):
    """Get a case by ID. 404 when it does not exist."""
    response = await use_case.run(case_id)
    return to_response(response)


@router.patch("/{case_id}")
async def update_case(
    case_id: UUID,
    case_data: UpdateCaseViewModel,
    use_case: UpdateCase = Depends(get_update_case),
    current_officer: Officer = Depends(require_police_officer),
):
    """Update name/description of a case.

    204 on success, 400 for invalid properties, 403 when the case belongs
    to another officer, 404 when it does not exist.
    """
    response = await use_case.run(case_id, current_officer.id, case_data)
    return to_response(response, success_status=status.HTTP_204_NO_CONTENT)


@router.delete("/{case_id}")
async def delete_case(
    case_id: UUID,
    use_case: DeleteCase = Depends(get_delete_case),
    current_officer: Officer = Depends(require_police_officer),
):
    """Delete a case and its evidences.

    204 on success, 404 when the case does not exist and 403 for every
    other failure.
    """
    response = await use_case.run(case_id, current_officer.id)
    return to_response(
        response,
        success_status=status.HTTP_204_NO_CONTENT,
        fallback_status=status.HTTP_403_FORBIDDEN,
    )


@router.post("")
async def create_case(
    case_data: CreateCaseViewModel,
    use_case: CreateCase = Depends(get_create_case),
    current_officer: Officer = Depends(require_police_officer),
):
    """Create a case owned by the caller. 201 on success, 400 when invalid."""
    case_data.officer_id = current_officer.id
    response = await use_case.run(case_data)
    return to_response(response, success_status=status.HTTP_201_CREATED)

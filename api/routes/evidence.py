"""Evidence Manager - Evidence Routes
Image upload and evidence lookups, secured with the officer policy.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from api.dependencies import get_create_evidence, get_evidence_by_id, get_evidences_by_case_id
from api.rbac import require_police_officer
from api.responses import to_response
from core.database import Officer
from core.usecases import CreateEvidence, GetEvidenceById, GetEvidencesByCaseId
from core.viewmodels import CreateEvidenceViewModel


router = APIRouter(prefix="/evidences", tags=["Evidences"])


@router.post("")
async def create_evidence(
    case_id: str | None = Form(None),
    name: str | None = Form(None),
    description: str | None = Form(None),
    image: UploadFile | None = File(None),
    use_case: CreateEvidence = Depends(get_create_evidence),
    current_officer: Officer = Depends(require_police_officer),
):
    """Upload an evidence image and attach it to a case.

    The image must be a supported image format. 201 with the new
    evidence id, 400 when any form field is invalid.
    """
    view_model = CreateEvidenceViewModel(name=name, description=description, case_id=case_id)
    if image is not None:
        view_model.image_file_name = image.filename or ""
        view_model.image_content_type = image.content_type
        view_model.image_content = await image.read()

    response = await use_case.run(view_model)
    return to_response(response, success_status=status.HTTP_201_CREATED)


@router.get("/case/{case_id}")
async def list_case_evidences(
    case_id: UUID,
    use_case: GetEvidencesByCaseId = Depends(get_evidences_by_case_id),
    current_officer: Officer = Depends(require_police_officer),
):
    """List the evidences of a case."""
    response = await use_case.run(case_id)
    return to_response(response)


@router.get("/{evidence_id}")
async def get_evidence(
    evidence_id: UUID,
    use_case: GetEvidenceById = Depends(get_evidence_by_id),
    current_officer: Officer = Depends(require_police_officer),
):
    """Get evidence by ID. 404 when it does not exist."""
    response = await use_case.run(evidence_id)
    return to_response(response)

"""Evidence Manager - Entity/View Model Mapping
One explicit function per pair. Fields a client must never control are
listed next to each function and left untouched.
"""

from datetime import datetime
from uuid import UUID

from core.database.models import Case, Evidence, Officer
from core.viewmodels import (
    CaseViewModel,
    CreateCaseViewModel,
    CreateEvidenceViewModel,
    CreateOfficerViewModel,
    EvidenceViewModel,
    OfficerViewModel,
    UpdateCaseViewModel,
)


def case_to_view_model(case: Case) -> CaseViewModel:
    return CaseViewModel.model_validate(case)


def create_case_view_model_to_entity(
    view_model: CreateCaseViewModel, officer_id: UUID, now: datetime
) -> Case:
    """Ignored from the client: id, created_at, updated_at, officer_id."""
    return Case(
        name=view_model.name.strip(),
        description=view_model.description.strip(),
        officer_id=officer_id,
        created_at=now,
        updated_at=now,
    )


def apply_case_update(case: Case, view_model: UpdateCaseViewModel, now: datetime) -> Case:
    """Ignored from the client: id, officer_id, created_at, updated_at."""
    if view_model.name is not None:
        case.name = view_model.name.strip()
    if view_model.description is not None:
        case.description = view_model.description.strip()
    case.updated_at = now
    return case


def evidence_file_name(evidence: Evidence) -> str:
    return f"{evidence.image_id}{evidence.image_extension}"


def evidence_to_view_model(evidence: Evidence) -> EvidenceViewModel:
    return EvidenceViewModel(
        id=evidence.id,
        name=evidence.name,
        description=evidence.description,
        case_id=evidence.case_id,
        image_id=evidence.image_id,
        image_file_name=evidence_file_name(evidence),
        created_at=evidence.created_at,
        updated_at=evidence.updated_at,
    )


def create_evidence_view_model_to_entity(
    view_model: CreateEvidenceViewModel,
    case_id: UUID,
    image_id: UUID,
    image_extension: str,
    now: datetime,
) -> Evidence:
    """Ignored from the client: id, image_id, created_at, updated_at."""
    return Evidence(
        name=view_model.name.strip(),
        description=view_model.description.strip(),
        case_id=case_id,
        image_id=image_id,
        image_extension=image_extension,
        created_at=now,
        updated_at=now,
    )


def officer_to_view_model(officer: Officer) -> OfficerViewModel:
    return OfficerViewModel.model_validate(officer)


def create_officer_view_model_to_entity(
    view_model: CreateOfficerViewModel, password_hash: str, now: datetime
) -> Officer:
    """The plain password never reaches the entity."""
    return Officer(
        username=view_model.username.strip(),
        email=view_model.email.strip(),
        password_hash=password_hash,
        officer_type=view_model.officer_type,
        is_active=True,
        created_at=now,
    )

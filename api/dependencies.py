"""Evidence Manager - Composition Root
Explicit construction of repositories and use cases.

Lifetimes:
    per request - AsyncSession (unit of work), repositories, use cases
    singleton   - settings, evidence file store, image validator
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import (
    CaseRepository,
    EvidenceRepository,
    Officer,
    OfficerRepository,
    UnitOfWork,
    get_case_repository,
    get_evidence_repository,
    get_officer_repository,
)
from core.database.session import get_db
from core.security import decode_access_token, image_validator
from core.storage import EvidenceFileStore, get_file_store
from core.usecases import (
    CreateCase,
    CreateEvidence,
    CreateOfficer,
    DeleteCase,
    GetCaseById,
    GetCasesByOfficerId,
    GetEvidenceById,
    GetEvidencesByCaseId,
    Login,
    UpdateCase,
)


# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/authorization/login", auto_error=False)


# Per-request collaborators
def get_unit_of_work(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


def get_cases(db: AsyncSession = Depends(get_db)) -> CaseRepository:
    return get_case_repository(db)


def get_evidences(db: AsyncSession = Depends(get_db)) -> EvidenceRepository:
    return get_evidence_repository(db)


def get_officers(db: AsyncSession = Depends(get_db)) -> OfficerRepository:
    return get_officer_repository(db)


async def get_current_officer(
    token: Optional[str] = Depends(oauth2_scheme),
    officers: OfficerRepository = Depends(get_officers),
) -> Optional[Officer]:
    """Resolve the bearer token to an officer, or None when anonymous."""
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None:
        return None

    try:
        officer_id = UUID(str(payload.get("sub")))
    except ValueError:
        return None

    return await officers.get_by_id(officer_id)


# Singletons
def get_evidence_file_store() -> EvidenceFileStore:
    return get_file_store()


# Use cases
def get_login(officers: OfficerRepository = Depends(get_officers)) -> Login:
    return Login(officers)


def get_create_officer(
    officers: OfficerRepository = Depends(get_officers),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
) -> CreateOfficer:
    return CreateOfficer(officers, unit_of_work)


def get_create_case(
    cases: CaseRepository = Depends(get_cases),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
) -> CreateCase:
    return CreateCase(cases, unit_of_work)


def get_update_case(
    cases: CaseRepository = Depends(get_cases),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
) -> UpdateCase:
    return UpdateCase(cases, unit_of_work)


def get_delete_case(
    cases: CaseRepository = Depends(get_cases),
    evidences: EvidenceRepository = Depends(get_evidences),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
) -> DeleteCase:
    return DeleteCase(cases, evidences, unit_of_work)


def get_case_by_id(cases: CaseRepository = Depends(get_cases)) -> GetCaseById:
    return GetCaseById(cases)


def get_cases_by_officer_id(cases: CaseRepository = Depends(get_cases)) -> GetCasesByOfficerId:
    return GetCasesByOfficerId(cases)


def get_create_evidence(
    cases: CaseRepository = Depends(get_cases),
    evidences: EvidenceRepository = Depends(get_evidences),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
    file_store: EvidenceFileStore = Depends(get_evidence_file_store),
) -> CreateEvidence:
    return CreateEvidence(cases, evidences, unit_of_work, file_store, image_validator)


def get_evidence_by_id(evidences: EvidenceRepository = Depends(get_evidences)) -> GetEvidenceById:
    return GetEvidenceById(evidences)


def get_evidences_by_case_id(
    evidences: EvidenceRepository = Depends(get_evidences),
) -> GetEvidencesByCaseId:
    return GetEvidencesByCaseId(evidences)

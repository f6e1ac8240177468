"""Evidence Manager - Database Module"""

from .models import (
    Base,
    Case,
    Evidence,
    Officer,
    OfficerType,
)
from .repository import (
    CaseRepository,
    EvidenceRepository,
    OfficerRepository,
    get_case_repository,
    get_evidence_repository,
    get_officer_repository,
)
from .session import (
    UnitOfWork,
    close_db,
    get_async_engine,
    get_db,
    init_db_async,
)


__all__ = [
    # Models
    "Base",
    "Case",
    "Evidence",
    "Officer",
    "OfficerType",
    # Session
    "UnitOfWork",
    "close_db",
    "get_async_engine",
    "get_db",
    "init_db_async",
    # Repositories
    "CaseRepository",
    "EvidenceRepository",
    "OfficerRepository",
    "get_case_repository",
    "get_evidence_repository",
    "get_officer_repository",
]

"""Evidence Manager - Use Cases
One object per application action, each exposing ``async run(...)``.
"""

from .cases import (
    CreateCase,
    DeleteCase,
    GetCaseById,
    GetCasesByOfficerId,
    UpdateCase,
)
from .evidence import (
    CreateEvidence,
    GetEvidenceById,
    GetEvidencesByCaseId,
)
from .officers import CreateOfficer, Login


__all__ = [
    "CreateCase",
    "CreateEvidence",
    "CreateOfficer",
    "DeleteCase",
    "GetCaseById",
    "GetCasesByOfficerId",
    "GetEvidenceById",
    "GetEvidencesByCaseId",
    "Login",
    "UpdateCase",
]

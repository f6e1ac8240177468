"""Evidence Manager - View Models
Wire-level shapes exchanged with clients. Request models are lenient;
business rules are enforced by core.validation inside the use cases.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.database.models import OfficerType


class CaseViewModel(BaseModel):
    """A case as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    officer_id: UUID
    created_at: datetime
    updated_at: datetime


class CreateCaseViewModel(BaseModel):
    """Body of POST /cases. officer_id is filled from the caller's token.

    Fields are left untyped so wrong-typed values reach CaseRules and come
    back as InvalidCase.
    """

    name: Any = None
    description: Any = None
    officer_id: Any = None


class UpdateCaseViewModel(BaseModel):
    """Body of PATCH /cases/{id}.

    id, officer_id and the timestamps are accepted for compatibility with
    clients that send a full case back, but never applied.
    """

    id: Any = None
    name: Any = None
    description: Any = None
    officer_id: Any = None
    created_at: Any = None
    updated_at: Any = None


class EvidenceViewModel(BaseModel):
    """An evidence as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    case_id: UUID
    image_id: UUID
    image_file_name: str
    created_at: datetime
    updated_at: datetime


class CreateEvidenceViewModel(BaseModel):
    """Multipart form of POST /evidences, already read into memory."""

    name: str | None = None
    description: str | None = None
    case_id: UUID | str | None = None
    image_file_name: str = ""
    image_content_type: str | None = None
    image_content: bytes = b""


class OfficerViewModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    officer_type: OfficerType
    created_at: datetime


class CreateOfficerViewModel(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    officer_type: OfficerType = OfficerType.INVESTIGATOR


class LoginViewModel(BaseModel):
    username: str = ""
    password: str = ""


class AccessTokenModel(BaseModel):
    """Issued bearer token. Unset fields mean no token was issued."""

    token_type: str = ""
    access_token: str = ""
    expires: datetime = datetime.min
    user_id: str = ""

    def is_valid(self) -> bool:
        return (
            bool(self.token_type.strip())
            and bool(self.access_token.strip())
            and self.expires != datetime.min
            and bool(self.user_id.strip())
        )

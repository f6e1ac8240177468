"""Evidence Manager - Validation Rules
Declarative pydantic rule sets checked by the use cases. Each rule model
only validates; callers get back a list of "field: message" strings.
"""

from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator


class NonBlankText(BaseModel):
    """Shared stripping behavior for required text fields."""

    @field_validator("*", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class CaseRules(NonBlankText):
    name: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1, max_length=10000)


class CasePatchRules(NonBlankText):
    name: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = Field(None, min_length=1, max_length=10000)


class EvidenceRules(NonBlankText):
    name: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1, max_length=10000)


class OfficerRules(NonBlankText):
    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v


def validate(rules: type[BaseModel], data: dict) -> list[str]:
    """Check data against a rule model, returning field-level errors."""
    try:
        rules.model_validate(data)
    except ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
    return []


_uuid_adapter = TypeAdapter(UUID)


def parse_uuid(value) -> UUID | None:
    """Parse a client-supplied identifier; None when missing or malformed."""
    try:
        return _uuid_adapter.validate_python(value)
    except ValidationError:
        return None

"""Evidence Manager - Response Envelopes
Uniform success/message/value wrapper returned by every use case.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field


T = TypeVar("T")


class ResponseMessage(str, Enum):
    """Closed set of outcome codes used to select HTTP status and display text."""

    GENERIC_ERROR = "GenericError"
    SUCCESS = "Success"
    CASE_DONT_EXISTS = "CaseDontExists"
    INVALID_CASE = "InvalidCase"
    INVALID_CREDENTIALS = "InvalidCredentials"
    FORBIDDEN = "Forbidden"
    EVIDENCE_DONT_EXISTS = "EvidenceDontExists"
    USER_IS_NOT_AUTHENTICATED = "UserIsNotAuthenticated"
    INVALID_EVIDENCE = "InvalidEvidence"

    @property
    def description(self) -> str:
        return MESSAGE_DESCRIPTIONS[self]


MESSAGE_DESCRIPTIONS: dict[ResponseMessage, str] = {
    ResponseMessage.GENERIC_ERROR: "An error ocurred, try again later",
    ResponseMessage.SUCCESS: "Success",
    ResponseMessage.CASE_DONT_EXISTS: "Case does't exists",
    ResponseMessage.INVALID_CASE: "Invalid case",
    ResponseMessage.INVALID_CREDENTIALS: "Invalid credentials",
    ResponseMessage.FORBIDDEN: "Action is not permited",
    ResponseMessage.EVIDENCE_DONT_EXISTS: "Evidence does't exists",
    ResponseMessage.USER_IS_NOT_AUTHENTICATED: "User is not authenticated",
    ResponseMessage.INVALID_EVIDENCE: "Invalid evidence",
}


class BaseResponse(BaseModel):
    """Envelope without a payload."""

    success: bool
    message: ResponseMessage
    errors: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def description(self) -> str:
        return self.message.description

    def message_equals(self, message: ResponseMessage) -> bool:
        return self.message == message

    @classmethod
    def ok(cls, **kwargs):
        return cls(success=True, message=ResponseMessage.SUCCESS, **kwargs)

    @classmethod
    def fail(cls, message: ResponseMessage, errors: list[str] | None = None):
        return cls(success=False, message=message, errors=errors or [])


class BaseResponseWithValue(BaseResponse, Generic[T]):
    """Envelope carrying a payload on success."""

    value: T | None = None

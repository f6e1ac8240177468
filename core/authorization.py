"""Evidence Manager - Authorization
Policy evaluation and case ownership checks, free of any web framework.
"""

from enum import Enum
from uuid import UUID

from core.database.models import Case, Officer, OfficerType
from core.responses import ResponseMessage


class AuthorizationResult(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    UNAUTHENTICATED = "unauthenticated"


class Policy(str, Enum):
    """Named capabilities required by routes."""

    IS_POLICE_OFFICER = "IsPoliceOfficer"
    IS_ADMINISTRATOR = "IsAdministrator"


# Policy -> officer types holding it
POLICY_OFFICER_TYPES: dict[Policy, set[OfficerType]] = {
    Policy.IS_POLICE_OFFICER: {OfficerType.INVESTIGATOR, OfficerType.ADMINISTRATOR},
    Policy.IS_ADMINISTRATOR: {OfficerType.ADMINISTRATOR},
}


def authorize(officer: Officer | None, policy: Policy) -> AuthorizationResult:
    """Evaluate a policy for the (possibly anonymous) caller."""
    if officer is None:
        return AuthorizationResult.UNAUTHENTICATED

    if not officer.is_active:
        return AuthorizationResult.DENIED

    if officer.officer_type not in POLICY_OFFICER_TYPES.get(policy, set()):
        return AuthorizationResult.DENIED

    return AuthorizationResult.ALLOWED


def check_case_owner(case: Case | None, officer_id: UUID) -> ResponseMessage:
    """Decide whether officer_id may mutate case.

    Returns CASE_DONT_EXISTS when the case is missing, FORBIDDEN when it
    belongs to another officer and SUCCESS otherwise.
    """
    if case is None:
        return ResponseMessage.CASE_DONT_EXISTS

    if case.officer_id != officer_id:
        return ResponseMessage.FORBIDDEN

    return ResponseMessage.SUCCESS

"""Evidence Manager - Authorization and Envelope Unit Tests"""

from datetime import datetime
from uuid import uuid4

import pytest

from api.responses import status_for
from core.authorization import AuthorizationResult, Policy, authorize, check_case_owner
from core.database import OfficerType
from core.responses import BaseResponse, BaseResponseWithValue, ResponseMessage
from core.viewmodels import AccessTokenModel
from tests.factories import CaseFactory, OfficerFactory


class TestAuthorize:
    """Test policy evaluation."""

    def test_anonymous_is_unauthenticated(self):
        assert authorize(None, Policy.IS_POLICE_OFFICER) == AuthorizationResult.UNAUTHENTICATED

    def test_investigator_is_police_officer(self):
        officer = OfficerFactory.create()
        assert authorize(officer, Policy.IS_POLICE_OFFICER) == AuthorizationResult.ALLOWED

    def test_investigator_is_not_administrator(self):
        officer = OfficerFactory.create()
        assert authorize(officer, Policy.IS_ADMINISTRATOR) == AuthorizationResult.DENIED

    def test_administrator_holds_both_policies(self):
        officer = OfficerFactory.create_administrator()
        assert authorize(officer, Policy.IS_POLICE_OFFICER) == AuthorizationResult.ALLOWED
        assert authorize(officer, Policy.IS_ADMINISTRATOR) == AuthorizationResult.ALLOWED

    def test_inactive_officer_is_denied(self):
        officer = OfficerFactory.create(officer_type=OfficerType.ADMINISTRATOR, is_active=False)
        assert authorize(officer, Policy.IS_POLICE_OFFICER) == AuthorizationResult.DENIED


class TestCheckCaseOwner:
    def test_missing_case(self):
        assert check_case_owner(None, uuid4()) == ResponseMessage.CASE_DONT_EXISTS

    def test_other_owner(self):
        case = CaseFactory.create(officer_id=uuid4())
        assert check_case_owner(case, uuid4()) == ResponseMessage.FORBIDDEN

    def test_owner(self):
        owner_id = uuid4()
        case = CaseFactory.create(officer_id=owner_id)
        assert check_case_owner(case, owner_id) == ResponseMessage.SUCCESS


class TestStatusMapping:
    """Test the envelope to status code table."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            (ResponseMessage.CASE_DONT_EXISTS, 404),
            (ResponseMessage.EVIDENCE_DONT_EXISTS, 404),
            (ResponseMessage.FORBIDDEN, 403),
            (ResponseMessage.INVALID_CREDENTIALS, 401),
            (ResponseMessage.INVALID_CASE, 400),
            (ResponseMessage.INVALID_EVIDENCE, 400),
            (ResponseMessage.GENERIC_ERROR, 400),
        ],
    )
    def test_failures(self, message, expected):
        assert status_for(BaseResponse.fail(message)) == expected

    def test_success_uses_verb_status(self):
        assert status_for(BaseResponse.ok()) == 200
        assert status_for(BaseResponse.ok(), success_status=201) == 201
        assert status_for(BaseResponse.ok(), success_status=204) == 204

    def test_fallback_status(self):
        response = BaseResponse.fail(ResponseMessage.GENERIC_ERROR)
        assert status_for(response, fallback_status=403) == 403

    def test_envelope_carries_description(self):
        response = BaseResponseWithValue[int].fail(ResponseMessage.CASE_DONT_EXISTS)
        data = response.model_dump(mode="json")
        assert data == {
            "success": False,
            "message": "CaseDontExists",
            "errors": [],
            "value": None,
            "description": "Case does't exists",
        }


class TestAccessTokenModel:
    def _token(self, **overrides):
        fields = {
            "token_type": "Bearer",
            "access_token": "abc.def.ghi",
            "expires": datetime(2030, 1, 1),
            "user_id": str(uuid4()),
        }
        fields.update(overrides)
        return AccessTokenModel(**fields)

    def test_complete_token_is_valid(self):
        assert self._token().is_valid()

    def test_default_token_is_invalid(self):
        assert not AccessTokenModel().is_valid()

    @pytest.mark.parametrize("field", ["token_type", "access_token", "user_id"])
    def test_blank_field_is_invalid(self, field):
        assert not self._token(**{field: "  "}).is_valid()

    def test_unset_expiry_is_invalid(self):
        assert not self._token(expires=datetime.min).is_valid()

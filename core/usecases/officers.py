"""Evidence Manager - Officer and Login Use Cases"""

from datetime import datetime
from uuid import UUID

from core.database.repository import OfficerRepository
from core.database.session import UnitOfWork
from core.logging import get_logger
from core.mapping import create_officer_view_model_to_entity
from core.responses import BaseResponseWithValue, ResponseMessage
from core.security import TOKEN_TYPE, create_access_token, get_password_hash, verify_password
from core.validation import OfficerRules, validate
from core.viewmodels import AccessTokenModel, CreateOfficerViewModel, LoginViewModel


class CreateOfficer:
    """Register a new officer with a hashed password."""

    def __init__(self, officers: OfficerRepository, unit_of_work: UnitOfWork):
        self.officers = officers
        self.unit_of_work = unit_of_work

    async def run(self, view_model: CreateOfficerViewModel) -> BaseResponseWithValue[UUID]:
        errors = validate(
            OfficerRules, view_model.model_dump(include={"username", "email", "password"})
        )
        if errors:
            return BaseResponseWithValue[UUID].fail(ResponseMessage.GENERIC_ERROR, errors)

        if await self.officers.get_by_username(view_model.username.strip()) is not None:
            return BaseResponseWithValue[UUID].fail(
                ResponseMessage.GENERIC_ERROR, ["username: Username already registered"]
            )

        officer = create_officer_view_model_to_entity(
            view_model, get_password_hash(view_model.password), datetime.utcnow()
        )
        await self.officers.add(officer)
        await self.unit_of_work.commit()

        get_logger().audit(
            "create", "officer", str(officer.id), officer_type=officer.officer_type.value
        )
        return BaseResponseWithValue[UUID].ok(value=officer.id)


class Login:
    """Exchange username/password for a bearer token."""

    def __init__(self, officers: OfficerRepository):
        self.officers = officers

    async def run(self, view_model: LoginViewModel) -> BaseResponseWithValue[AccessTokenModel]:
        officer = await self.officers.get_by_username(view_model.username.strip())

        if (
            officer is None
            or not officer.is_active
            or not verify_password(view_model.password, officer.password_hash)
        ):
            get_logger().warning("Login failed", username=view_model.username)
            return BaseResponseWithValue[AccessTokenModel].fail(
                ResponseMessage.INVALID_CREDENTIALS
            )

        token, expires = create_access_token(
            data={"sub": str(officer.id), "officer_type": officer.officer_type.value}
        )
        access_token = AccessTokenModel(
            token_type=TOKEN_TYPE,
            access_token=token,
            expires=expires,
            user_id=str(officer.id),
        )

        get_logger().info("Officer logged in", officer_id=str(officer.id))
        return BaseResponseWithValue[AccessTokenModel].ok(value=access_token)

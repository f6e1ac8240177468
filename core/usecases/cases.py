"""Evidence Manager - Case Use Cases
One object per action. Expected outcomes (missing case, wrong owner,
invalid input) come back as envelopes; only unexpected failures raise.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from core.authorization import check_case_owner
from core.database.repository import CaseRepository, EvidenceRepository
from core.database.session import UnitOfWork
from core.logging import get_logger
from core.mapping import apply_case_update, case_to_view_model, create_case_view_model_to_entity
from core.responses import BaseResponse, BaseResponseWithValue, ResponseMessage
from core.validation import CasePatchRules, CaseRules, validate
from core.viewmodels import CaseViewModel, CreateCaseViewModel, UpdateCaseViewModel


class CreateCase:
    """Open a new case owned by the requesting officer."""

    def __init__(self, cases: CaseRepository, unit_of_work: UnitOfWork):
        self.cases = cases
        self.unit_of_work = unit_of_work

    async def run(self, view_model: CreateCaseViewModel) -> BaseResponseWithValue[UUID]:
        errors = validate(CaseRules, view_model.model_dump(include={"name", "description"}))
        if view_model.officer_id is None:
            errors.append("officer_id: Field required")
        if errors:
            return BaseResponseWithValue[UUID].fail(ResponseMessage.INVALID_CASE, errors)

        case = create_case_view_model_to_entity(
            view_model, view_model.officer_id, datetime.utcnow()
        )
        await self.cases.add(case)
        await self.unit_of_work.commit()

        get_logger().audit("create", "case", str(case.id), officer_id=str(case.officer_id))
        return BaseResponseWithValue[UUID].ok(value=case.id)


class UpdateCase:
    """Patch name/description of a case owned by the requesting officer."""

    def __init__(self, cases: CaseRepository, unit_of_work: UnitOfWork):
        self.cases = cases
        self.unit_of_work = unit_of_work

    async def run(
        self, case_id: UUID, officer_id: UUID, view_model: UpdateCaseViewModel
    ) -> BaseResponse:
        case = await self.cases.get_by_id(case_id)

        outcome = check_case_owner(case, officer_id)
        if outcome != ResponseMessage.SUCCESS:
            return BaseResponse.fail(outcome)

        changes = view_model.model_dump(include={"name", "description"}, exclude_none=True)
        if not changes:
            return BaseResponse.fail(
                ResponseMessage.INVALID_CASE, ["At least one of name or description is required"]
            )

        errors = validate(CasePatchRules, changes)
        if errors:
            return BaseResponse.fail(ResponseMessage.INVALID_CASE, errors)

        apply_case_update(case, view_model, datetime.utcnow())
        await self.cases.update(case)
        await self.unit_of_work.commit()

        get_logger().audit("update", "case", str(case_id), officer_id=str(officer_id))
        return BaseResponse.ok()


class DeleteCase:
    """Delete a case and all of its evidences in one transaction."""

    def __init__(
        self,
        cases: CaseRepository,
        evidences: EvidenceRepository,
        unit_of_work: UnitOfWork,
    ):
        self.cases = cases
        self.evidences = evidences
        self.unit_of_work = unit_of_work

    async def run(self, case_id: UUID, officer_id: UUID) -> BaseResponse:
        case = await self.cases.get_by_id(case_id)

        outcome = check_case_owner(case, officer_id)
        if outcome != ResponseMessage.SUCCESS:
            return BaseResponse.fail(outcome)

        try:
            removed = await self.evidences.delete_by_case(case_id)
            await self.cases.delete(case)
            await self.unit_of_work.commit()
        except SQLAlchemyError as e:
            await self.unit_of_work.rollback()
            get_logger().error(
                f"Failed to delete case: {e}", case_id=str(case_id), officer_id=str(officer_id)
            )
            return BaseResponse.fail(ResponseMessage.GENERIC_ERROR)

        get_logger().audit(
            "delete", "case", str(case_id), officer_id=str(officer_id), evidences_removed=removed
        )
        return BaseResponse.ok()


class GetCaseById:
    """Fetch one case. Any authenticated officer may read any case."""

    def __init__(self, cases: CaseRepository):
        self.cases = cases

    async def run(self, case_id: UUID) -> BaseResponseWithValue[CaseViewModel]:
        case = await self.cases.get_by_id(case_id)

        if case is None:
            return BaseResponseWithValue[CaseViewModel].fail(ResponseMessage.CASE_DONT_EXISTS)

        return BaseResponseWithValue[CaseViewModel].ok(value=case_to_view_model(case))


class GetCasesByOfficerId:
    def __init__(self, cases: CaseRepository):
        self.cases = cases

    async def run(self, officer_id: UUID) -> BaseResponseWithValue[list[CaseViewModel]]:
        cases = await self.cases.list_by_officer(officer_id)
        return BaseResponseWithValue[list[CaseViewModel]].ok(
            value=[case_to_view_model(case) for case in cases]
        )

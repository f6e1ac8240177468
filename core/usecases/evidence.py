"""Evidence Manager - Evidence Use Cases"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError

from core.database.repository import CaseRepository, EvidenceRepository
from core.database.session import UnitOfWork
from core.logging import get_logger
from core.mapping import create_evidence_view_model_to_entity, evidence_to_view_model
from core.responses import BaseResponseWithValue, ResponseMessage
from core.security import ImageValidator, image_extension
from core.storage import EvidenceFileStore
from core.validation import EvidenceRules, parse_uuid, validate
from core.viewmodels import CreateEvidenceViewModel, EvidenceViewModel


class CreateEvidence:
    """Store an evidence image and record the evidence against its case.

    The image is written before the record that references it. A failed
    write aborts the whole operation; a failed insert removes the written
    image again before the error propagates.
    """

    def __init__(
        self,
        cases: CaseRepository,
        evidences: EvidenceRepository,
        unit_of_work: UnitOfWork,
        file_store: EvidenceFileStore,
        image_validator: ImageValidator,
    ):
        self.cases = cases
        self.evidences = evidences
        self.unit_of_work = unit_of_work
        self.file_store = file_store
        self.image_validator = image_validator

    async def run(self, view_model: CreateEvidenceViewModel) -> BaseResponseWithValue[UUID]:
        errors = validate(EvidenceRules, view_model.model_dump(include={"name", "description"}))

        image_error = self.image_validator.validate(
            filename=view_model.image_file_name,
            content_type=view_model.image_content_type,
            content=view_model.image_content,
        )
        if image_error:
            errors.append(f"image: {image_error}")

        case_id = parse_uuid(view_model.case_id)
        if case_id is None:
            errors.append("case_id: A valid case id is required")
        elif await self.cases.get_by_id(case_id) is None:
            errors.append("case_id: Case does not exist")

        if errors:
            return BaseResponseWithValue[UUID].fail(ResponseMessage.INVALID_EVIDENCE, errors)

        image_id = uuid4()
        extension = image_extension(view_model.image_file_name)

        try:
            self.file_store.save(image_id, extension, view_model.image_content)
        except OSError as e:
            get_logger().error(
                f"Failed to store evidence image: {e}",
                case_id=str(case_id),
                image_id=str(image_id),
            )
            return BaseResponseWithValue[UUID].fail(ResponseMessage.GENERIC_ERROR)

        evidence = create_evidence_view_model_to_entity(
            view_model, case_id, image_id, extension, datetime.utcnow()
        )

        try:
            await self.evidences.add(evidence)
            await self.unit_of_work.commit()
        except SQLAlchemyError:
            await self.unit_of_work.rollback()
            self.file_store.delete(image_id, extension)
            raise

        get_logger().audit(
            "create", "evidence", str(evidence.id),
            case_id=str(case_id), image_id=str(image_id),
        )
        return BaseResponseWithValue[UUID].ok(value=evidence.id)


class GetEvidenceById:
    def __init__(self, evidences: EvidenceRepository):
        self.evidences = evidences

    async def run(self, evidence_id: UUID) -> BaseResponseWithValue[EvidenceViewModel]:
        evidence = await self.evidences.get_by_id(evidence_id)

        if evidence is None:
            return BaseResponseWithValue[EvidenceViewModel].fail(
                ResponseMessage.EVIDENCE_DONT_EXISTS
            )

        return BaseResponseWithValue[EvidenceViewModel].ok(value=evidence_to_view_model(evidence))


class GetEvidencesByCaseId:
    """List evidences of a case; an unknown case simply has none."""

    def __init__(self, evidences: EvidenceRepository):
        self.evidences = evidences

    async def run(self, case_id: UUID) -> BaseResponseWithValue[list[EvidenceViewModel]]:
        evidences = await self.evidences.list_by_case(case_id)
        return BaseResponseWithValue[list[EvidenceViewModel]].ok(
            value=[evidence_to_view_model(e) for e in evidences]
        )

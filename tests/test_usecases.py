"""Evidence Manager - Use Case Tests
Use cases run directly against the repositories, without HTTP.
"""

from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.database import (
    Case,
    CaseRepository,
    Evidence,
    EvidenceRepository,
    UnitOfWork,
)
from core.responses import ResponseMessage
from core.security import ImageValidator
from core.usecases import (
    CreateCase,
    CreateEvidence,
    DeleteCase,
    GetCaseById,
    GetCasesByOfficerId,
    UpdateCase,
)
from core.viewmodels import CreateCaseViewModel, CreateEvidenceViewModel, UpdateCaseViewModel
from tests.factories import CaseFactory, EvidenceFactory


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class ExplodingCaseRepository(CaseRepository):
    """Fails after the evidences of the case have already been removed."""

    async def delete(self, case):
        raise SQLAlchemyError("simulated failure")


class ExplodingEvidenceRepository(EvidenceRepository):
    async def add(self, entity):
        raise SQLAlchemyError("simulated failure")


@pytest.mark.asyncio
class TestCaseUseCases:
    """Test the case use cases."""

    async def test_create_sets_equal_timestamps(self, db_session, officer):
        use_case = CreateCase(CaseRepository(db_session), UnitOfWork(db_session))

        response = await use_case.run(
            CreateCaseViewModel(name="Burglary 2024-01", description="Break-in on Main St", officer_id=officer.id)
        )

        assert response.success
        case = await db_session.get(Case, response.value)
        assert case.created_at == case.updated_at
        assert case.officer_id == officer.id

    async def test_create_requires_officer(self, db_session):
        use_case = CreateCase(CaseRepository(db_session), UnitOfWork(db_session))

        response = await use_case.run(CreateCaseViewModel(name="Case", description="Description"))

        assert response.message_equals(ResponseMessage.INVALID_CASE)
        assert response.value is None

    async def test_create_strips_text(self, db_session, officer):
        use_case = CreateCase(CaseRepository(db_session), UnitOfWork(db_session))

        response = await use_case.run(
            CreateCaseViewModel(name="  Arson  ", description=" Warehouse ", officer_id=officer.id)
        )

        case = await db_session.get(Case, response.value)
        assert case.name == "Arson"
        assert case.description == "Warehouse"

    async def test_get_by_id_unknown(self, db_session):
        response = await GetCaseById(CaseRepository(db_session)).run(uuid4())

        assert not response.success
        assert response.message == ResponseMessage.CASE_DONT_EXISTS
        assert response.value is None

    async def test_list_newest_first(self, db_session, officer, test_case):
        newer = CaseFactory.create(officer_id=officer.id)
        db_session.add(newer)
        await db_session.commit()

        response = await GetCasesByOfficerId(CaseRepository(db_session)).run(officer.id)

        assert [case.id for case in response.value] == [newer.id, test_case.id]

    async def test_forbidden_update_does_not_mutate(self, db_session, test_case, other_officer):
        original = (test_case.name, test_case.description, test_case.updated_at)
        use_case = UpdateCase(CaseRepository(db_session), UnitOfWork(db_session))

        response = await use_case.run(
            test_case.id, other_officer.id, UpdateCaseViewModel(name="Changed")
        )

        assert response.message == ResponseMessage.FORBIDDEN
        await db_session.refresh(test_case)
        assert (test_case.name, test_case.description, test_case.updated_at) == original

    async def test_update_keeps_owner_and_id(self, db_session, test_case, officer, other_officer):
        case_id = test_case.id
        use_case = UpdateCase(CaseRepository(db_session), UnitOfWork(db_session))

        response = await use_case.run(
            case_id,
            officer.id,
            UpdateCaseViewModel(id=uuid4(), officer_id=other_officer.id, description="Updated"),
        )

        assert response.success
        case = await db_session.get(Case, case_id)
        assert case.id == case_id
        assert case.officer_id == officer.id
        assert case.description == "Updated"


@pytest.mark.asyncio
class TestDeleteCaseUseCase:
    """Test cascade and atomicity of case deletion."""

    async def test_delete_removes_all_evidences(self, db_session, test_case, officer):
        case_id = test_case.id
        db_session.add_all([EvidenceFactory.create(case_id=case_id) for _ in range(4)])
        await db_session.commit()

        use_case = DeleteCase(
            CaseRepository(db_session), EvidenceRepository(db_session), UnitOfWork(db_session)
        )
        response = await use_case.run(case_id, officer.id)

        assert response.success
        remaining = await db_session.execute(select(Evidence).where(Evidence.case_id == case_id))
        assert remaining.scalars().all() == []

    async def test_failure_mid_delete_leaves_no_partial_state(self, db_session, test_case, officer):
        case_id = test_case.id
        officer_id = officer.id
        db_session.add_all([EvidenceFactory.create(case_id=case_id) for _ in range(2)])
        await db_session.commit()

        use_case = DeleteCase(
            ExplodingCaseRepository(db_session), EvidenceRepository(db_session), UnitOfWork(db_session)
        )
        response = await use_case.run(case_id, officer_id)

        assert not response.success
        assert response.message == ResponseMessage.GENERIC_ERROR

        cases = await db_session.execute(select(Case).where(Case.id == case_id))
        assert cases.scalar_one_or_none() is not None
        evidences = await db_session.execute(select(Evidence).where(Evidence.case_id == case_id))
        assert len(evidences.scalars().all()) == 2

    async def test_delete_by_other_officer(self, db_session, test_case, other_officer):
        use_case = DeleteCase(
            CaseRepository(db_session), EvidenceRepository(db_session), UnitOfWork(db_session)
        )

        response = await use_case.run(test_case.id, other_officer.id)

        assert response.message == ResponseMessage.FORBIDDEN


@pytest.mark.asyncio
class TestCreateEvidenceUseCase:
    """Test file/record ordering of evidence creation."""

    def _use_case(self, db_session, file_store, evidences=None):
        return CreateEvidence(
            CaseRepository(db_session),
            evidences or EvidenceRepository(db_session),
            UnitOfWork(db_session),
            file_store,
            ImageValidator(),
        )

    def _view_model(self, case_id):
        return CreateEvidenceViewModel(
            name="Fingerprint",
            description="Lifted from the window",
            case_id=case_id,
            image_file_name="print.png",
            image_content_type="image/png",
            image_content=PNG_BYTES,
        )

    async def test_creates_file_and_record(self, db_session, file_store, test_case):
        response = await self._use_case(db_session, file_store).run(self._view_model(test_case.id))

        assert response.success
        evidence = await db_session.get(Evidence, response.value)
        assert file_store.exists(evidence.image_id, evidence.image_extension)

    async def test_failed_insert_removes_file(self, db_session, file_store, test_case):
        use_case = self._use_case(
            db_session, file_store, evidences=ExplodingEvidenceRepository(db_session)
        )

        with pytest.raises(SQLAlchemyError):
            await use_case.run(self._view_model(test_case.id))

        assert list(file_store.root.iterdir()) == []

    async def test_empty_image(self, db_session, file_store, test_case):
        view_model = self._view_model(test_case.id)
        view_model.image_content = b""

        response = await self._use_case(db_session, file_store).run(view_model)

        assert response.message == ResponseMessage.INVALID_EVIDENCE
        assert "image: Image is empty" in response.errors

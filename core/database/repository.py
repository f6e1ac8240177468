"""
Evidence Manager - Database Repository Pattern
One repository per aggregate. Repositories stage changes on the shared
session; committing is left to the caller's unit of work.
"""
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Case, Evidence, Officer

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """Base repository with common query patterns."""

    def __init__(self, db: AsyncSession, model: type):
        self.db = db
        self.model = model

    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Get entity by ID."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def add(self, entity: T) -> T:
        """Stage a new entity and flush so database defaults are populated."""
        self.db.add(entity)
        await self.db.flush()
        return entity


class OfficerRepository(BaseRepository[Officer]):
    """Repository for Officer operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Officer)

    async def get_by_username(self, username: str) -> Optional[Officer]:
        """Get officer by username (unique lookup)."""
        result = await self.db.execute(
            select(Officer).where(Officer.username == username)
        )
        return result.scalar_one_or_none()


class CaseRepository(BaseRepository[Case]):
    """Repository for Case operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Case)

    async def list_by_officer(self, officer_id: UUID) -> List[Case]:
        """All cases owned by an officer, newest first."""
        result = await self.db.execute(
            select(Case)
            .where(Case.officer_id == officer_id)
            .order_by(desc(Case.created_at))
        )
        return list(result.scalars().all())

    async def update(self, case: Case) -> Case:
        """Flush pending attribute changes of a loaded case."""
        await self.db.flush()
        return case

    async def delete(self, case: Case) -> None:
        """Stage deletion of a case."""
        await self.db.delete(case)
        await self.db.flush()


class EvidenceRepository(BaseRepository[Evidence]):
    """Repository for Evidence operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Evidence)

    async def list_by_case(self, case_id: UUID) -> List[Evidence]:
        """Evidences attached to a case, newest first."""
        result = await self.db.execute(
            select(Evidence)
            .where(Evidence.case_id == case_id)
            .order_by(desc(Evidence.created_at))
        )
        return list(result.scalars().all())

    async def delete_by_case(self, case_id: UUID) -> int:
        """Bulk delete every evidence of a case. Returns the row count."""
        result = await self.db.execute(
            delete(Evidence).where(Evidence.case_id == case_id)
        )
        return result.rowcount or 0


# Factory functions for dependency injection
def get_officer_repository(db: AsyncSession) -> OfficerRepository:
    """Get officer repository instance."""
    return OfficerRepository(db)


def get_case_repository(db: AsyncSession) -> CaseRepository:
    """Get case repository instance."""
    return CaseRepository(db)


def get_evidence_repository(db: AsyncSession) -> EvidenceRepository:
    """Get evidence repository instance."""
    return EvidenceRepository(db)

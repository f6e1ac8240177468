"""
Evidence Manager - Database Models
SQLAlchemy ORM models for officers, cases and evidences.
Supports PostgreSQL (production) and SQLite (testing).

Models carry foreign keys only; cross-entity reads go through the
repositories as explicit queries.
"""
from datetime import datetime
from enum import Enum as PyEnum
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Index, String, Text, TypeDecorator
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import CHAR

Base = declarative_base()


class GUID(TypeDecorator):
    """Platform-independent GUID type.
    Uses PostgreSQL's UUID type when available, otherwise stores as CHAR(36).
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        else:
            return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        elif dialect.name == 'postgresql':
            return value
        else:
            return str(value)

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return PyUUID(value)


UUID = GUID


class OfficerType(PyEnum):
    INVESTIGATOR = "investigator"
    ADMINISTRATOR = "administrator"


class Officer(Base):
    """Authenticated police officer; owns cases."""
    __tablename__ = "officers"

    id = Column(UUID(), primary_key=True, default=uuid4)
    username = Column(String(150), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    officer_type = Column(Enum(OfficerType), nullable=False, default=OfficerType.INVESTIGATOR)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Case(Base):
    """Investigation record owned by exactly one officer."""
    __tablename__ = "cases"

    id = Column(UUID(), primary_key=True, default=uuid4)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    officer_id = Column(UUID(), ForeignKey("officers.id"), nullable=False, index=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index('ix_cases_officer_created', 'officer_id', 'created_at'),
    )


class Evidence(Base):
    """Evidence item with an associated image, attached to a case."""
    __tablename__ = "evidences"

    id = Column(UUID(), primary_key=True, default=uuid4)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    case_id = Column(UUID(), ForeignKey("cases.id"), nullable=False, index=True)

    # Stored image is <evidence_root>/<image_id><image_extension>
    image_id = Column(UUID(), nullable=False)
    image_extension = Column(String(20), nullable=False, default="")

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

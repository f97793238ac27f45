"""SQLAlchemy ORM models — single source of truth for the store schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one collection of documents keyed by a UUID.

Key concepts:
- UUID primary keys assigned by the app, not the database
- Generic Uuid/DateTime types so the same models run on Postgres and SQLite
- Uniqueness lives in the schema (users.phone, one application per
  job+employee), so concurrent inserts are serialized by the store
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always reads back in UTC.

    SQLite drops the offset on storage, so naive values coming out of the
    store are tagged as UTC and aware values going in are converted to it.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


# ══════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════


class User(Base):
    """An employee or an employer.

    Learn: phone is the login handle and is stored digits-only. role is
    fixed at sign-up. specialization only means something for employees,
    job_type only for employers; the other one stays "".
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    specialization: Mapped[str] = mapped_column(String(200), default="")
    job_type: Mapped[str] = mapped_column(String(200), default="")
    join_date: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False
    )
    last_login: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False
    )


# ══════════════════════════════════════════════════════════════
# Jobs and applications
# ══════════════════════════════════════════════════════════════


class Job(Base):
    """A job posted by an employer.

    Learn: employer_id is copied from the poster's token, never from the
    request body. It is what the ownership guard compares against.
    """

    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_status_posted_date", "status", "posted_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), default="general", nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    whatsapp: Mapped[str] = mapped_column(String(32), default="")
    business_type: Mapped[str] = mapped_column(String(100), default="Individual")
    employer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True
    )
    employer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    posted_date: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)


class Application(Base):
    """An employee's application to a job."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "employee_id", name="uq_applications_job_employee"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("jobs.id"), nullable=False, index=True
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True
    )
    employee_name: Mapped[str] = mapped_column(String(100), nullable=False)
    employee_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    applied_date: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False
    )


def parse_uuid(value) -> uuid.UUID | None:
    """Parse an id from a URL or body. Returns None for anything malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None

"""Job service — posting, listing and owner-only mutation.

Learn: update_job and delete_job always run in the same order:
1. load the job                → NotFoundError if it doesn't exist
2. compare owner and requester → ForbiddenError if they differ
3. apply the change

Step 1 comes first for every caller, owner or not.
"""

from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.auth.jwt import AuthClaims
from kazi.auth.ownership import ensure_owner
from kazi.db.models import Application, Job, parse_uuid
from kazi.errors import ForbiddenError, NotFoundError, ValidationError
from kazi.phone import normalize_phone
from kazi.services.user_service import UserService

logger = structlog.get_logger()

MAX_JOBS = 50

# Fields an owner may change after posting.
MUTABLE_FIELDS = (
    "title",
    "description",
    "location",
    "category",
    "phone",
    "whatsapp",
    "business_type",
    "status",
)


def _contact_phone(phone: str) -> str:
    clean = normalize_phone(phone)
    if not clean:
        raise ValidationError("Phone number must contain digits")
    return clean


class JobService:
    """Business logic for job postings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ──────────────────────────────────────────

    async def list_active(self, limit: int = MAX_JOBS) -> list[Job]:
        result = await self.db.execute(
            select(Job)
            .where(Job.status == "active")
            .order_by(Job.posted_date.desc())
            .limit(min(limit, MAX_JOBS))
        )
        return list(result.scalars().all())

    async def list_for_employer(self, employer_id: str) -> list[Job]:
        parsed = parse_uuid(employer_id)
        if parsed is None:
            return []
        result = await self.db.execute(
            select(Job)
            .where(Job.employer_id == parsed)
            .order_by(Job.posted_date.desc())
        )
        return list(result.scalars().all())

    async def get_job(self, job_id) -> Job:
        parsed = parse_uuid(job_id)
        job = await self.db.get(Job, parsed) if parsed is not None else None
        if job is None:
            raise NotFoundError("Job not found")
        return job

    # ─── Create ─────────────────────────────────────────

    async def create_job(
        self,
        claims: AuthClaims,
        title: str,
        description: str,
        location: str,
        phone: str,
        category: Optional[str] = None,
        whatsapp: Optional[str] = None,
        business_type: Optional[str] = None,
    ) -> Job:
        if not claims.is_employer:
            raise ForbiddenError("Only employers can manage job postings")

        clean_phone = _contact_phone(phone)

        employer = await UserService(self.db).get_by_id(claims.subject_id)
        if employer is None:
            raise NotFoundError("Employer not found")

        job = Job(
            title=title,
            description=description,
            location=location,
            category=category or "general",
            phone=clean_phone,
            whatsapp=normalize_phone(whatsapp),
            business_type=business_type or "Individual",
            employer_id=employer.id,
            employer_name=employer.name,
        )
        self.db.add(job)
        await self.db.commit()
        await self.db.refresh(job)

        logger.info("jobs.created", job_id=str(job.id), employer_id=str(employer.id))
        return job

    # ─── Owner-only mutations ───────────────────────────

    async def update_job(self, job_id, requester_id: str, changes: dict) -> Job:
        job = await self.get_job(job_id)
        ensure_owner(job.employer_id, requester_id, resource="jobs")

        updates = {
            field: changes[field]
            for field in MUTABLE_FIELDS
            if changes.get(field) is not None
        }
        if "phone" in updates:
            updates["phone"] = _contact_phone(updates["phone"])
        if "whatsapp" in updates:
            updates["whatsapp"] = normalize_phone(updates["whatsapp"])
        for field, value in updates.items():
            setattr(job, field, value)

        await self.db.commit()
        await self.db.refresh(job)
        logger.info("jobs.updated", job_id=str(job.id), fields=sorted(changes))
        return job

    async def delete_job(self, job_id, requester_id: str) -> None:
        job = await self.get_job(job_id)
        ensure_owner(job.employer_id, requester_id, resource="jobs")

        await self.db.execute(delete(Application).where(Application.job_id == job.id))
        await self.db.delete(job)
        await self.db.commit()
        logger.info("jobs.deleted", job_id=str(job.id))

"""Application service — employees applying to jobs."""

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db.models import Application, Job, User, parse_uuid
from kazi.errors import ConflictError, NotFoundError, ValidationError
from kazi.phone import normalize_phone

logger = structlog.get_logger()


class ApplicationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_application(
        self,
        job_id: uuid.UUID,
        employee_id: uuid.UUID,
        employee_name: str,
        employee_phone: str,
    ) -> Application:
        if not employee_name or not employee_phone:
            raise ValidationError("Required fields missing")

        if await self.db.get(Job, job_id) is None:
            raise NotFoundError("Job not found")
        employee = await self.db.get(User, employee_id)
        if employee is None or employee.role != "employee":
            raise NotFoundError("Employee not found")

        application = Application(
            job_id=job_id,
            employee_id=employee_id,
            employee_name=employee_name,
            employee_phone=normalize_phone(employee_phone),
        )
        self.db.add(application)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("You have already applied for this job")
        await self.db.refresh(application)

        logger.info(
            "applications.created",
            application_id=str(application.id),
            job_id=str(job_id),
            employee_id=str(employee_id),
        )
        return application

    async def list_for_job(self, job_id) -> list[Application]:
        parsed = parse_uuid(job_id)
        if parsed is None:
            return []
        result = await self.db.execute(
            select(Application)
            .where(Application.job_id == parsed)
            .order_by(Application.applied_date.desc())
        )
        return list(result.scalars().all())

    async def list_for_employee(self, employee_id) -> list[Application]:
        parsed = parse_uuid(employee_id)
        if parsed is None:
            return []
        result = await self.db.execute(
            select(Application)
            .where(Application.employee_id == parsed)
            .order_by(Application.applied_date.desc())
        )
        return list(result.scalars().all())

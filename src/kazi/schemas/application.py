"""Pydantic schemas for job applications."""

import uuid
from datetime import datetime

from kazi.schemas.common import CamelModel, NonEmptyStr


class ApplicationCreate(CamelModel):
    job_id: uuid.UUID
    employee_id: uuid.UUID
    employee_name: NonEmptyStr
    employee_phone: NonEmptyStr


class ApplicationRead(CamelModel):
    id: uuid.UUID
    job_id: uuid.UUID
    employee_id: uuid.UUID
    employee_name: str
    employee_phone: str
    status: str
    applied_date: datetime


class ApplicationResponse(CamelModel):
    success: bool = True
    application: ApplicationRead


class ApplicationListResponse(CamelModel):
    success: bool = True
    applications: list[ApplicationRead]

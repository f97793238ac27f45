"""Pydantic schemas for jobs.

Learn: Separate "Create"/"Update" schemas (input) from "Read" schemas
(output). employerId/employerName are only on the Read side: the poster
is taken from the token, not from the body.
"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from kazi.schemas.common import CamelModel, NonEmptyStr

JobStatus = Literal["active", "closed"]


class JobCreate(CamelModel):
    title: NonEmptyStr
    description: NonEmptyStr
    location: NonEmptyStr
    phone: NonEmptyStr
    category: Optional[str] = None
    whatsapp: Optional[str] = None
    business_type: Optional[str] = None


class JobUpdate(CamelModel):
    title: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    location: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    phone: Optional[NonEmptyStr] = None
    whatsapp: Optional[str] = None
    business_type: Optional[NonEmptyStr] = None
    status: Optional[JobStatus] = None


class JobRead(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    location: str
    category: str
    phone: str
    whatsapp: str = ""
    business_type: str
    employer_id: uuid.UUID
    employer_name: str
    posted_date: datetime
    status: str


class JobResponse(CamelModel):
    success: bool = True
    job: JobRead


class JobListResponse(CamelModel):
    success: bool = True
    jobs: list[JobRead]

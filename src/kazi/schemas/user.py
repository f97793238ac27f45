"""Public user view. The password digest has no field here, so it can't leak."""

import uuid
from datetime import datetime

from kazi.schemas.common import CamelModel


class UserRead(CamelModel):
    id: uuid.UUID
    name: str
    phone: str
    location: str
    role: str
    specialization: str = ""
    job_type: str = ""
    join_date: datetime
    last_login: datetime


class UserResponse(CamelModel):
    success: bool = True
    user: UserRead


class EmployeeListResponse(CamelModel):
    success: bool = True
    employees: list[UserRead]

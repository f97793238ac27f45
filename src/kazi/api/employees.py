"""Employee directory. UserRead has no password field, so none is returned."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db.engine import get_db
from kazi.schemas.user import EmployeeListResponse, UserRead
from kazi.services.user_service import UserService

router = APIRouter()


@router.get("/employees", response_model=EmployeeListResponse)
async def list_employees(db: AsyncSession = Depends(get_db)):
    employees = await UserService(db).list_employees()
    return EmployeeListResponse(
        employees=[UserRead.model_validate(e) for e in employees]
    )

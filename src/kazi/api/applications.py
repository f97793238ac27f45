"""Application API routes — apply to a job, list applications."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db.engine import get_db
from kazi.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRead,
    ApplicationResponse,
)
from kazi.services.application_service import ApplicationService

router = APIRouter(prefix="/applications")


def _svc(db: AsyncSession = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    body: ApplicationCreate,
    svc: ApplicationService = Depends(_svc),
):
    application = await svc.create_application(
        job_id=body.job_id,
        employee_id=body.employee_id,
        employee_name=body.employee_name,
        employee_phone=body.employee_phone,
    )
    return ApplicationResponse(application=ApplicationRead.model_validate(application))


@router.get("/job/{job_id}", response_model=ApplicationListResponse)
async def list_job_applications(job_id: str, svc: ApplicationService = Depends(_svc)):
    applications = await svc.list_for_job(job_id)
    return ApplicationListResponse(
        applications=[ApplicationRead.model_validate(a) for a in applications]
    )


@router.get("/employee/{employee_id}", response_model=ApplicationListResponse)
async def list_employee_applications(
    employee_id: str, svc: ApplicationService = Depends(_svc)
):
    applications = await svc.list_for_employee(employee_id)
    return ApplicationListResponse(
        applications=[ApplicationRead.model_validate(a) for a in applications]
    )

"""Job API routes.

Learn: Reads are public. Posting needs an employer token
(require_employer). Update and delete need the token of the employer
who posted the job; JobService checks existence before ownership.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.auth.dependencies import get_current_claims, require_employer
from kazi.auth.jwt import AuthClaims
from kazi.db.engine import get_db
from kazi.schemas.common import AckResponse
from kazi.schemas.job import JobCreate, JobListResponse, JobRead, JobResponse, JobUpdate
from kazi.services.job_service import JobService

router = APIRouter(prefix="/jobs")


def _svc(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)


def _job_response(job) -> JobResponse:
    return JobResponse(job=JobRead.model_validate(job))


@router.get("", response_model=JobListResponse)
async def list_jobs(svc: JobService = Depends(_svc)):
    """Active jobs, newest first, at most 50."""
    jobs = await svc.list_active()
    return JobListResponse(jobs=[JobRead.model_validate(j) for j in jobs])


@router.get("/mine", response_model=JobListResponse)
async def list_my_jobs(
    claims: AuthClaims = Depends(require_employer),
    svc: JobService = Depends(_svc),
):
    """Every job the calling employer posted, closed ones included."""
    jobs = await svc.list_for_employer(claims.subject_id)
    return JobListResponse(jobs=[JobRead.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, svc: JobService = Depends(_svc)):
    return _job_response(await svc.get_job(job_id))


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    body: JobCreate,
    claims: AuthClaims = Depends(require_employer),
    svc: JobService = Depends(_svc),
):
    job = await svc.create_job(
        claims,
        title=body.title,
        description=body.description,
        location=body.location,
        phone=body.phone,
        category=body.category,
        whatsapp=body.whatsapp,
        business_type=body.business_type,
    )
    return _job_response(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    body: JobUpdate,
    claims: AuthClaims = Depends(get_current_claims),
    svc: JobService = Depends(_svc),
):
    job = await svc.update_job(
        job_id, claims.subject_id, body.model_dump(exclude_unset=True)
    )
    return _job_response(job)


@router.delete("/{job_id}", response_model=AckResponse)
async def delete_job(
    job_id: str,
    claims: AuthClaims = Depends(get_current_claims),
    svc: JobService = Depends(_svc),
):
    await svc.delete_job(job_id, claims.subject_id)
    return AckResponse(message="Job deleted successfully")

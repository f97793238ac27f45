"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Auth is applied per route with Depends(get_current_claims) or
Depends(require_employer) because most routers mix public reads with
protected writes.
"""

from fastapi import APIRouter

from kazi.api.applications import router as applications_router
from kazi.api.auth import router as auth_router
from kazi.api.employees import router as employees_router
from kazi.api.health import router as health_router
from kazi.api.jobs import router as jobs_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(jobs_router, tags=["jobs"])
api_router.include_router(employees_router, tags=["employees"])
api_router.include_router(applications_router, tags=["applications"])

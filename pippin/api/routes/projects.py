"""
api/routes/projects.py
----------------------
Project registry endpoints.

GET    /api/projects         Projects of the current tenant
POST   /api/projects         Create a project (max 3 per tenant)
DELETE /api/projects/{key}   Delete a project with its tickets and blocks
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.tenant import TenantContext
from pippin.db.session import get_db
from pippin.dependencies import get_tenant
from pippin.schemas.project import (
    CreatedResponse,
    ProjectCreate,
    ProjectRead,
    StatusResponse,
)
from pippin.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectRead], summary="List projects")
async def list_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
) -> list[ProjectRead]:
    projects = await ProjectService.list_projects(db, tenant)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    body: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
) -> CreatedResponse:
    """
    Fails with LIMIT_EXCEEDED once the tenant has three projects, and with
    PERSISTENCE_ERROR when the key is already taken.
    """
    project = await ProjectService.create_project(db, tenant, body)
    return CreatedResponse(id=project.id)


@router.delete("/{key}", response_model=StatusResponse, summary="Delete a project")
async def delete_project(
    key: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
) -> StatusResponse:
    await ProjectService.delete_project(db, tenant, key)
    return StatusResponse(status="deleted")

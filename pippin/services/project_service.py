"""
services/project_service.py
---------------------------
Project registry: per-tenant project cap and key lookup.

Service layer is responsible for:
  - Constructing queries (always filtered by tenant_id)
  - Enforcing business rules (the project cap)
  - Returning ORM models to the route layer
  - Never returning HTTP responses (that's the route's job)

Key uniqueness is not pre-checked. The unique constraint on
(tenant_id, key) is the authority and its violation surfaces as
PersistenceError with the driver's message.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.exceptions import LimitExceeded, NotFound, PersistenceError
from pippin.core.logging import get_logger
from pippin.core.tenant import TenantContext
from pippin.models.project import MAX_PROJECTS_PER_TENANT, Project
from pippin.schemas.project import ProjectCreate

logger = get_logger(__name__)


class ProjectService:

    @staticmethod
    async def count_projects(db: AsyncSession, tenant: TenantContext) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(Project)
            .where(Project.tenant_id == tenant.tenant_id)
        )
        return result.scalar_one()

    @staticmethod
    async def create_project(
        db: AsyncSession, tenant: TenantContext, data: ProjectCreate
    ) -> Project:
        """
        Create a project for the tenant.
        Raises LimitExceeded once the tenant owns MAX_PROJECTS_PER_TENANT.
        """
        existing = await ProjectService.count_projects(db, tenant)
        if existing >= MAX_PROJECTS_PER_TENANT:
            logger.info("Project limit reached", limit=MAX_PROJECTS_PER_TENANT)
            raise LimitExceeded(
                f"project limit reached ({MAX_PROJECTS_PER_TENANT} per account)"
            )

        project = Project(tenant_id=tenant.tenant_id, key=data.key, name=data.name)
        db.add(project)
        try:
            await db.flush()
        except IntegrityError as exc:
            await db.rollback()
            raise PersistenceError(str(exc.orig)) from exc

        logger.info("Project created", project_id=project.id, key=project.key)
        return project

    @staticmethod
    async def delete_project(db: AsyncSession, tenant: TenantContext, key: str) -> None:
        """
        Delete the tenant's project with this key.

        Tickets go with it through ON DELETE CASCADE, and the blocking edges of
        those tickets through theirs, all inside the one DELETE statement.
        """
        result = await db.execute(
            delete(Project).where(
                Project.tenant_id == tenant.tenant_id, Project.key == key
            )
        )
        if result.rowcount == 0:
            raise NotFound(f"project '{key}' not found")
        logger.info("Project deleted", key=key)

    @staticmethod
    async def list_projects(db: AsyncSession, tenant: TenantContext) -> list[Project]:
        result = await db.execute(
            select(Project)
            .where(Project.tenant_id == tenant.tenant_id)
            .order_by(Project.created_at, Project.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_key(
        db: AsyncSession, tenant: TenantContext, key: str
    ) -> Project | None:
        result = await db.execute(
            select(Project).where(
                Project.tenant_id == tenant.tenant_id, Project.key == key
            )
        )
        return result.scalar_one_or_none()

"""
services/export_service.py
--------------------------
Full tenant snapshot for external serialisation: every project and every
ticket, ignoring the sprint filter.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.logging import get_logger
from pippin.core.tenant import TenantContext
from pippin.db.base import utc_now
from pippin.schemas.export import ExportSnapshot
from pippin.schemas.project import ProjectRead
from pippin.services.project_service import ProjectService
from pippin.services.ticket_repository import ALL_PROJECTS, ALL_SPRINTS
from pippin.services.ticket_service import TicketService

logger = get_logger(__name__)


class ExportService:

    @staticmethod
    async def snapshot(
        db: AsyncSession,
        tenant: TenantContext,
        board: BoardSettings,
        now: Optional[datetime] = None,
    ) -> ExportSnapshot:
        projects = await ProjectService.list_projects(db, tenant)
        tickets = await TicketService.list_tickets(
            db, tenant, board, project_key=ALL_PROJECTS, sprint=ALL_SPRINTS
        )
        logger.info("Export built", projects=len(projects), tickets=len(tickets))
        return ExportSnapshot(
            exported_at=now or utc_now(),
            account_id=tenant.tenant_id,
            projects=[ProjectRead.model_validate(p) for p in projects],
            tickets=tickets,
        )

"""
services/board_service.py
-------------------------
Groups a filtered ticket list into the four lifecycle columns a board
renderer draws. Defaults match the board page: every project, current sprint.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.lifecycle import TicketState
from pippin.core.tenant import TenantContext
from pippin.schemas.export import BoardView
from pippin.schemas.project import ProjectRead
from pippin.services.project_service import ProjectService
from pippin.services.ticket_repository import ALL_PROJECTS, CURRENT_SPRINT
from pippin.services.ticket_service import TicketService


class BoardService:

    @staticmethod
    async def build_board(
        db: AsyncSession,
        tenant: TenantContext,
        board: BoardSettings,
        project_key: Optional[str] = None,
        sprint: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> BoardView:
        project_key = project_key or ALL_PROJECTS
        sprint = sprint or CURRENT_SPRINT

        tickets = await TicketService.list_tickets(
            db, tenant, board, project_key=project_key, sprint=sprint, now=now
        )
        columns = {state: [] for state in TicketState}
        for ticket in tickets:
            columns[ticket.state].append(ticket)

        projects = await ProjectService.list_projects(db, tenant)
        return BoardView(
            theme=board.theme,
            sprint=sprint,
            project=project_key,
            projects=[ProjectRead.model_validate(p) for p in projects],
            columns=columns,
        )

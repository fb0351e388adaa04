"""
api/routes/board.py
-------------------
GET /board   Column-grouped board data for the renderer.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.tenant import TenantContext
from pippin.db.session import get_db
from pippin.dependencies import get_board_settings, get_tenant
from pippin.schemas.export import BoardView
from pippin.services.board_service import BoardService

router = APIRouter(tags=["Board"])


@router.get("/board", response_model=BoardView, summary="Board columns")
async def board(
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    settings: Annotated[BoardSettings, Depends(get_board_settings)],
    project: Optional[str] = Query(default=None, description="Project key, default ALL"),
    sprint: Optional[str] = Query(default=None, description="Default 'current'"),
) -> BoardView:
    return await BoardService.build_board(
        db, tenant, settings, project_key=project, sprint=sprint
    )

"""
api/routes/export.py
--------------------
GET /api/export   Download every project and ticket of the tenant as JSON.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.tenant import TenantContext
from pippin.db.session import get_db
from pippin.dependencies import get_board_settings, get_tenant
from pippin.schemas.export import ExportSnapshot
from pippin.services.export_service import ExportService

router = APIRouter(tags=["Export"])


@router.get("/api/export", response_model=ExportSnapshot, summary="Export all data")
async def export_all(
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    board: Annotated[BoardSettings, Depends(get_board_settings)],
) -> JSONResponse:
    snapshot = await ExportService.snapshot(db, tenant, board)
    filename = f"pippin-export-{snapshot.exported_at:%Y-%m-%d}.json"
    return JSONResponse(
        content=snapshot.model_dump(mode="json"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

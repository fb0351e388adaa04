"""
api/routes/settings.py
----------------------
Runtime board settings.

GET  /api/settings   Current sprint cadence, theme and account
POST /api/settings   Partial update; lost on restart
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from pippin.core.board_settings import SettingsStore, SettingsUpdate
from pippin.core.tenant import TenantContext
from pippin.dependencies import get_settings_store, get_tenant
from pippin.schemas.settings import SettingsRead

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("", response_model=SettingsRead, summary="Read board settings")
async def read_settings(
    store: Annotated[SettingsStore, Depends(get_settings_store)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
) -> SettingsRead:
    return SettingsRead.build(store.get(), tenant.tenant_id)


@router.post("", response_model=SettingsRead, summary="Update board settings (runtime only)")
async def update_settings(
    body: SettingsUpdate,
    store: Annotated[SettingsStore, Depends(get_settings_store)],
    tenant: Annotated[TenantContext, Depends(get_tenant)],
) -> SettingsRead:
    return SettingsRead.build(store.update(body), tenant.tenant_id)

"""
dependencies.py
---------------
FastAPI dependency injection for the request-scoped inputs of every core
operation.

Flow:
  1. get_tenant resolves the active account: the X-Account-ID header when
     the caller sends one, otherwise the configured ACCOUNT_ID. There is no
     authentication; the identifier is trusted as given.
  2. The tenant is bound into structlog's contextvars for the request.
  3. get_board_settings hands the current BoardSettings value to the
     operation, so services never read process-wide state themselves.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from pippin.core.board_settings import BoardSettings, SettingsStore
from pippin.core.config import settings
from pippin.core.logging import bind_tenant
from pippin.core.tenant import TenantContext


async def get_tenant(
    x_account_id: Annotated[Optional[str], Header()] = None,
) -> TenantContext:
    account = (x_account_id or "").strip() or settings.ACCOUNT_ID
    try:
        tenant = TenantContext(account)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    bind_tenant(tenant.tenant_id)
    return tenant


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def get_board_settings(
    store: Annotated[SettingsStore, Depends(get_settings_store)],
) -> BoardSettings:
    return store.get()

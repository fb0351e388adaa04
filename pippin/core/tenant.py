"""
core/tenant.py
--------------
The active account every core operation is scoped by.

Tenants are provisioned outside this service; the identifier is opaque and
only ever used as a row filter (tenant_id == ...) on every query.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    tenant_id: str

    def __post_init__(self) -> None:
        if not self.tenant_id or not self.tenant_id.strip():
            raise ValueError("tenant_id must be a non-empty string")

    def __str__(self) -> str:
        return self.tenant_id

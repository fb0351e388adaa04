"""
services/ticket_repository.py
-----------------------------
Persistence-facing contract for tickets.

Critical security invariant:
  Every query MUST include tenant_id in the WHERE clause.
  Ticket ids are sequential, so they are trivially guessable.

Listing semantics:
  project_key None or "ALL"  → every project of the tenant
  sprint "current"           → created_at inside the sprint window at `now`
  any other sprint value     → no time restriction
  ordering                   → created_at ascending, then id (insertion order)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.exceptions import PersistenceError
from pippin.core.lifecycle import TicketState
from pippin.core.sprint import as_utc, current_window
from pippin.core.tenant import TenantContext
from pippin.db.base import utc_now
from pippin.models.project import Project
from pippin.models.ticket import Ticket

ALL_PROJECTS = "ALL"
CURRENT_SPRINT = "current"
ALL_SPRINTS = "all"


@dataclass(frozen=True)
class TicketFilter:
    project_key: Optional[str] = None
    sprint: str = ALL_SPRINTS

    @property
    def restricts_project(self) -> bool:
        return bool(self.project_key) and self.project_key != ALL_PROJECTS


class TicketRepository:

    @staticmethod
    async def insert(
        db: AsyncSession,
        tenant: TenantContext,
        project_id: int,
        title: str,
        body: str = "",
        assignee: str = "",
        state: TicketState = TicketState.backlog,
        created_at: Optional[datetime] = None,
    ) -> Ticket:
        stamp = as_utc(created_at) if created_at else utc_now()
        ticket = Ticket(
            tenant_id=tenant.tenant_id,
            project_id=project_id,
            title=title,
            body=body,
            assignee=assignee,
            state=TicketState(state).value,
            comments="",
            created_at=stamp,
            updated_at=stamp,
        )
        db.add(ticket)
        try:
            await db.flush()
        except IntegrityError as exc:
            await db.rollback()
            raise PersistenceError(str(exc.orig)) from exc
        return ticket

    @staticmethod
    async def get_by_id(
        db: AsyncSession, tenant: TenantContext, ticket_id: int
    ) -> Optional[tuple[Ticket, str]]:
        """The ticket and its project key, or None."""
        result = await db.execute(
            select(Ticket, Project.key)
            .join(Project, Ticket.project_id == Project.id)
            .where(Ticket.id == ticket_id, Ticket.tenant_id == tenant.tenant_id)
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        return (row[0], row[1]) if row is not None else None

    @staticmethod
    async def get_state(
        db: AsyncSession, tenant: TenantContext, ticket_id: int
    ) -> Optional[str]:
        result = await db.execute(
            select(Ticket.state).where(
                Ticket.id == ticket_id, Ticket.tenant_id == tenant.tenant_id
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _update(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        values: dict[str, Any],
        now: Optional[datetime] = None,
    ) -> bool:
        values = {**values, "updated_at": as_utc(now) if now else utc_now()}
        try:
            result = await db.execute(
                update(Ticket)
                .where(Ticket.id == ticket_id, Ticket.tenant_id == tenant.tenant_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as exc:
            await db.rollback()
            raise PersistenceError(str(exc.orig)) from exc
        return result.rowcount > 0

    @staticmethod
    async def update_fields(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        fields: dict[str, Any],
        now: Optional[datetime] = None,
    ) -> bool:
        """Write title/body/assignee/state as given. Returns False if no such ticket."""
        allowed = {"title", "body", "assignee", "state"}
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"not editable: {sorted(unknown)}")
        values = dict(fields)
        if "state" in values:
            values["state"] = TicketState(values["state"]).value
        return await TicketRepository._update(db, tenant, ticket_id, values, now)

    @staticmethod
    async def update_state(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        state: TicketState,
        now: Optional[datetime] = None,
    ) -> bool:
        return await TicketRepository._update(
            db, tenant, ticket_id, {"state": TicketState(state).value}, now
        )

    @staticmethod
    async def update_comments(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        comments: str,
        now: Optional[datetime] = None,
    ) -> bool:
        return await TicketRepository._update(
            db, tenant, ticket_id, {"comments": comments}, now
        )

    @staticmethod
    async def list_by_tenant(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_filter: TicketFilter,
        board: BoardSettings,
        now: Optional[datetime] = None,
    ) -> list[tuple[Ticket, str]]:
        """Tickets with their project keys, filtered and ordered as described above."""
        query = (
            select(Ticket, Project.key)
            .join(Project, Ticket.project_id == Project.id)
            .where(Ticket.tenant_id == tenant.tenant_id)
        )
        if ticket_filter.restricts_project:
            query = query.where(Project.key == ticket_filter.project_key)
        if ticket_filter.sprint == CURRENT_SPRINT:
            window = current_window(
                now or utc_now(), board.sprint_epoch, board.sprint_length_days
            )
            query = query.where(
                Ticket.created_at >= window.start, Ticket.created_at < window.end
            )

        result = await db.execute(
            query.order_by(Ticket.created_at, Ticket.id).execution_options(
                populate_existing=True
            )
        )
        return [(ticket, key) for ticket, key in result.all()]

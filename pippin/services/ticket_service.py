"""
services/ticket_service.py
--------------------------
Ticket operations built on TicketRepository: creation, reads augmented
with blockers and parsed comments, the two state-changing paths, and the
comment log.

State changes:
  move_ticket           → one step left/right along the lifecycle, validated
  update_ticket_fields  → direct edit, any state allowed

move_ticket reads the current state, computes the next one and writes it
without a compare-and-set. Two concurrent movers of the same ticket can both
succeed from the same starting state; the last write wins.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.comments import Comment, append_entry, parse_log
from pippin.core.exceptions import NotFound
from pippin.core.lifecycle import Direction, TicketState, next_state
from pippin.core.logging import get_logger
from pippin.core.tenant import TenantContext
from pippin.db.base import utc_now
from pippin.models.ticket import Ticket
from pippin.schemas.ticket import (
    BlockerRef,
    CommentRead,
    TicketCreate,
    TicketRead,
    TicketUpdate,
)
from pippin.services.block_service import BlockService
from pippin.services.project_service import ProjectService
from pippin.services.ticket_repository import TicketFilter, TicketRepository

logger = get_logger(__name__)


def to_read(ticket: Ticket, project_key: str, blockers: list[BlockerRef]) -> TicketRead:
    return TicketRead(
        id=ticket.id,
        account_id=ticket.tenant_id,
        project_id=ticket.project_id,
        project_key=project_key,
        title=ticket.title,
        body=ticket.body,
        state=ticket.state,
        assignee=ticket.assignee,
        comments=[CommentRead.from_comment(c) for c in parse_log(ticket.comments)],
        blocked_by=blockers,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
    )


class TicketService:

    @staticmethod
    async def create_ticket(
        db: AsyncSession,
        tenant: TenantContext,
        data: TicketCreate,
        now: Optional[datetime] = None,
    ) -> Ticket:
        """
        Create a ticket inside one of the tenant's projects.
        Raises NotFound if the project key does not belong to the tenant.
        """
        project = await ProjectService.get_by_key(db, tenant, data.project_key)
        if project is None:
            raise NotFound(f"project '{data.project_key}' not found")

        ticket = await TicketRepository.insert(
            db,
            tenant,
            project_id=project.id,
            title=data.title,
            body=data.body,
            assignee=data.assignee,
            state=data.state,
            created_at=now,
        )
        logger.info("Ticket created", ticket_id=ticket.id, project=project.key)
        return ticket

    @staticmethod
    async def get_ticket(
        db: AsyncSession, tenant: TenantContext, ticket_id: int
    ) -> TicketRead:
        found = await TicketRepository.get_by_id(db, tenant, ticket_id)
        if found is None:
            raise NotFound(f"ticket {ticket_id} not found")
        ticket, project_key = found
        blockers = await BlockService.blockers_of(db, tenant, ticket_id)
        return to_read(ticket, project_key, blockers)

    @staticmethod
    async def list_tickets(
        db: AsyncSession,
        tenant: TenantContext,
        board: BoardSettings,
        project_key: Optional[str] = None,
        sprint: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[TicketRead]:
        ticket_filter = TicketFilter(project_key=project_key, sprint=sprint or "")
        rows = await TicketRepository.list_by_tenant(db, tenant, ticket_filter, board, now)
        blockers = await BlockService.blockers_for(db, tenant, (t.id for t, _ in rows))
        return [to_read(t, key, blockers.get(t.id, [])) for t, key in rows]

    @staticmethod
    async def update_ticket_fields(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        data: TicketUpdate,
        now: Optional[datetime] = None,
    ) -> None:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        updated = await TicketRepository.update_fields(db, tenant, ticket_id, fields, now)
        if not updated:
            raise NotFound(f"ticket {ticket_id} not found")
        logger.info("Ticket updated", ticket_id=ticket_id, fields=sorted(fields))

    @staticmethod
    async def move_ticket(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        direction: Direction | str,
        now: Optional[datetime] = None,
    ) -> TicketState:
        """
        Step the ticket one stage in `direction`.
        Raises NotFound for an unknown ticket and InvalidMove when the step is
        not allowed.
        """
        current = await TicketRepository.get_state(db, tenant, ticket_id)
        if current is None:
            raise NotFound(f"ticket {ticket_id} not found")

        target = next_state(current, direction)
        await TicketRepository.update_state(db, tenant, ticket_id, target, now)
        logger.info(
            "Ticket moved", ticket_id=ticket_id, from_state=current, to_state=target.value
        )
        return target

    @staticmethod
    async def append_comment(
        db: AsyncSession,
        tenant: TenantContext,
        ticket_id: int,
        text: str,
        now: Optional[datetime] = None,
    ) -> list[Comment]:
        """Append a timestamped entry and return the whole transcript, parsed."""
        found = await TicketRepository.get_by_id(db, tenant, ticket_id)
        if found is None:
            raise NotFound(f"ticket {ticket_id} not found")
        ticket, _ = found

        stamp = now or utc_now()
        log = append_entry(ticket.comments, text, stamp)
        await TicketRepository.update_comments(db, tenant, ticket_id, log, stamp)
        logger.info("Comment added", ticket_id=ticket_id, length=len(text))
        return parse_log(log)

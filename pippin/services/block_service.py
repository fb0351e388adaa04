"""
services/block_service.py
-------------------------
Blocking graph: directed "blocker must be resolved before blocked" edges.

  - add_block is idempotent (ON CONFLICT DO NOTHING on the composite key).
  - remove_block never fails for a missing edge.
  - blockers_of / blockers_for feed the "blocked by" badge and nothing else;
    cycles and self-edges are accepted and simply reported.

Every query carries the tenant_id filter, so an edge stored under one tenant
is invisible to all others.
"""

from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.exceptions import PersistenceError
from pippin.core.logging import get_logger
from pippin.core.tenant import TenantContext
from pippin.models.block import Block
from pippin.models.project import Project
from pippin.models.ticket import Ticket
from pippin.schemas.ticket import BlockerRef

logger = get_logger(__name__)


def _insert_ignoring_duplicates(dialect_name: str):
    if dialect_name == "postgresql":
        return postgresql.insert(Block).on_conflict_do_nothing()
    if dialect_name == "sqlite":
        return sqlite.insert(Block).on_conflict_do_nothing()
    raise PersistenceError(f"unsupported database dialect '{dialect_name}'")


class BlockService:

    @staticmethod
    async def add_block(
        db: AsyncSession, tenant: TenantContext, blocker_id: int, blocked_id: int
    ) -> None:
        stmt = _insert_ignoring_duplicates(db.get_bind().dialect.name).values(
            tenant_id=tenant.tenant_id,
            blocker_ticket_id=blocker_id,
            blocked_ticket_id=blocked_id,
        )
        try:
            await db.execute(stmt)
        except IntegrityError as exc:
            # unknown ticket ids trip the foreign keys
            await db.rollback()
            raise PersistenceError(str(exc.orig)) from exc
        logger.info("Block added", blocker_id=blocker_id, blocked_id=blocked_id)

    @staticmethod
    async def remove_block(
        db: AsyncSession, tenant: TenantContext, blocker_id: int, blocked_id: int
    ) -> None:
        result = await db.execute(
            delete(Block).where(
                Block.tenant_id == tenant.tenant_id,
                Block.blocker_ticket_id == blocker_id,
                Block.blocked_ticket_id == blocked_id,
            )
        )
        if result.rowcount:
            logger.info("Block removed", blocker_id=blocker_id, blocked_id=blocked_id)

    @staticmethod
    async def blockers_for(
        db: AsyncSession, tenant: TenantContext, ticket_ids: Iterable[int]
    ) -> dict[int, list[BlockerRef]]:
        """Blockers of many tickets in one query, keyed by blocked ticket id."""
        ids = list(ticket_ids)
        if not ids:
            return {}

        result = await db.execute(
            select(Block.blocked_ticket_id, Ticket.id, Project.key)
            .join(Ticket, Block.blocker_ticket_id == Ticket.id)
            .join(Project, Ticket.project_id == Project.id)
            .where(
                Block.tenant_id == tenant.tenant_id,
                Block.blocked_ticket_id.in_(ids),
            )
            .order_by(Block.blocked_ticket_id, Ticket.id)
        )
        blockers: dict[int, list[BlockerRef]] = {}
        for blocked_id, blocker_id, project_key in result.all():
            blockers.setdefault(blocked_id, []).append(
                BlockerRef(ticket_id=blocker_id, project_key=project_key)
            )
        return blockers

    @staticmethod
    async def blockers_of(
        db: AsyncSession, tenant: TenantContext, ticket_id: int
    ) -> list[BlockerRef]:
        found = await BlockService.blockers_for(db, tenant, [ticket_id])
        return found.get(ticket_id, [])

    @staticmethod
    async def list_edges(db: AsyncSession, tenant: TenantContext) -> list[Block]:
        result = await db.execute(
            select(Block)
            .where(Block.tenant_id == tenant.tenant_id)
            .order_by(Block.blocker_ticket_id, Block.blocked_ticket_id)
        )
        return list(result.scalars().all())

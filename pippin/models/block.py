"""
models/block.py
---------------
Directed "blocks" edge between two tickets of the same tenant.

The composite primary key makes each ordered pair unique per tenant, which is
what lets BlockService insert with ON CONFLICT DO NOTHING. Cycles and
self-edges are allowed.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pippin.db.base import Base


class Block(Base):
    __tablename__ = "blocks"

    tenant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    blocker_ticket_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tickets.id", ondelete="CASCADE"),
        primary_key=True,
    )
    blocked_ticket_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tickets.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Block {self.blocker_ticket_id} -> {self.blocked_ticket_id} "
            f"tenant_id={self.tenant_id}>"
        )

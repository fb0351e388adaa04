"""
models/ticket.py
----------------
Ticket ORM model.

tenant_id is denormalised here (it could be derived via project.tenant_id)
so every ticket query can be tenant-scoped without a JOIN. The comment
transcript is a single text column; see pippin.core.comments for its shape.
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pippin.core.lifecycle import TicketState
from pippin.db.base import Base, TenantMixin, TimestampMixin


class Ticket(Base, TenantMixin, TimestampMixin):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    state: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TicketState.backlog.value
    )
    assignee: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    comments: Mapped[str] = mapped_column(Text, nullable=False, default="")

    project: Mapped["Project"] = relationship("Project", back_populates="tickets")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Ticket id={self.id} state={self.state} tenant_id={self.tenant_id}>"

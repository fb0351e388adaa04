"""
models/project.py
-----------------
Project ORM model.

A tenant owns at most MAX_PROJECTS_PER_TENANT projects (enforced by
ProjectService) and each key is unique within the tenant (enforced here by
the database). Deleting a project cascades to its tickets at the database
level, and from there to their blocking edges.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pippin.db.base import Base, TenantMixin, TimestampMixin

MAX_PROJECTS_PER_TENANT = 3


class Project(Base, TenantMixin, TimestampMixin):
    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("tenant_id", "key", name="uq_projects_tenant_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(16), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    tickets: Mapped[list["Ticket"]] = relationship(  # noqa: F821
        "Ticket",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id} key={self.key} tenant_id={self.tenant_id}>"

"""
models/__init__.py
------------------
Re-export all models so table creation can import Base and discover
all tables via a single import:

    from pippin.models import Base
"""

from pippin.db.base import Base
from pippin.models.project import MAX_PROJECTS_PER_TENANT, Project
from pippin.models.ticket import Ticket
from pippin.models.block import Block

__all__ = ["Base", "Project", "Ticket", "Block", "MAX_PROJECTS_PER_TENANT"]

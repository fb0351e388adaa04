"""
schemas/export.py
-----------------
Full tenant snapshot and board view models.
"""

from typing import Dict, List

from pydantic import BaseModel

from pippin.core.config import Theme
from pippin.core.lifecycle import TicketState
from pippin.schemas.common import UTCDateTime
from pippin.schemas.project import ProjectRead
from pippin.schemas.ticket import TicketRead


class ExportSnapshot(BaseModel):
    exported_at: UTCDateTime
    account_id: str
    projects: List[ProjectRead]
    tickets: List[TicketRead]


class BoardView(BaseModel):
    """One column per lifecycle state, in lifecycle order."""

    theme: Theme
    sprint: str
    project: str
    projects: List[ProjectRead]
    columns: Dict[TicketState, List[TicketRead]]

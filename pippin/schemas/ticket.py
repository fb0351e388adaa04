"""
schemas/ticket.py
-----------------
Pydantic models for tickets, moves, comments and blocking edges.

TicketUpdate is the unconstrained edit path: any field present in the body
is written as-is, including `state`, which may jump to any lifecycle stage.
Adjacent-only transitions go through MoveRequest instead.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from pippin.core.comments import Comment
from pippin.core.lifecycle import TicketState
from pippin.schemas.common import UTCDateTime


class TicketCreate(BaseModel):
    project_key: str = Field(..., min_length=1, max_length=16, examples=["APP"])
    title: str = Field(..., min_length=1, max_length=255)
    body: str = ""
    assignee: str = Field(default="", max_length=255)
    state: TicketState = TicketState.backlog

    @field_validator("state", mode="before")
    @classmethod
    def empty_state_is_backlog(cls, v):
        return v or TicketState.backlog


class TicketUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    body: Optional[str] = None
    assignee: Optional[str] = Field(default=None, max_length=255)
    state: Optional[TicketState] = None


class MoveRequest(BaseModel):
    # Kept as a plain string so unknown directions reach the state machine
    # and come back as INVALID_MOVE rather than a schema error.
    direction: str = Field(..., examples=["right"])


class MoveResponse(BaseModel):
    state: TicketState


class CommentCreate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=8000)


class CommentRead(BaseModel):
    timestamp: Optional[UTCDateTime] = None
    text: str

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentRead":
        return cls(timestamp=comment.timestamp, text=comment.text)


class BlockCreate(BaseModel):
    blocked_id: int


class BlockerRef(BaseModel):
    ticket_id: int
    project_key: str

    @computed_field
    @property
    def label(self) -> str:
        return f"T-{self.ticket_id} ({self.project_key})"


class TicketRead(BaseModel):
    id: int
    account_id: str
    project_id: int
    project_key: str
    title: str
    body: str
    state: TicketState
    assignee: str
    comments: list[CommentRead] = []
    blocked_by: list[BlockerRef] = []
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @property
    def is_blocked(self) -> bool:
        return bool(self.blocked_by)

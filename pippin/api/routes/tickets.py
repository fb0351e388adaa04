"""
api/routes/tickets.py
---------------------
Ticket endpoints.

GET    /api/tickets                            Filtered list (project, sprint)
GET    /api/tickets/{id}                       One ticket with its blockers
POST   /api/tickets                            Create
PATCH  /api/tickets/{id}                       Direct field edit (any state)
POST   /api/tickets/{id}/move                  One lifecycle step left/right
POST   /api/tickets/{id}/comments              Append to the comment log
POST   /api/tickets/{id}/blocks                {id} blocks {blocked_id}
DELETE /api/tickets/{id}/blocks/{blocked_id}   Remove that edge
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pippin.core.board_settings import BoardSettings
from pippin.core.tenant import TenantContext
from pippin.db.session import get_db
from pippin.dependencies import get_board_settings, get_tenant
from pippin.schemas.project import CreatedResponse, StatusResponse
from pippin.schemas.ticket import (
    BlockCreate,
    CommentCreate,
    CommentRead,
    MoveRequest,
    MoveResponse,
    TicketCreate,
    TicketRead,
    TicketUpdate,
)
from pippin.services.block_service import BlockService
from pippin.services.ticket_service import TicketService

router = APIRouter(prefix="/api/tickets", tags=["Tickets"])

Db = Annotated[AsyncSession, Depends(get_db)]
Tenant = Annotated[TenantContext, Depends(get_tenant)]


@router.get("", response_model=list[TicketRead], summary="List tickets")
async def list_tickets(
    db: Db,
    tenant: Tenant,
    board: Annotated[BoardSettings, Depends(get_board_settings)],
    project: Optional[str] = Query(default=None, description="Project key or ALL"),
    sprint: Optional[str] = Query(default=None, description="'current' or 'all'"),
) -> list[TicketRead]:
    return await TicketService.list_tickets(
        db, tenant, board, project_key=project, sprint=sprint
    )


@router.get("/{ticket_id}", response_model=TicketRead, summary="Get a ticket")
async def get_ticket(ticket_id: int, db: Db, tenant: Tenant) -> TicketRead:
    return await TicketService.get_ticket(db, tenant, ticket_id)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a ticket",
)
async def create_ticket(body: TicketCreate, db: Db, tenant: Tenant) -> CreatedResponse:
    ticket = await TicketService.create_ticket(db, tenant, body)
    return CreatedResponse(id=ticket.id)


@router.patch("/{ticket_id}", response_model=StatusResponse, summary="Edit a ticket")
async def update_ticket(
    ticket_id: int, body: TicketUpdate, db: Db, tenant: Tenant
) -> StatusResponse:
    await TicketService.update_ticket_fields(db, tenant, ticket_id, body)
    return StatusResponse(status="updated")


@router.post("/{ticket_id}/move", response_model=MoveResponse, summary="Move a ticket")
async def move_ticket(
    ticket_id: int, body: MoveRequest, db: Db, tenant: Tenant
) -> MoveResponse:
    state = await TicketService.move_ticket(db, tenant, ticket_id, body.direction)
    return MoveResponse(state=state)


@router.post(
    "/{ticket_id}/comments",
    response_model=list[CommentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
)
async def add_comment(
    ticket_id: int, body: CommentCreate, db: Db, tenant: Tenant
) -> list[CommentRead]:
    comments = await TicketService.append_comment(db, tenant, ticket_id, body.comment)
    return [CommentRead.from_comment(c) for c in comments]


@router.post(
    "/{ticket_id}/blocks",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mark another ticket as blocked by this one",
)
async def add_block(
    ticket_id: int, body: BlockCreate, db: Db, tenant: Tenant
) -> StatusResponse:
    await BlockService.add_block(db, tenant, ticket_id, body.blocked_id)
    return StatusResponse(status="ok")


@router.delete(
    "/{ticket_id}/blocks/{blocked_id}",
    response_model=StatusResponse,
    summary="Remove a blocking edge",
)
async def remove_block(
    ticket_id: int, blocked_id: int, db: Db, tenant: Tenant
) -> StatusResponse:
    await BlockService.remove_block(db, tenant, ticket_id, blocked_id)
    return StatusResponse(status="ok")

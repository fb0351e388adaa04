"""Tests for the export snapshot and the board column view."""

from pippin.core.lifecycle import TicketState
from pippin.services.block_service import BlockService
from pippin.services.board_service import BoardService
from pippin.services.export_service import ExportService

from conftest import utc


async def test_export_ignores_sprint_filter(db, tenant, board, make_project, make_ticket):
    await make_project("APP")
    await make_project("WEB")
    old = await make_ticket("APP", "old", created_at=utc(2024, 6, 1))
    new = await make_ticket("WEB", "new", created_at=utc(2025, 1, 10))
    await BlockService.add_block(db, tenant, old.id, new.id)

    snapshot = await ExportService.snapshot(db, tenant, board, now=utc(2025, 1, 10, 12))

    assert snapshot.account_id == "demo"
    assert snapshot.exported_at == utc(2025, 1, 10, 12)
    assert [p.key for p in snapshot.projects] == ["APP", "WEB"]
    assert [t.id for t in snapshot.tickets] == [old.id, new.id]
    assert [r.ticket_id for r in snapshot.tickets[1].blocked_by] == [old.id]


async def test_export_excludes_other_tenants(db, tenant, other_tenant, board, make_project, make_ticket):
    await make_project("APP", owner=other_tenant)
    await make_ticket("APP", owner=other_tenant)

    snapshot = await ExportService.snapshot(db, tenant, board)

    assert snapshot.projects == [] and snapshot.tickets == []


async def test_export_serialises_to_json(db, tenant, board, make_project, make_ticket):
    await make_project("APP")
    await make_ticket("APP", state="in_progress")

    payload = (await ExportService.snapshot(db, tenant, board)).model_dump(mode="json")

    assert set(payload) == {"exported_at", "account_id", "projects", "tickets"}
    assert payload["tickets"][0]["state"] == "in_progress"
    assert payload["projects"][0]["account_id"] == "demo"


async def test_board_groups_current_sprint_into_columns(
    db, tenant, board, make_project, make_ticket
):
    await make_project("APP")
    todo = await make_ticket(state="todo", created_at=utc(2025, 1, 9))
    done = await make_ticket(state="done", created_at=utc(2025, 1, 10))
    await make_ticket(state="todo", created_at=utc(2024, 12, 1))

    view = await BoardService.build_board(db, tenant, board, now=utc(2025, 1, 10))

    assert view.sprint == "current" and view.project == "ALL"
    assert list(view.columns) == list(TicketState)
    assert [t.id for t in view.columns[TicketState.todo]] == [todo.id]
    assert [t.id for t in view.columns[TicketState.done]] == [done.id]
    assert view.columns[TicketState.backlog] == []
    assert view.theme.value == "warm"

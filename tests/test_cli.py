"""Tests for the command-line views."""

import httpx
import pytest

from food_manager.cli import (
    COMMANDS,
    EXIT_FAILED,
    EXIT_LOGIN_REQUIRED,
    EXIT_OK,
    build_parser,
    render_items,
    run,
)
from food_manager.coordinator import FoodManagerApp
from food_manager.services.session import InMemorySessionStore

from conftest import make_item, mock_client, server_record

MENU = [
    server_record(id=1, name="Paneer Tikka", description="Grilled cottage cheese"),
    server_record(id=2, name="Chicken Curry", description="Spicy gravy", veg=False, is_available=False),
]


def make_app(settings, handler, store=None) -> FoodManagerApp:
    return FoodManagerApp(
        settings=settings,
        http_client=mock_client(handler),
        session_store=store or InMemorySessionStore(),
    )


def menu_handler(request):
    return httpx.Response(200, json=MENU)


# =============================================================================
# PARSER
# =============================================================================

def test_every_subcommand_has_a_handler():
    parser = build_parser()
    subparsers = next(a for a in parser._actions if a.dest == "command")
    assert set(subparsers.choices) == set(COMMANDS)


def test_parse_list_filters():
    args = build_parser().parse_args(["list", "-q", "paneer", "--veg", "nonveg", "--available"])
    assert args.command == "list"
    assert args.query == "paneer"
    assert args.veg == "nonveg"
    assert args.available is True


def test_parse_add_defaults():
    args = build_parser().parse_args(["add", "--name", "Dal", "--description", "Lentils", "--price", "50"])
    assert args.veg is True
    assert args.available is True
    assert args.unit is None


def test_parse_edit_leaves_flags_unset():
    args = build_parser().parse_args(["edit", "3", "--nonveg"])
    assert args.item_id == 3
    assert args.veg is False
    assert args.available is None
    assert args.price is None


def test_parse_rejects_conflicting_flags():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["edit", "3", "--veg", "--nonveg"])


def test_render_items_empty_and_count():
    assert render_items([], "Nothing here") == "Nothing here"
    rendered = render_items([make_item()], "Nothing here")
    assert rendered.startswith("1 item found")
    assert "Dal" in rendered


# =============================================================================
# COMMANDS
# =============================================================================

@pytest.mark.asyncio
async def test_list_command(settings, capsys):
    args = build_parser().parse_args(["list", "--query", "curry"])
    code = await run(args, make_app(settings, menu_handler))

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "Chicken Curry" in out
    assert "Paneer Tikka" not in out


@pytest.mark.asyncio
async def test_today_command(settings, capsys):
    args = build_parser().parse_args(["today"])
    code = await run(args, make_app(settings, menu_handler))

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "Available Today (1)" in out
    assert "Chicken Curry" not in out


@pytest.mark.asyncio
async def test_order_command_prints_token(settings, capsys):
    args = build_parser().parse_args(["order", "1"])
    code = await run(args, make_app(settings, menu_handler))

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "Token: ORD-" in out
    assert "✓ Order placed successfully!" in out


@pytest.mark.asyncio
async def test_fetch_failure_exits_nonzero(settings, capsys):
    args = build_parser().parse_args(["list"])
    code = await run(args, make_app(settings, lambda request: httpx.Response(500, json={})))

    assert code == EXIT_FAILED
    assert "✕ Error: Failed to fetch food items" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_add_with_invalid_price(settings, capsys):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201, json={})

    args = build_parser().parse_args(["add", "--name", "Dal", "--description", "Lentils", "--price", "abc"])
    code = await run(args, make_app(settings, handler))

    assert code == EXIT_FAILED
    assert calls == []
    assert "✕ Error:" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_edit_command_sends_put(settings, capsys):
    seen = []

    def handler(request):
        seen.append(request.method)
        if request.method == "GET":
            return httpx.Response(200, json=MENU)
        return httpx.Response(200, json={})

    args = build_parser().parse_args(["edit", "2", "--available", "--price", "199"])
    code = await run(args, make_app(settings, handler))

    assert code == EXIT_OK
    assert seen == ["GET", "PUT"]
    assert "Food item updated successfully!" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_transactions_with_expired_session(settings, capsys):
    store = InMemorySessionStore()
    app = make_app(settings, lambda request: httpx.Response(401, json={}), store=store)
    app.session.create("stale", {"username": "admin"})

    code = await run(build_parser().parse_args(["transactions"]), app)

    err = capsys.readouterr().err
    assert code == EXIT_LOGIN_REQUIRED
    assert "Session expired" in err
    assert "food-manager login" in err
    assert store.get() is None


@pytest.mark.asyncio
async def test_transactions_listing(settings, capsys):
    records = [{"id": 7, "date": "2024-03-05T12:00:00Z", "item": "Dal", "quantity": 2, "amount": 100, "status": "completed"}]
    app = make_app(settings, lambda request: httpx.Response(200, json=records))
    app.session.create("abc", {"username": "admin"})

    code = await run(build_parser().parse_args(["transactions"]), app)

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "2024-03-05" in out
    assert "completed" in out

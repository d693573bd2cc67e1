"""
Food Manager Command-Line Interface

The presentation layer: each subcommand maps to one view of the menu
client and delegates all work to FoodManagerApp.

    food-manager login --email admin@restaurant.com
    food-manager list --query paneer --veg veg --available
    food-manager today
    food-manager order 3 --unit "Half Plate"
    food-manager add --name "Dal" --description "Yellow lentils" --price 50 --unit Bowl
    food-manager edit 3 --price 55 --unavailable
    food-manager ingredients 3
    food-manager transactions
    food-manager logout

Exit status is 0 on success, 1 when the command failed, 2 when the user
has to log in first.
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence

from pydantic import ValidationError

from food_manager import __version__
from food_manager.coordinator import FoodManagerApp
from food_manager.core.config import get_settings, setup_logging
from food_manager.schemas import (
    AvailabilityFilterEnum,
    FoodItem,
    ImageUpload,
    ItemFilter,
    Transaction,
    VegFilterEnum,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_LOGIN_REQUIRED = 2


# =============================================================================
# RENDERING
# =============================================================================

def format_price(price: float) -> str:
    return f"{get_settings().currency_symbol}{price:.2f}"


def render_item(item: FoodItem) -> str:
    marker = "🟢" if item.is_veg else "🔴"
    availability = "Available" if item.is_available else "Not Available"
    units = ", ".join(f"{unit.name} {format_price(unit.price)}" for unit in item.units)
    lines = [f"{marker} #{item.id} {item.name}  [{availability}]", f"   {units}"]
    if item.description:
        lines.append(f"   {item.description}")
    return "\n".join(lines)


def render_items(items: Sequence[FoodItem], empty_message: str) -> str:
    if not items:
        return empty_message
    count = f"{len(items)} {'item' if len(items) == 1 else 'items'} found"
    return "\n".join([count, "-" * 60] + [render_item(item) for item in items])


def render_transactions(transactions: Sequence[Transaction]) -> str:
    if not transactions:
        return "No transactions found"
    header = f"{'Date':<12} {'Item':<28} {'Qty':>4} {'Amount':>10}  Status"
    rows = [header, "-" * len(header)]
    for tx in transactions:
        rows.append(
            f"{tx.display_date:<12} {tx.item[:28]:<28} {tx.quantity:>4} "
            f"{format_price(tx.amount):>10}  {tx.status}"
        )
    return "\n".join(rows)


# =============================================================================
# COMMANDS
# =============================================================================

async def cmd_login(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    password = args.password or getpass.getpass("Password: ")
    session = await app.login(args.email, password)
    return session is not None


async def cmd_logout(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    app.logout()
    return True


async def cmd_list(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    if not await app.refresh_items():
        return False
    criteria = ItemFilter(
        query=args.query,
        veg_filter=VegFilterEnum(args.veg),
        availability_filter=(
            AvailabilityFilterEnum.AVAILABLE if args.available else AvailabilityFilterEnum.ALL
        ),
    )
    print(render_items(app.visible_items(criteria), "No items found matching your criteria"))
    return True


async def cmd_today(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    if not await app.refresh_items():
        return False
    items = app.available_today()
    print(f"Available Today ({len(items)})")
    print(render_items(items, "No items marked as available today. Check back later for updates"))
    return True


async def cmd_order(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    if not await app.refresh_items():
        return False
    receipt = await app.place_order(args.item_id, args.unit)
    if receipt is None:
        return False
    print("Order placed successfully!")
    print(f"  Token: {receipt.token}")
    print(f"  Item:  {receipt.item_name}")
    print(f"  Unit:  {receipt.unit}")
    print(f"  Price: {format_price(receipt.price)}")
    print("Please save your token for order tracking.")
    return True


async def cmd_ingredients(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    if not await app.refresh_items():
        return False
    ingredients = app.ingredients_for(args.item_id)
    if ingredients is None:
        return False
    item = app.cache.get(args.item_id)
    print(f"Ingredients for {item.name}:\n\n{ingredients}")
    return True


async def cmd_add(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    image = ImageUpload.from_path(args.image) if args.image else None
    try:
        item = FoodItem(
            name=args.name,
            description=args.description,
            is_veg=args.veg,
            is_available=args.available,
            image=image,
            ingredients=args.ingredients or "",
            units=[{"name": args.unit or app.settings.default_unit_name, "price": args.price}],
        )
    except ValidationError as e:
        app.report_error(e, "Adding food item")
        return False
    return await app.add_item(item)


async def cmd_edit(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    if not await app.refresh_items():
        return False
    item = app.get_item(args.item_id)
    if item is None:
        return False

    changes: dict = {}
    for field in ("name", "description", "ingredients"):
        value = getattr(args, field)
        if value is not None:
            changes[field] = value
    if args.veg is not None:
        changes["is_veg"] = args.veg
    if args.available is not None:
        changes["is_available"] = args.available
    if args.image:
        changes["image"] = ImageUpload.from_path(args.image)
    if args.unit is not None or args.price is not None:
        first = item.default_unit
        changes["units"] = [
            {
                "name": args.unit if args.unit is not None else first.name,
                "price": args.price if args.price is not None else first.price,
            },
            *[unit.model_dump() for unit in item.units[1:]],
        ]

    try:
        edited = item.with_changes(**changes)
    except ValidationError as e:
        app.report_error(e, "Updating food item")
        return False
    return await app.save_item(edited)


async def cmd_transactions(app: FoodManagerApp, args: argparse.Namespace) -> bool:
    transactions = await app.load_transactions()
    if transactions is None:
        return False
    print("📊 Transactions History")
    print(render_transactions(transactions))
    return True


Command = Callable[[FoodManagerApp, argparse.Namespace], Awaitable[bool]]

# Single source of truth for the client's views
COMMANDS: dict[str, Command] = {
    "login": cmd_login,
    "logout": cmd_logout,
    "list": cmd_list,
    "today": cmd_today,
    "order": cmd_order,
    "ingredients": cmd_ingredients,
    "add": cmd_add,
    "edit": cmd_edit,
    "transactions": cmd_transactions,
}


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def _add_item_fields(parser: argparse.ArgumentParser, editing: bool) -> None:
    parser.add_argument("--name", required=not editing, help="Item name")
    parser.add_argument("--description", required=not editing, help="Short description")
    parser.add_argument("--ingredients", help="Free-text ingredient list")
    parser.add_argument("--unit", help="Unit name, e.g. 'Full Plate'")
    parser.add_argument("--price", required=not editing, help="Price of the unit")
    parser.add_argument("--image", help="Path to an image file to upload")

    veg = parser.add_mutually_exclusive_group()
    veg.add_argument("--veg", dest="veg", action="store_true", default=None if editing else True)
    veg.add_argument("--nonveg", dest="veg", action="store_false")

    available = parser.add_mutually_exclusive_group()
    available.add_argument(
        "--available", dest="available", action="store_true", default=None if editing else True
    )
    available.add_argument("--unavailable", dest="available", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="food-manager",
        description="Manage a restaurant menu through its REST API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in and store the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    sub.add_parser("logout", help="Forget the stored session")

    list_cmd = sub.add_parser("list", help="List and filter all food items")
    list_cmd.add_argument("--query", "-q", default="", help="Search name and description")
    list_cmd.add_argument(
        "--veg", choices=[e.value for e in VegFilterEnum], default=VegFilterEnum.ALL.value
    )
    list_cmd.add_argument("--available", action="store_true", help="Only available items")

    sub.add_parser("today", help="Items available today")

    order = sub.add_parser("order", help="Order an item from today's menu")
    order.add_argument("item_id", type=int)
    order.add_argument("--unit", help="Unit to order (defaults to the first unit)")

    ingredients = sub.add_parser("ingredients", help="Show an item's ingredients")
    ingredients.add_argument("item_id", type=int)

    add = sub.add_parser("add", help="Add a new food item")
    _add_item_fields(add, editing=False)

    edit = sub.add_parser("edit", help="Edit an existing food item")
    edit.add_argument("item_id", type=int)
    _add_item_fields(edit, editing=True)

    sub.add_parser("transactions", help="Show the transaction history")

    return parser


# =============================================================================
# ENTRY POINT
# =============================================================================

async def run(args: argparse.Namespace, app: Optional[FoodManagerApp] = None) -> int:
    """Run one command and print the resulting notification."""
    async with (app or FoodManagerApp()) as app:
        ok = await COMMANDS[args.command](app, args)

        notification = app.notifications.current
        if notification is not None:
            stream = sys.stdout if ok else sys.stderr
            print(notification.render(), file=stream)

        if app.login_required:
            print("Please log in again: food-manager login --email <email>", file=sys.stderr)
            return EXIT_LOGIN_REQUIRED
        return EXIT_OK if ok else EXIT_FAILED


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    settings = get_settings()
    for problem in settings.validate_production_config():
        logger.warning(f"⚠️ {problem}")

    try:
        return asyncio.run(run(args))
    except OSError as e:
        # Unreadable --image path
        print(f"✕ Error: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())

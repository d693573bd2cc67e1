"""
Server ↔ Client Field Mapping

The API stores one unit and one price per item under its own field names;
the client works with FoodItem and its list of units. All translation
happens here and nowhere else.

    server              client
    ------              ------
    veg                 is_veg
    is_available        is_available
    unit, price         units = [Unit(name=unit, price=price)]
    description/image/  same names, None → ""
    ingredients
"""

from typing import Any, Mapping

from food_manager.schemas import FoodItem, ImageUpload


def item_from_server(record: Mapping[str, Any]) -> FoodItem:
    """
    Build a FoodItem from one element of the item collection response.

    Example:
        >>> item = item_from_server({"id": 1, "name": "Dal", "veg": True,
        ...     "unit": "Bowl", "price": 50, "is_available": True})
        >>> item.units[0].name, item.units[0].price
        ('Bowl', 50.0)
    """
    return FoodItem(
        id=record.get("id"),
        name=record.get("name") or "",
        description=record.get("description") or "",
        image=record.get("image") or "",
        is_veg=bool(record.get("veg")),
        is_available=bool(record.get("is_available")),
        ingredients=record.get("ingredients") or "",
        units=[{"name": record.get("unit") or "", "price": record.get("price") or 0}],
    )


def item_to_server(item: FoodItem) -> dict[str, Any]:
    """
    Server-shaped record for an item, using its first unit.

    Extra units only exist client-side; the API keeps a single unit/price.
    """
    unit = item.default_unit
    record: dict[str, Any] = {
        "name": item.name,
        "description": item.description,
        "veg": item.is_veg,
        "unit": unit.name,
        "price": float(unit.price),
        "is_available": item.is_available,
    }
    if item.id is not None:
        record["id"] = item.id
    if item.ingredients:
        record["ingredients"] = item.ingredients
    return record


def _form_value(value: Any) -> str:
    # Multipart fields are text; booleans travel as "true"/"false"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def item_to_form(item: FoodItem) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """
    Multipart form for create/update.

    Returns:
        (data, files) ready for ``httpx`` ``data=``/``files=``. ``files``
        only holds an image when a new file was picked; an image that is
        already a URL string is left out of the payload.
    """
    record = item_to_server(item)
    fields = ("name", "description", "veg", "unit", "price", "is_available")
    data = {key: _form_value(record[key]) for key in fields}

    files: dict[str, tuple[str, bytes, str]] = {}
    if isinstance(item.image, ImageUpload):
        files["image"] = item.image.as_file_tuple()
    return data, files

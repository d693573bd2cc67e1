"""Tests for server ↔ client field translation."""

from food_manager.schemas import ImageUpload
from food_manager.services.mapping import item_from_server, item_to_form, item_to_server

from conftest import make_item, server_record


def test_item_from_server_dal():
    """The canonical Dal record maps onto the display shape."""
    item = item_from_server(
        {"id": 1, "name": "Dal", "veg": True, "unit": "Bowl", "price": 50, "is_available": True}
    )

    dumped = item.model_dump(by_alias=True)
    assert dumped["id"] == 1
    assert dumped["name"] == "Dal"
    assert dumped["isVeg"] is True
    assert dumped["isAvailable"] is True
    assert dumped["units"] == [{"name": "Bowl", "price": 50}]


def test_item_from_server_defaults_missing_text():
    item = item_from_server(
        {"id": 2, "name": "Chicken Curry", "veg": False, "unit": "Plate", "price": "180.00",
         "is_available": False, "description": None, "image": None}
    )
    assert item.description == ""
    assert item.image == ""
    assert item.ingredients == ""
    assert item.is_veg is False
    assert item.units[0].price == 180.0


def test_item_to_server_inverts_item_from_server():
    record = server_record(id=4, name="Paneer Tikka", veg=True, unit="Plate", price=240.0)
    back = item_to_server(item_from_server(record))

    for key in ("id", "name", "description", "veg", "unit", "price", "is_available", "ingredients"):
        assert back[key] == record[key]


def test_item_to_server_uses_first_unit():
    item = make_item(units=[{"name": "Full Plate", "price": 220}, {"name": "Half Plate", "price": 130}])
    record = item_to_server(item)
    assert record["unit"] == "Full Plate"
    assert record["price"] == 220.0


def test_item_to_form_encodes_text_fields():
    item = make_item(is_veg=False, is_available=True, units=[{"name": "Plate", "price": "45.50"}])

    data, files = item_to_form(item)

    assert data == {
        "name": "Dal",
        "description": "Yellow lentils",
        "veg": "false",
        "unit": "Plate",
        "price": "45.5",
        "is_available": "true",
    }
    assert files == {}


def test_item_to_form_skips_existing_image_url():
    data, files = item_to_form(make_item(image="https://host/a.png"))
    assert "image" not in data
    assert "image" not in files


def test_item_to_form_attaches_new_upload():
    upload = ImageUpload(filename="dal.png", content=b"png", content_type="image/png")
    _, files = item_to_form(make_item(image=upload))
    assert files == {"image": ("dal.png", b"png", "image/png")}

"""
Pydantic Schemas for the Menu Client

Client-side shapes of everything the API hands back or accepts:
- Food items with pricing units and pending image uploads
- Login sessions
- Read-only transaction history
- Filter criteria for the item list

Field names are snake_case in Python. Food items also accept and emit the
camelCase names used by the display layer (isVeg, isAvailable) through
aliases; translation to the server's own field names lives in
services/mapping.py.

Version: 1.0.0
"""

import mimetypes
import re
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class VegFilterEnum(str, Enum):
    ALL = "all"
    VEG = "veg"
    NONVEG = "nonveg"


class AvailabilityFilterEnum(str, Enum):
    ALL = "all"
    AVAILABLE = "available"


class TransactionStatusEnum(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


# =============================================================================
# FOOD ITEMS
# =============================================================================

class Unit(BaseModel):
    """A named pricing variant of an item, e.g. Full Plate / Half Plate."""
    name: str = Field(..., examples=["Full Plate"])
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[120.0])

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class ImageUpload(BaseModel):
    """A locally selected image that has not been uploaded yet."""
    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageUpload":
        """Read an image file from disk into an upload payload."""
        p = Path(path).expanduser()
        content_type = mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return cls(filename=p.name, content=p.read_bytes(), content_type=content_type)

    def as_file_tuple(self) -> tuple[str, bytes, str]:
        """Shape expected by httpx's ``files=`` argument."""
        return (self.filename, self.content, self.content_type)


class FoodItem(BaseModel):
    """
    Cached projection of a server-owned menu item.

    ``id`` is assigned by the server and stays None until the item has been
    created. ``image`` is either the URL of the stored image or an
    ImageUpload waiting to be sent with the next create/update.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: str = Field(default="", examples=["Paneer Tikka"])
    description: str = Field(default="", examples=["Grilled cottage cheese"])
    is_veg: bool = Field(default=True, alias="isVeg")
    is_available: bool = Field(default=True, alias="isAvailable")
    image: Union[ImageUpload, str, None] = None
    ingredients: str = ""
    units: List[Unit] = Field(..., min_length=1)

    @field_validator("units")
    @classmethod
    def unit_names_unique(cls, v: List[Unit]) -> List[Unit]:
        names = [unit.name for unit in v]
        if len(set(names)) != len(names):
            raise ValueError("Unit names must be unique")
        return v

    @property
    def default_unit(self) -> Unit:
        return self.units[0]

    @property
    def has_pending_upload(self) -> bool:
        return isinstance(self.image, ImageUpload)

    @property
    def image_url(self) -> Optional[str]:
        if isinstance(self.image, str) and self.image:
            return self.image
        return None

    def price_for(self, unit_name: str) -> Optional[float]:
        """Price of the named unit, or None if the item has no such unit."""
        for unit in self.units:
            if unit.name == unit_name:
                return unit.price
        return None

    def with_changes(self, **changes) -> "FoodItem":
        """Return a validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return FoodItem.model_validate(data)


# =============================================================================
# SESSION
# =============================================================================

class User(BaseModel):
    """Profile returned by the login endpoint. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    username: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.username or self.email or "unknown"


class Session(BaseModel):
    """Authenticated user's token plus profile."""
    token: str = Field(..., min_length=1)
    user: User = Field(default_factory=User)


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""
    email: str = Field(..., examples=["admin@restaurant.com"])
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^[\w\.\+-]+@[\w\.-]+\.\w+$", v):
            raise ValueError("Invalid email format")
        return v


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseModel):
    """A completed order as recorded by the server. Read-only."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    date: datetime
    item: str
    quantity: int = 1
    amount: float
    status: str = ""

    @field_validator("item", mode="before")
    @classmethod
    def item_as_text(cls, v):
        """The item may arrive as a related-object id; it is only displayed."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def style(self) -> str:
        """Display style for the status column; unknown statuses get 'default'."""
        try:
            return TransactionStatusEnum(self.status.lower()).value
        except ValueError:
            return "default"

    @property
    def display_date(self) -> str:
        return self.date.date().isoformat()


# =============================================================================
# FILTERING
# =============================================================================

class ItemFilter(BaseModel):
    """Search and filter criteria for the item list."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    veg_filter: VegFilterEnum = VegFilterEnum.ALL
    availability_filter: AvailabilityFilterEnum = AvailabilityFilterEnum.ALL

    @property
    def is_identity(self) -> bool:
        """True when the criteria let every item through."""
        return (
            not self.query
            and self.veg_filter == VegFilterEnum.ALL
            and self.availability_filter == AvailabilityFilterEnum.ALL
        )

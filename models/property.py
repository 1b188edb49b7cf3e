"""
models/property.py
------------------
Domain model for rental properties and the filters used to search them.
"""

from dataclasses import MISSING, dataclass, fields
from decimal import Decimal
from typing import Any, Mapping, Optional

# Columns written by an INSERT, in statement order.
PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)


@dataclass
class Property:
    """
    Represents a listed property.

    Attributes:
        id: Database primary key (None for new records).
        owner_id: User id of the owner.
        cost_per_night: Nightly price in cents.
        average_rating: Mean review rating; only set on search results,
            None when the property has no reviews.
    """
    owner_id: int
    title: str
    description: str
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    street: str
    city: str
    province: str
    post_code: str
    country: str
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    id: Optional[int] = None
    average_rating: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Property":
        """Build a Property from a dict-cursor row (extra columns are ignored)."""
        data = {f.name: row[f.name] for f in fields(cls) if f.name in row}
        if data.get("average_rating") is not None:
            data["average_rating"] = float(data["average_rating"])
        return cls(**data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Property":
        """
        Build a new (unsaved) Property from request data.

        Raises:
            ValueError: If a column without a default is missing.
        """
        missing = [
            f.name for f in fields(cls)
            if f.name in PROPERTY_COLUMNS and f.default is MISSING and f.name not in data
        ]
        if missing:
            raise ValueError(f"Missing property fields: {', '.join(missing)}")
        return cls(**{name: data[name] for name in PROPERTY_COLUMNS if name in data})

    def insert_values(self) -> tuple:
        """Values for PROPERTY_COLUMNS, in the same order."""
        return tuple(getattr(self, name) for name in PROPERTY_COLUMNS)

    @property
    def price_per_night(self) -> Decimal:
        """Nightly price in currency units."""
        return Decimal(self.cost_per_night) / 100


@dataclass
class PropertySearch:
    """
    Optional filters for a property search. Unset fields are not applied.

    Attributes:
        city: Case-insensitive substring of the city name.
        owner_id: Only properties of this owner.
        minimum_price_per_night: Lower price bound in currency units.
        maximum_price_per_night: Upper price bound in currency units.
        minimum_rating: Lower bound on the average review rating.
    """
    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[Decimal] = None
    maximum_price_per_night: Optional[Decimal] = None
    minimum_rating: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "PropertySearch":
        """
        Build filters from query-string style options.

        Empty strings count as unset and unknown keys are ignored.

        Raises:
            ValueError: If a numeric option cannot be parsed.
        """
        options = options or {}

        def _get(name, cast):
            value = options.get(name)
            if value is None or value == "":
                return None
            try:
                return cast(value)
            except (ValueError, ArithmeticError) as e:
                raise ValueError(f"Invalid {name}: {value!r}") from e

        return cls(
            city=_get("city", str),
            owner_id=_get("owner_id", _integer),
            minimum_price_per_night=_get("minimum_price_per_night", _decimal),
            maximum_price_per_night=_get("maximum_price_per_night", _decimal),
            minimum_rating=_get("minimum_rating", _decimal),
        )


def _decimal(value) -> Decimal:
    number = Decimal(str(value))
    if not number.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _integer(value) -> int:
    number = _decimal(value)
    if number != number.to_integral_value():
        raise ValueError(f"not a whole number: {value!r}")
    return int(number)


def to_cents(amount) -> int:
    """Convert a price in currency units to whole cents, truncating."""
    return int(Decimal(str(amount)) * 100)

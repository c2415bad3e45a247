"""Catalog query options and their mapping to request parameters."""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class Quality(Enum):
    """Release quality filter accepted by the catalog."""
    ALL = "All"
    HD_720P = "720p"
    HD_1080P = "1080p"
    UHD_2160P = "2160p"
    THREE_D = "3D"


class SortBy(Enum):
    """Sort keys accepted by the catalog."""
    TITLE = "title"
    YEAR = "year"
    RATING = "rating"
    DOWNLOAD_COUNT = "download_count"
    LIKE_COUNT = "like_count"


class OrderBy(Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryOptions:
    """Filter, sort and pagination options sent with every catalog request."""
    limit: int = 50
    page: int = 1
    quality: Quality = Quality.ALL
    minimum_rating: int = 0
    query_term: str = ""
    genre: str = ""  # Empty means every genre
    sort_by: SortBy = SortBy.LIKE_COUNT
    order_by: OrderBy = OrderBy.DESC
    with_rt_ratings: bool = False

    def with_option(self, name: str, value: Any) -> "QueryOptions":
        """Return a copy with exactly one field replaced.

        Args:
            name: Name of the option to replace
            value: New value, coerced to the option's type

        Returns:
            New QueryOptions with every other field unchanged

        Raises:
            ValueError: If the option name is unknown or the value is not
                one of the option's legal values
        """
        return replace(self, **{name: coerce_option(name, value)})

    def to_params(self) -> dict[str, str]:
        """Serialize all options as catalog query parameters."""
        return {
            "limit": str(self.limit),
            "page": str(self.page),
            "quality": self.quality.value,
            "minimum_rating": str(self.minimum_rating),
            "query_term": self.query_term,
            "genre": self.genre,
            "sort_by": self.sort_by.value,
            "order_by": self.order_by.value,
            "with_rt_ratings": "true" if self.with_rt_ratings else "false",
        }


OPTION_NAMES: tuple[str, ...] = tuple(f.name for f in fields(QueryOptions))

_ENUM_OPTIONS: dict[str, type[Enum]] = {
    "quality": Quality,
    "sort_by": SortBy,
    "order_by": OrderBy,
}

_INT_OPTIONS = frozenset({"limit", "page", "minimum_rating"})
_STR_OPTIONS = frozenset({"query_term", "genre"})


def coerce_option(name: str, value: Any) -> Any:
    """Coerce a raw option value to the type the option holds.

    Enumerated options only accept one of their legal values. Integer options
    are parsed but never range checked, so a page of 0 or a rating of 12 is
    passed through to the catalog unchanged.

    Args:
        name: Option name
        value: Raw value, e.g. from a UI control

    Returns:
        The coerced value

    Raises:
        ValueError: If the name is unknown or the value cannot be coerced
    """
    if name in _ENUM_OPTIONS:
        enum_type = _ENUM_OPTIONS[name]
        if isinstance(value, enum_type):
            return value
        try:
            return enum_type(value)
        except ValueError:
            legal = ", ".join(str(member.value) for member in enum_type)
            raise ValueError(f"Invalid {name} {value!r}, expected one of: {legal}") from None

    if name in _INT_OPTIONS:
        if isinstance(value, bool):
            raise ValueError(f"Invalid {name} {value!r}, expected an integer")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValueError(f"Invalid {name} {value!r}, expected an integer") from None

    if name in _STR_OPTIONS:
        return "" if value is None else str(value)

    if name == "with_rt_ratings":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise ValueError(f"Invalid {name} {value!r}, expected true or false")

    raise ValueError(f"Unknown option {name!r}")

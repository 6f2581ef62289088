from math import ceil
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def make_pagination(total: int, page: int, limit: int, noun: str = "results") -> dict:
    """
    Pagination summary returned next to a page of records.

    ``noun`` names the counted records, e.g. ``totalResults`` / ``resultsPerPage``.
    """
    return {
        "currentPage": page,
        "totalPages": ceil(total / limit),
        f"total{noun.capitalize()}": total,
        f"{noun}PerPage": limit,
    }


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    count: Optional[int] = None,
    pagination: Optional[dict] = None,
) -> dict:
    """Standard success envelope; absent keys are omitted."""
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    return body


class Envelope(BaseModel, Generic[T]):
    """
    Response model of the success envelope.

    Routes declare ``response_model_exclude_unset=True`` so the keys ``envelope``
    left out stay out of the response.
    """
    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    data: Optional[T] = None
    pagination: Optional[Dict[str, int]] = None

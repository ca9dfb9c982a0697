"""
Identity normalization between MongoDB ``ObjectId`` values and the
canonical string references stored across collections.

Bookings and reviews refer to rooms and bookings by the 24 character hex
string of the target's ``_id``.  Every conversion between the two forms
goes through this module so joins and lookups agree on one
representation.
"""

from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

from .exceptions import InvalidArgument


def is_valid_id(value: Any) -> bool:
    """Return ``True`` if ``value`` is an ObjectId or its hex string form."""
    if isinstance(value, ObjectId):
        return True
    # ObjectId.is_valid also accepts 12 byte strings; references are hex only.
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def to_object_id(value: Any, label: str = "id") -> ObjectId:
    """Convert a reference to a native ``ObjectId``.

    Raises
    ------
    InvalidArgument
        If ``value`` is not a well-formed identifier.  ``label`` names the
        offending field in the error message (e.g. ``"booking ID"``).
    """
    if isinstance(value, ObjectId):
        return value
    if not is_valid_id(value):
        raise InvalidArgument(f"Invalid {label}")
    return ObjectId(value)


def to_reference(value: Any) -> str:
    """Return the canonical string reference for an id in either form."""
    return str(to_object_id(value))


def serialize(document: Any) -> Any:
    """Render a document (or list of documents) as JSON-compatible data.

    ``ObjectId`` values anywhere in the structure become their string
    form and datetimes become ISO 8601 strings.
    """
    return jsonable_encoder(document, custom_encoder={ObjectId: str})

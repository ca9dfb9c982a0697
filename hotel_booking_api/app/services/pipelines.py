"""
Aggregation pipeline stages shared by the room and booking services.

Reviews and bookings reference rooms by the string form of the room's
``_id``.  The stages below project that string onto room documents
(``stringId``) and join on it, so the conversion between native and
string identifiers lives here and nowhere else in query construction.
"""

from typing import Any, Dict, List, Optional

from ..core.db import BOOKINGS, REVIEWS, ROOMS


Stage = Dict[str, Any]


def add_string_id(field: str = "stringId") -> Stage:
    """Project ``str(_id)`` onto each document as ``field``."""
    return {"$addFields": {field: {"$toString": "$_id"}}}


def lookup_room_children(collection: str, as_field: str, local_field: str = "stringId") -> Stage:
    """Join documents of ``collection`` whose ``roomId`` equals ``local_field``."""
    return {
        "$lookup": {
            "from": collection,
            "localField": local_field,
            "foreignField": "roomId",
            "as": as_field,
        }
    }


def add_average_rating() -> Stage:
    """Average the joined ``reviews`` ratings.

    ``$avg`` over an empty array yields ``null``, so a room without
    reviews gets ``averageRating: null`` rather than zero.
    """
    return {"$addFields": {"averageRating": {"$avg": "$reviews.rating"}}}


def rooms_with_rating(match: Optional[Dict[str, Any]] = None) -> List[Stage]:
    """Pipeline producing rooms annotated with ``reviews`` and ``averageRating``."""
    pipeline: List[Stage] = []
    if match:
        pipeline.append({"$match": match})
    pipeline += [
        add_string_id(),
        lookup_room_children(REVIEWS, "reviews"),
        add_average_rating(),
    ]
    return pipeline


def top_rated(limit: int) -> List[Stage]:
    """Rooms by ``averageRating`` descending.

    MongoDB orders ``null`` below every number, so a descending sort puts
    rooms without reviews last.  ``_id`` breaks ties deterministically.
    """
    return rooms_with_rating() + [
        {"$sort": {"averageRating": -1, "_id": 1}},
        {"$limit": limit},
    ]


def room_detail(room_id: Any) -> List[Stage]:
    """Single room with all of its reviews and bookings joined in."""
    return [
        {"$match": {"_id": room_id}},
        add_string_id("roomId"),
        lookup_room_children(REVIEWS, "reviews", local_field="roomId"),
        lookup_room_children(BOOKINGS, "bookings", local_field="roomId"),
        add_average_rating(),
    ]


def lookup_booked_room(as_field: str = "roomDetails") -> Stage:
    """Join the room referenced by a booking's ``roomId``.

    The comparison runs on the string form of the room ``_id`` so that a
    malformed ``roomId`` simply joins nothing instead of failing the
    whole aggregation.
    """
    return {
        "$lookup": {
            "from": ROOMS,
            "let": {"roomId": "$roomId"},
            "pipeline": [
                {"$match": {"$expr": {"$eq": [{"$toString": "$_id"}, "$$roomId"]}}},
            ],
            "as": as_field,
        }
    }


def bookings_for_owner(email: str) -> List[Stage]:
    return [
        {"$match": {"userEmail": email}},
        lookup_booked_room(),
    ]

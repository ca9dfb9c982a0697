"""
Business logic for room listings.

Rooms are read-only here.  Every listing joins the room's reviews at
query time and annotates each room with ``averageRating``, the mean of
its review ratings (``None`` when the room has no reviews).
"""

import math
from typing import Any, Dict, List, Optional

from ..core.db import DocumentStore, store_errors
from ..core.exceptions import InvalidArgument, NotFound
from ..core.ids import to_object_id
from . import pipelines


def _parse_price(value: Optional[Any]) -> Optional[float]:
    """Parse a query-string price bound; ``None`` if missing or not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class RoomService:
    """Read side of the room catalogue."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def list_rooms(self) -> List[Dict[str, Any]]:
        """Return every room with its ``reviews`` and ``averageRating``."""
        with store_errors("Error fetching rooms"):
            return list(self.store.rooms.aggregate(pipelines.rooms_with_rating()))

    def list_rooms_in_price_range(self, min_price: Optional[Any], max_price: Optional[Any]) -> List[Dict[str, Any]]:
        """Return rooms whose ``price`` lies in ``[min_price, max_price]``.

        Both bounds are required and must parse as finite numbers, with
        ``min_price <= max_price``.  Validation happens before any query
        is sent to the store.

        Raises
        ------
        InvalidArgument
            If a bound is missing, unparseable or the range is inverted.
        """
        low = _parse_price(min_price)
        high = _parse_price(max_price)
        if low is None or high is None:
            raise InvalidArgument("Please provide both minPrice and maxPrice")
        if low > high:
            raise InvalidArgument("minPrice must not be greater than maxPrice")
        match = {"price": {"$gte": low, "$lte": high}}
        with store_errors("Error fetching rooms"):
            return list(self.store.rooms.aggregate(pipelines.rooms_with_rating(match)))

    def top_rated_rooms(self, limit: int = 6) -> List[Dict[str, Any]]:
        """Return at most ``limit`` rooms, best average rating first.

        Rooms without reviews (``averageRating`` of ``None``) sort after
        every rated room.
        """
        if limit < 1:
            raise InvalidArgument("limit must be a positive integer")
        with store_errors("Error fetching top rated rooms"):
            return list(self.store.rooms.aggregate(pipelines.top_rated(limit)))

    def get_room_detail(self, room_id: str) -> Dict[str, Any]:
        """Return a room with all of its reviews and bookings.

        Bookings are not filtered by owner: the detail view shows every
        booking made for the room.

        Raises
        ------
        InvalidArgument
            If ``room_id`` is not a well-formed id.
        NotFound
            If no room has this id.
        """
        oid = to_object_id(room_id, "room ID")
        with store_errors("Error fetching room"):
            result = list(self.store.rooms.aggregate(pipelines.room_detail(oid)))
        if not result:
            raise NotFound("Room not found")
        return result[0]

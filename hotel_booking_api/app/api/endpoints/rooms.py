"""
Room endpoints.

All room routes are public.  Rooms come back as stored, plus the joined
``reviews`` and the computed ``averageRating``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from hotel_booking_api.app.api.deps import get_room_service
from hotel_booking_api.app.core.config import settings
from hotel_booking_api.app.core.ids import serialize
from hotel_booking_api.app.services.room_service import RoomService


router = APIRouter()


@router.get("/rooms", summary="List rooms")
def list_rooms(rooms: RoomService = Depends(get_room_service)) -> List[Dict[str, Any]]:
    """Return every room with its average rating."""
    return serialize(rooms.list_rooms())


@router.get("/rooms/price-range", summary="List rooms in a price range")
def list_rooms_by_price(
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    rooms: RoomService = Depends(get_room_service),
) -> List[Dict[str, Any]]:
    """Return rooms priced within ``[minPrice, maxPrice]``.

    Both bounds are required; a missing or non-numeric bound yields 400.
    The bounds are taken as raw strings so that the service reports a
    parse failure with the same envelope as a missing bound.
    """
    return serialize(rooms.list_rooms_in_price_range(min_price, max_price))


@router.get("/rooms/top-rated", summary="Best rated rooms")
def top_rated_rooms(rooms: RoomService = Depends(get_room_service)) -> List[Dict[str, Any]]:
    """Return the best rated rooms; rooms without reviews come last."""
    return serialize(rooms.top_rated_rooms(settings.top_rated_limit))


@router.get("/room/{room_id}", summary="Room details")
def get_room(
    room_id: str = Path(..., description="ID of the room"),
    rooms: RoomService = Depends(get_room_service),
) -> Dict[str, Any]:
    """Return one room with all of its reviews and bookings."""
    return serialize(rooms.get_room_detail(room_id))

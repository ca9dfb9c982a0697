"""
Booking endpoints.

Every booking route requires a bearer token.  Ownership rules are
applied by ``BookingService``: callers can only create, list, change
and delete their own bookings.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status

from hotel_booking_api.app.api.deps import get_booking_service
from hotel_booking_api.app.core.ids import serialize
from hotel_booking_api.app.core.security import get_current_identity
from hotel_booking_api.app.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingOwnerClaim,
    BookingUpdate,
)
from hotel_booking_api.app.schemas.common import ActionResult
from hotel_booking_api.app.services.booking_service import BookingService


router = APIRouter()


@router.post(
    "/book-room",
    response_model=BookingCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Book a room",
)
def book_room(
    data: BookingCreate,
    current_user: dict = Depends(get_current_identity),
    bookings: BookingService = Depends(get_booking_service),
) -> BookingCreated:
    """Create a booking for the authenticated guest.

    ``userEmail`` in the body must be the email of the token.
    """
    booking = bookings.create_booking(current_user, data)
    return BookingCreated(
        message="Room Booked Successfully",
        bookingId=str(booking["_id"]),
        data=serialize(booking),
    )


@router.get("/bookings/{email}", summary="List my bookings")
def list_my_bookings(
    email: str = Path(..., description="Email of the booking owner"),
    current_user: dict = Depends(get_current_identity),
    bookings: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    """Return the caller's bookings, each with the booked room in ``roomDetails``."""
    return serialize(bookings.list_bookings_for_owner(current_user, email))


@router.put("/bookings/{booking_id}", response_model=ActionResult, summary="Change a booking date")
def update_booking(
    data: BookingUpdate,
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(get_current_identity),
    bookings: BookingService = Depends(get_booking_service),
) -> ActionResult:
    """Move one of the caller's bookings to a new ``bookingDate``.

    No other attribute can be changed; unknown fields are rejected.
    """
    bookings.update_booking(current_user, booking_id, data)
    return ActionResult(message="Booking updated successfully")


@router.delete("/bookings/{booking_id}", response_model=ActionResult, summary="Cancel a booking")
def delete_booking(
    claim: BookingOwnerClaim,
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(get_current_identity),
    bookings: BookingService = Depends(get_booking_service),
) -> ActionResult:
    """Permanently delete one of the caller's bookings.

    The body carries the caller's ``userEmail``.
    """
    bookings.delete_booking(current_user, booking_id, claim)
    return ActionResult(message="Booking deleted successfully")

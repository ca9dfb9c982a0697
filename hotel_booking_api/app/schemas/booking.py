"""
Pydantic models for room bookings.

Each write operation has its own input model.  Unknown fields are
rejected so a client cannot slip extra attributes (for instance the
``reviewed`` flag) into a booking document.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    """Schema for booking a room."""

    model_config = ConfigDict(extra="forbid")

    roomId: str = Field(..., min_length=1, description="String form of the booked room's id")
    userEmail: str = Field(..., min_length=1, description="Email of the guest making the booking")
    bookingDate: str = Field(..., min_length=1, examples=["2024-01-01"])


class BookingUpdate(BaseModel):
    """Schema for updating a booking.

    ``bookingDate`` is the only attribute clients may change.
    ``userEmail`` is the caller's claim of ownership; it is checked against
    the token and the stored booking but never written.
    """

    model_config = ConfigDict(extra="forbid")

    userEmail: str = Field(..., min_length=1)
    bookingDate: str = Field(..., min_length=1, examples=["2024-02-01"])


class BookingOwnerClaim(BaseModel):
    """Body of ``DELETE /api/bookings/{id}``."""

    model_config = ConfigDict(extra="forbid")

    userEmail: str = Field(..., min_length=1)


class BookingCreated(BaseModel):
    success: bool = True
    message: str
    bookingId: str
    data: Dict[str, Any]

"""
Service layer.

Each service encapsulates the business logic of one domain and receives
the ``DocumentStore`` it works on at construction time.  ``build_services``
wires them together once per application.
"""

from dataclasses import dataclass

from ..core.db import DocumentStore
from .booking_service import BookingService
from .review_service import ReviewService
from .room_service import RoomService


@dataclass
class Services:
    rooms: RoomService
    bookings: BookingService
    reviews: ReviewService


def build_services(store: DocumentStore) -> Services:
    bookings = BookingService(store)
    return Services(
        rooms=RoomService(store),
        bookings=bookings,
        reviews=ReviewService(store, bookings),
    )

"""
FastAPI dependencies resolving the services built in ``create_app``.

The services live on ``app.state.services`` so that tests can build an
application around an in-memory store.
"""

from fastapi import Request

from ..services import Services
from ..services.booking_service import BookingService
from ..services.review_service import ReviewService
from ..services.room_service import RoomService


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_room_service(request: Request) -> RoomService:
    return get_services(request).rooms


def get_booking_service(request: Request) -> BookingService:
    return get_services(request).bookings


def get_review_service(request: Request) -> ReviewService:
    return get_services(request).reviews

"""Data builders and auth helpers used across the test modules."""

from datetime import datetime, timezone

from bson import ObjectId

from hotel_booking_api.app.core.db import DocumentStore
from hotel_booking_api.app.core.security import create_access_token


ALICE = "a@x.com"
BOB = "b@x.com"


def identity(email: str) -> dict:
    """Claims as returned by ``get_current_identity``."""
    return {"email": email, "exp": 0}


def auth_header(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'email': email})}"}


def add_room(store: DocumentStore, name: str, price: float, **attributes) -> ObjectId:
    document = {"name": name, "price": price, "capacity": 2, **attributes}
    return store.rooms.insert_one(document).inserted_id


def add_review(store: DocumentStore, room_id, rating: float, **fields) -> ObjectId:
    document = {
        "roomId": str(room_id),
        "bookingId": str(ObjectId()),
        "userEmail": ALICE,
        "rating": rating,
        "date": datetime(2024, 1, 1, tzinfo=timezone.utc),
        **fields,
    }
    return store.reviews.insert_one(document).inserted_id


def add_booking(store: DocumentStore, room_id, email: str = ALICE, **fields) -> ObjectId:
    document = {"roomId": str(room_id), "userEmail": email, "bookingDate": "2024-01-01", **fields}
    return store.bookings.insert_one(document).inserted_id

"""
Business logic for guest reviews.

Reviews are created once per stay and never modified.  Creating a
review also flags the booking it was written for as ``reviewed``.  The
two writes are independent: if the second one fails the review stays
in place and the failure is only logged.  ``BookingService.
sync_reviewed_flags`` re-derives the flags from the reviews collection
and repairs any booking left behind.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import DESCENDING

from ..core.db import DocumentStore, store_errors
from ..core.exceptions import StoreFailure
from ..core.ids import is_valid_id, to_object_id, to_reference
from ..core.security import authorize
from ..schemas.review import ReviewCreate
from .booking_service import BookingService


logger = logging.getLogger(__name__)


class ReviewService:
    """Service for handling room reviews."""

    def __init__(self, store: DocumentStore, bookings: BookingService) -> None:
        self.store = store
        self.bookings = bookings

    def add_review(self, current_user: dict, data: ReviewCreate) -> Dict[str, Any]:
        """Store a review and flag its booking as reviewed.

        Returns the inserted review document.

        Raises
        ------
        Forbidden
            If ``data.userEmail`` is not the caller's email.
        InvalidArgument
            If ``data.bookingId`` is malformed.  Checked before writing.
        StoreFailure
            If the review itself could not be inserted.
        """
        email = current_user["email"]
        authorize(email, data.userEmail)
        to_object_id(data.bookingId, "booking ID")

        document = data.model_dump()
        if document["date"] is None:
            document["date"] = datetime.now(timezone.utc)
        elif document["date"].tzinfo is None:
            # Naive timestamps from clients are taken as UTC.
            document["date"] = document["date"].replace(tzinfo=timezone.utc)
        with store_errors("Failed to add review"):
            result = self.store.reviews.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("User %s reviewed room %s (review %s)", email, data.roomId, result.inserted_id)

        if result.acknowledged:
            try:
                if not self.bookings.mark_reviewed(data.bookingId, email):
                    logger.warning("Review %s references unknown booking %s", result.inserted_id, data.bookingId)
            except StoreFailure as e:
                logger.warning(
                    "Review %s stored but booking %s was not marked reviewed: %s",
                    result.inserted_id,
                    data.bookingId,
                    e.error,
                )
        return document

    def list_reviews_for_room(self, room_id: str) -> List[Dict[str, Any]]:
        """Return the reviews of a room, newest first.

        ``room_id`` is normalized to the canonical string reference (so an
        upper-case hex id matches too) and compared with the stored
        ``roomId``.  A malformed id matches nothing.
        """
        reference = to_reference(room_id) if is_valid_id(room_id) else str(room_id)
        with store_errors("Failed to fetch reviews"):
            cursor = self.store.reviews.find({"roomId": reference}).sort("date", DESCENDING)
            return list(cursor)

    def list_all_reviews(self) -> List[Dict[str, Any]]:
        """Return every review, newest first."""
        with store_errors("Failed to fetch reviews"):
            return list(self.store.reviews.find().sort("date", DESCENDING))

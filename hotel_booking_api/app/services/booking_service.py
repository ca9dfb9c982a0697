"""
Business logic for room bookings.

The ``BookingService`` creates, lists, updates and deletes bookings on
behalf of their owner.  Every mutating operation checks ownership
before writing:

* the ``userEmail`` claimed in the request body must equal the email of
  the verified token, and
* for existing bookings, the stored ``userEmail`` must equal it too.

There is no room-existence check and no protection against overlapping
bookings for the same room and date; bookings are plain records.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.db import DocumentStore, store_errors
from ..core.exceptions import NotFound
from ..core.ids import is_valid_id, to_object_id
from ..core.security import authorize
from ..schemas.booking import BookingCreate, BookingOwnerClaim, BookingUpdate
from . import pipelines


logger = logging.getLogger(__name__)


class BookingService:
    """Service for managing bookings."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def create_booking(self, current_user: dict, data: BookingCreate) -> Dict[str, Any]:
        """Store a new booking for the caller.

        Returns the inserted document, including its generated ``_id``.

        Raises
        ------
        Forbidden
            If ``data.userEmail`` is not the caller's email.  Nothing is
            written in that case.
        """
        email = current_user["email"]
        authorize(email, data.userEmail, "You are not authorized to book this room")
        document = data.model_dump()
        with store_errors("Failed to book the room"):
            result = self.store.bookings.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("User %s booked room %s (booking %s)", email, data.roomId, result.inserted_id)
        return document

    def list_bookings_for_owner(self, current_user: dict, email: str) -> List[Dict[str, Any]]:
        """Return ``email``'s bookings, each with the booked room in ``roomDetails``.

        Callers may only list their own bookings.
        """
        authorize(current_user["email"], email)
        with store_errors("Failed to fetch bookings"):
            return list(self.store.bookings.aggregate(pipelines.bookings_for_owner(email)))

    def get_booking(self, booking_id: str) -> Dict[str, Any]:
        """Fetch a single booking.

        Raises
        ------
        InvalidArgument
            If ``booking_id`` is malformed.
        NotFound
            If there is no booking with this id.
        """
        oid = to_object_id(booking_id, "booking ID")
        with store_errors("Failed to fetch the booking"):
            booking = self.store.bookings.find_one({"_id": oid})
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def _get_owned_booking(self, current_user: dict, booking_id: str, claimed_email: str) -> Dict[str, Any]:
        email = current_user["email"]
        authorize(email, claimed_email)
        booking = self.get_booking(booking_id)
        authorize(email, booking.get("userEmail"))
        return booking

    def update_booking(self, current_user: dict, booking_id: str, data: BookingUpdate) -> None:
        """Change the date of one of the caller's bookings.

        Only ``bookingDate`` is written; no other attribute of the stored
        booking is touched.

        Raises
        ------
        Forbidden
            If the claimed or stored owner is not the caller.
        InvalidArgument
            If ``booking_id`` is malformed.
        NotFound
            If no booking matched.
        """
        booking = self._get_owned_booking(current_user, booking_id, data.userEmail)
        with store_errors("Failed to update the booking"):
            result = self.store.bookings.update_one(
                {"_id": booking["_id"], "userEmail": current_user["email"]},
                {"$set": {"bookingDate": data.bookingDate}},
            )
        if result.matched_count == 0:
            # Deleted between the ownership check and the update.
            raise NotFound("Booking not found")
        logger.info("User %s moved booking %s to %s", current_user["email"], booking_id, data.bookingDate)

    def delete_booking(self, current_user: dict, booking_id: str, claim: BookingOwnerClaim) -> None:
        """Delete one of the caller's bookings.

        Deleting is permanent.  A second call for the same id raises
        ``NotFound``.
        """
        booking = self._get_owned_booking(current_user, booking_id, claim.userEmail)
        with store_errors("Failed to cancel the booking"):
            result = self.store.bookings.delete_one({"_id": booking["_id"], "userEmail": current_user["email"]})
        if result.deleted_count == 0:
            raise NotFound("Booking not found")
        logger.info("User %s deleted booking %s", current_user["email"], booking_id)

    def mark_reviewed(self, booking_id: str, owner_email: str) -> bool:
        """Set ``reviewed`` on a booking owned by ``owner_email``.

        Returns ``True`` if a booking matched.  Store errors propagate as
        ``StoreFailure``; callers decide whether they are fatal.
        """
        oid = to_object_id(booking_id, "booking ID")
        with store_errors("Failed to mark the booking as reviewed"):
            result = self.store.bookings.update_one(
                {"_id": oid, "userEmail": owner_email},
                {"$set": {"reviewed": True}},
            )
        return result.matched_count > 0

    def sync_reviewed_flags(self, booking_ids: Optional[List[str]] = None) -> int:
        """Re-derive ``reviewed`` from the reviews collection.

        A booking gets ``reviewed = True`` when a review references it
        through ``bookingId`` and was written by the booking's owner, the
        same rule ``add_review`` applies.  Flags are only ever set, never
        cleared, so running this repeatedly is safe.  Returns the number of
        bookings changed.

        Parameters
        ----------
        booking_ids : Optional[List[str]]
            Limit the repair to these booking ids.  A listed booking is
            only flagged if its owner reviewed it.
        """
        query = {} if booking_ids is None else {"bookingId": {"$in": list(booking_ids)}}
        changed = 0
        with store_errors("Failed to repair reviewed flags"):
            by_author: Dict[str, set] = {}
            for review in self.store.reviews.find(query, {"bookingId": 1, "userEmail": 1}):
                booking_id, author = review.get("bookingId"), review.get("userEmail")
                if isinstance(author, str) and is_valid_id(booking_id):
                    by_author.setdefault(author, set()).add(to_object_id(booking_id))
            for author, oids in by_author.items():
                result = self.store.bookings.update_many(
                    {"_id": {"$in": sorted(oids)}, "userEmail": author, "reviewed": {"$ne": True}},
                    {"$set": {"reviewed": True}},
                )
                changed += result.modified_count
        if changed:
            logger.info("Marked %s booking(s) as reviewed", changed)
        return changed

"""
Review endpoints.

Anyone can read reviews; writing one requires a bearer token whose
email matches the review's ``userEmail``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status

from hotel_booking_api.app.api.deps import get_review_service
from hotel_booking_api.app.core.ids import serialize
from hotel_booking_api.app.core.security import get_current_identity
from hotel_booking_api.app.schemas.review import ReviewCreate, ReviewCreated
from hotel_booking_api.app.services.review_service import ReviewService


router = APIRouter()


@router.post(
    "/review",
    response_model=ReviewCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
)
def create_review(
    data: ReviewCreate,
    current_user: dict = Depends(get_current_identity),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewCreated:
    """Create a review and flag the reviewed booking.

    The review is kept even if flagging the booking fails.
    """
    review = reviews.add_review(current_user, data)
    return ReviewCreated(message="Review added successfully", reviewId=str(review["_id"]))


@router.get("/reviews/{room_id}", summary="Reviews of a room")
def list_room_reviews(
    room_id: str = Path(..., description="ID of the room"),
    reviews: ReviewService = Depends(get_review_service),
) -> List[Dict[str, Any]]:
    return serialize(reviews.list_reviews_for_room(room_id))


@router.get("/reviews", summary="All reviews")
def list_reviews(reviews: ReviewService = Depends(get_review_service)) -> List[Dict[str, Any]]:
    """Return every review, newest first."""
    return serialize(reviews.list_all_reviews())

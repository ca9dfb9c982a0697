"""
Pydantic schemas for guest reviews.

A review is written once per stay and references both the room and the
booking it was left for.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewCreate(BaseModel):
    """Schema for creating a new review."""

    model_config = ConfigDict(extra="forbid")

    roomId: str = Field(..., min_length=1, description="String form of the reviewed room's id")
    bookingId: str = Field(..., min_length=1, description="Booking the review was left for")
    userEmail: str = Field(..., min_length=1)
    rating: float = Field(..., ge=1, le=5, description="Rating from 1 to 5, fractions allowed")
    comment: Optional[str] = Field(None, description="Optional textual comment")
    userName: Optional[str] = Field(None, max_length=200)
    # Filled with the current time when omitted.
    date: Optional[datetime] = None

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace from the comment and enforce a maximum length."""
        if v is None:
            return None
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Comment must be 1000 characters or fewer")
        return v


class ReviewCreated(BaseModel):
    success: bool = True
    message: str
    reviewId: str

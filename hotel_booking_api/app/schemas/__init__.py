"""
Pydantic schema definitions for API payloads.

Room documents are returned as stored (plus computed fields), so only
bookings and reviews, which clients write, have input models here.
"""

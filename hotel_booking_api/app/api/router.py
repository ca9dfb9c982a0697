"""
Top-level API router.

Aggregates the domain routers.  ``main.py`` mounts it under ``/api``;
the service index lives outside it at ``/``.
"""

from fastapi import APIRouter

from .endpoints import bookings, reviews, rooms

router = APIRouter()

# Endpoint modules declare full paths (``/rooms``, ``/room/{id}``,
# ``/book-room`` ...) since the public URLs do not share per-domain prefixes.
router.include_router(rooms.router, tags=["rooms"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(reviews.router, tags=["reviews"])

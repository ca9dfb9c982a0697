"""
Endpoint modules.

Each module defines an ``APIRouter`` for one domain (rooms, bookings,
reviews).  The routers are aggregated in ``api/router.py``.
"""

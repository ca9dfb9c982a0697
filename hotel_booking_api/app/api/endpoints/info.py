"""
Service index.

``GET /`` describes the API: its name, version and the public routes.
It is the landing page a browser shows when pointed at the server.
"""

from typing import Any, Dict

from fastapi import APIRouter

from hotel_booking_api.app.core.config import settings


router = APIRouter()

PUBLIC_ROUTES = [
    {"method": "GET", "path": "/api/rooms", "description": "Get all rooms"},
    {"method": "GET", "path": "/api/rooms/price-range", "description": "Get rooms by price range"},
    {"method": "GET", "path": "/api/rooms/top-rated", "description": "Get top rated rooms"},
    {"method": "GET", "path": "/api/room/{id}", "description": "Get room details"},
    {"method": "GET", "path": "/api/reviews/{id}", "description": "Get reviews of a room"},
    {"method": "GET", "path": "/api/reviews", "description": "Get all reviews"},
]


@router.get("/", summary="Service index")
def get_index() -> Dict[str, Any]:
    return {
        "message": f"Welcome to the {settings.project_name}",
        "version": settings.api_version,
        "api": PUBLIC_ROUTES,
    }

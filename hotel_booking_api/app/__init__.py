"""
Application package.

``main`` holds the FastAPI application; ``core`` the configuration,
logging, security and database plumbing; ``services`` the business
logic; ``schemas`` the request and response models; ``api`` the
routers.  Import ``hotel_booking_api.app.main:app`` to serve the API.
"""

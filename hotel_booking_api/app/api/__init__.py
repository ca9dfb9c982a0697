"""HTTP layer: routers and the dependencies they resolve services with."""

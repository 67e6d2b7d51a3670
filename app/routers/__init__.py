"""Page routers package."""

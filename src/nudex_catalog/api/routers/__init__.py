"""API routers for nudex-catalog."""

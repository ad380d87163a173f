"""HTTP layer (FastAPI routers, dependencies and exception handlers)."""

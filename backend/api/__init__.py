"""
API module.

FastAPI app factory, dependency wiring, routers and error handlers.
"""

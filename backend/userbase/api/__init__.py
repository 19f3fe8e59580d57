"""API Layer - FastAPI routes, handlers and transport-level error handlers.

Invariants:
    - Routes registered explicitly from main.create_app (no auto-discovery)
    - Every non-2xx response (except /health) uses the {statusCode, error, message} body
"""

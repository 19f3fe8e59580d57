"""Services Layer - use cases over repository Protocols.

Invariants:
    - Services never import FastAPI, Starlette, or SQLAlchemy
    - Every StorageError is re-raised as an ApplicationError before leaving a service
"""

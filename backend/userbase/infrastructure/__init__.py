"""Infrastructure Layer - database session manager, repositories, logging setup.

Invariants:
    - The only layer that imports SQLAlchemy engine/session APIs
    - Store failures leave this layer as StorageError (core/errors.py)
"""

"""Core Layer - domain entities, error taxonomy and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO, no async except in Protocol signatures
"""

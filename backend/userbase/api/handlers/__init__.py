"""Request Handlers - one class per resource, one method per operation.

Invariants:
    - Handlers contain no business logic: one service call per operation
    - Handlers translate error kinds to status codes and never leak internals
"""

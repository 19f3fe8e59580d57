"""Boundary Protocols - contracts between the service layer and persistence.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy
    - Absence is None, never an exception
    - Implementations raise StorageError (core/errors.py) and nothing else for store failures

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain AsyncMock fakes
      (ADR: no inheritance hierarchy at the boundary)
"""

from typing import Protocol

from userbase.core.user import NewUser, User, UserLookupField


class UserRepository(Protocol):
    """Contract for user persistence - implemented in infrastructure/."""
    async def find_by_id(self, user_id: str) -> User | None: ...
    async def find_by_field(
        self, field: UserLookupField, value: str,
    ) -> User | None: ...
    async def create(self, data: NewUser) -> User: ...

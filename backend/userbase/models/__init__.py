"""ORM Models - SQLAlchemy declarative models backing the repositories.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete once the package is imported
"""

from userbase.models.user import UserRecord  # noqa: F401

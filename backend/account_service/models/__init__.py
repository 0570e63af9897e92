"""ORM Models — SQLAlchemy declarative models for accounts and user records.

Invariants:
    - All models inherit from Base (db/base.py)
    - Account and UserRecord are independent tables; overlapping fields are not shared

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all runs
"""

from account_service.models.account import Account  # noqa: F401
from account_service.models.user_record import UserRecord  # noqa: F401

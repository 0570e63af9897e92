"""Account ORM — authentication identity used for signup and login.

Invariants:
    - id is UUID primary key (generated on insert)
    - email is unique (DB constraint closes the signup check-then-act race)
    - phone is exactly 10 digits (enforced by validation before insert)
    - rows are never updated after creation

Design Decisions:
    - password_hash column name makes it impossible to confuse with plaintext
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from account_service.db.base import Base


class Account(Base):
    """Registered login identity."""
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    phone: Mapped[str] = mapped_column(String(10), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self, include_secret: bool = False) -> dict:
        data = {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "created_at": self.created_at.isoformat(),
        }
        if include_secret:
            data["password_hash"] = self.password_hash
        return data

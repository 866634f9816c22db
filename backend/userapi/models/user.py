"""User ORM — persists user accounts.

Invariants:
    - id is a UUID primary key supplied by the caller (services generate it)
    - email is unique and case-sensitive (stored exactly as submitted)
    - hashed_password holds a bcrypt hash, never plaintext
    - created is assigned at insert time (UTC)

Design Decisions:
    - created doubles as the listing order key (ties broken by id): UUID4 keys carry no insertion order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from userapi.db.base import Base


class User(Base):
    """A user account row."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)
    admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_users_created_id", "created", "id"),
    )

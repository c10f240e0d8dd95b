"""
Happy Thoughts API — Thought SQLAlchemy Model
===============================================

What:  ORM model for the `thoughts` table.
Who:   Used by ThoughtService for CRUD statements and by alembic for schema management.

Table Design:
    - id: UUID primary key; a malformed id is any string that isn't a UUID
    - message: trimmed text, 5..140 characters (enforced in thoughts_api.validation)
    - hearts: like counter, only changed by `hearts = hearts + 1`
    - created_at: UTC, set once at creation

    Index on created_at DESC serves GET /thoughts (newest 20 first).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from thoughts_api.database import Base
from thoughts_api.validation import MESSAGE_MAX_LENGTH


class Thought(Base):
    """
    A single short text post with a like counter.

    Query Patterns:
        - List: SELECT ... ORDER BY created_at DESC LIMIT 20
        - Like: UPDATE ... SET hearts = hearts + 1 WHERE id = :id RETURNING ...
        - Delete: DELETE ... WHERE id = :id RETURNING ...
    """

    __tablename__ = "thoughts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    message: Mapped[str] = mapped_column(
        String(MESSAGE_MAX_LENGTH),
        nullable=False,
    )

    hearts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint("hearts >= 0", name="ck_thoughts_hearts_non_negative"),
        Index("idx_thoughts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Thought(id={self.id}, hearts={self.hearts}, created_at='{self.created_at}')>"

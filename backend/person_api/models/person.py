"""Person ORM — persists the single Person resource.

Invariants:
    - id is an autoincrement integer primary key, never reassigned
    - email is UNIQUE (uq_persons_email): the database decides duplicates
    - password_hash holds the bcrypt digest only
    - picture is NULL until an upload succeeds

Design Decisions:
    - Integer id over UUID: list ordering by id desc doubles as "newest first"
    - Named unique constraint: repository reports it in ConstraintViolation
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from person_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Person(Base):
    """Registered person with optional profile picture."""
    __tablename__ = "persons"
    __table_args__ = (
        UniqueConstraint("email", name="uq_persons_email"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    picture: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Person id={self.id} email={self.email!r}>"

"""Person Repository — SQLAlchemy implementation of the PersonRepository protocol.

Invariants:
    - save() commits and refreshes: returned record carries its database id
    - Unique-key violations raised as ConstraintViolation after rollback;
      every other IntegrityError re-raised untouched
    - find_all() orders by id descending
    - remove() returns the record as it was before deletion

Design Decisions:
    - Vendor detection isolated in _is_unique_violation: Postgres SQLSTATE 23505,
      SQLite "UNIQUE constraint failed" (ADR: only engine-specific code in the repo)
    - merge() is a plain attribute apply on an already-loaded record; the service
      resolves existence and authorization before calling it
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from person_api.core.repository_protocols import ConstraintViolation
from person_api.models.person import Person

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
MUTABLE_FIELDS = frozenset({"name", "email", "password_hash", "picture"})


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    return "UNIQUE constraint failed" in str(orig)


def _constraint_name(exc: IntegrityError) -> str:
    name = getattr(getattr(exc.orig, "__cause__", None), "constraint_name", None)
    return name or getattr(exc.orig, "constraint_name", None) or "uq_persons_email"


class SqlPersonRepository:
    """Person persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def create(self, fields: dict[str, Any]) -> Person:
        """Build an unsaved draft."""
        return Person(**fields)

    async def save(self, person: Person) -> Person:
        self.db.add(person)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_unique_violation(e):
                raise ConstraintViolation(_constraint_name(e)) from e
            raise
        await self.db.refresh(person)
        return person

    async def find_one_by_id(self, person_id: int) -> Person | None:
        return await self.db.get(Person, person_id)

    async def find_all(self) -> list[Person]:
        result = await self.db.execute(
            select(Person).order_by(Person.id.desc()),
        )
        return list(result.scalars().all())

    async def merge(self, person: Person, fields: dict[str, Any]) -> Person:
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot merge unknown fields: {sorted(unknown)}")
        for key, value in fields.items():
            setattr(person, key, value)
        return person

    async def remove(self, person: Person) -> Person:
        await self.db.delete(person)
        await self.db.commit()
        logger.debug("Person row deleted", extra={"person_id": person.id})
        return person

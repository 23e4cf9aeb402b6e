"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Unique-key violations surface as ConstraintViolation, never as a driver error

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - ConstraintViolation lives here, not in errors.py: it is a collaborator
      signal the service translates, not a user-facing error
"""

from datetime import datetime
from typing import Any, Protocol


class ConstraintViolation(Exception):
    """Persistence rejected a write because an integrity rule was violated."""

    def __init__(self, constraint: str, message: str = "Integrity constraint violated"):
        super().__init__(message)
        self.constraint = constraint


class PersonLike(Protocol):
    """Structural contract for Person records flowing through the service.

    Avoids coupling the core to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int
    name: str
    email: str
    password_hash: str
    picture: str | None
    created_at: datetime
    updated_at: datetime


class PersonRepository(Protocol):
    """Contract for Person persistence — implemented by shell."""
    def create(self, fields: dict[str, Any]) -> PersonLike: ...
    async def save(self, person: PersonLike) -> PersonLike: ...
    async def find_one_by_id(self, person_id: int) -> PersonLike | None: ...
    async def find_all(self) -> list[PersonLike]: ...
    async def merge(self, person: PersonLike, fields: dict[str, Any]) -> PersonLike: ...
    async def remove(self, person: PersonLike) -> PersonLike: ...


class PasswordHasher(Protocol):
    """Contract for one-way password digests — implemented by shell."""
    async def hash(self, plaintext: str) -> str: ...
    async def verify(self, plaintext: str, digest: str) -> bool: ...


class BlobStore(Protocol):
    """Contract for picture blob storage — implemented by shell."""
    async def write(self, filename: str, content: bytes) -> str: ...

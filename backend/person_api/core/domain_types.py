"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PersonId wraps the integer primary key — never a bare int in domain logic
    - CallerIdentity is trusted as already verified (token checked by the shell)
    - PictureUpload.size is always len(content), never a client-declared value

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost
    - frozen dataclasses for value objects: cannot be mutated between checks
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PersonId = NewType("PersonId", int)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated requester, resolved from the bearer token `sub` claim."""
    subject_id: PersonId
    email: str | None = None


@dataclass(frozen=True)
class PictureUpload:
    """Raw picture payload handed to the record manager."""
    content: bytes
    content_type: str | None = None
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

"""Access & Upload Policy — pure decisions consumed by the record manager.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Policy checks return an error message on violation, None on success
    - Picture filename depends only on the record id, never on the uploaded name

Design Decisions:
    - AccessPolicy is a plain callable: alternate policies (roles, admin override)
      plug into PersonService without touching its operations
    - PicturePolicy built from settings by the shell: core never reads config
"""

from collections.abc import Callable
from dataclasses import dataclass

from person_api.core.domain_types import CallerIdentity
from person_api.core.repository_protocols import PersonLike

AccessPolicy = Callable[[CallerIdentity, PersonLike], bool]


def is_owner(caller: CallerIdentity, record: PersonLike) -> bool:
    """Self-ownership: a person may only act on their own record."""
    return record.id == caller.subject_id


@dataclass(frozen=True)
class PicturePolicy:
    """Upload limits and naming for profile pictures."""
    min_bytes: int = 1000
    max_bytes: int = 10 * 1024 * 1024
    extension: str = ".png"
    content_types: tuple[str, ...] = ("image/png", "image/jpeg")


def check_picture_size(size: int, policy: PicturePolicy) -> str | None:
    """Reject empty/corrupt payloads below the minimum and oversized ones."""
    if size < policy.min_bytes:
        return f"File too small: {size} bytes (minimum {policy.min_bytes})"
    if size > policy.max_bytes:
        return f"File too large: {size} bytes (maximum {policy.max_bytes})"
    return None


def check_picture_type(content_type: str | None, policy: PicturePolicy) -> str | None:
    """Unknown content type passes; a declared type must be allowed."""
    if content_type is None or not policy.content_types:
        return None
    if content_type.lower() not in policy.content_types:
        return (
            f"Unsupported file type '{content_type}'. "
            f"Allowed: {', '.join(policy.content_types)}"
        )
    return None


def validate_picture_upload(
    size: int, content_type: str | None, policy: PicturePolicy,
) -> str | None:
    """Chain all upload checks. Returns first error or None."""
    return (
        check_picture_size(size, policy)
        or check_picture_type(content_type, policy)
    )


def picture_filename(person_id: int, policy: PicturePolicy) -> str:
    """Deterministic blob name: one picture per person, overwritten on upload."""
    return f"{person_id}{policy.extension}"

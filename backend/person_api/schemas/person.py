"""Person Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - PersonCreate.name: 1-100 chars, stripped, non-blank
    - PersonCreate.email: stripped and lower-cased, then validated as an address
    - password: at least 4 chars and at most 72 UTF-8 bytes (bcrypt input limit),
      never echoed back
    - PersonUpdate accepts only name and password; email is immutable via the API

Design Decisions:
    - Email normalization runs in "before" mode so padded input reaches EmailStr clean
    - PersonResponse built from ORM attributes (from_attributes) — no password_hash field
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MAX_BYTES = 72


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password cannot exceed {PASSWORD_MAX_BYTES} bytes")
    return v


class PersonCreate(BaseModel):
    """Registration payload."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=4)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def password_fits_hasher(cls, v: str) -> str:
        return _check_password_bytes(v)


class PersonUpdate(BaseModel):
    """Partial update — omitted fields stay untouched."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=4)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_name(v) if v is not None else v

    @field_validator("password")
    @classmethod
    def password_fits_hasher(cls, v: str | None) -> str | None:
        return _check_password_bytes(v) if v is not None else v


class PersonResponse(BaseModel):
    """Public-facing person data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    picture: str | None = None
    created_at: datetime
    updated_at: datetime

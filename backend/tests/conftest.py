"""Root conftest — shared test configuration."""

import os
import tempfile
from pathlib import Path

# Settings are cached on first import: environment must be set before any app import
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-bytes-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "PICTURE_DIR",
    str(Path(tempfile.gettempdir()) / "person-api-test-pictures"),
)

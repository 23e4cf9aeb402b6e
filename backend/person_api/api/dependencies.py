"""API Dependencies — wires collaborators into PersonService per request.

Invariants:
    - One PersonService per request, bound to that request's AsyncSession
    - get_current_caller raises AuthenticationError before any route logic runs
    - Hasher and blob store are process-wide (stateless), built once from settings

Design Decisions:
    - FastAPI Depends over a DI container: tests swap any collaborator via
      app.dependency_overrides
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from person_api.config import Settings, get_settings
from person_api.core.domain_types import CallerIdentity
from person_api.core.errors import AuthenticationError
from person_api.core.repository_protocols import BlobStore, PasswordHasher
from person_api.infrastructure.blob_store import FilesystemBlobStore
from person_api.infrastructure.database import get_db
from person_api.infrastructure.identity import decode_access_token
from person_api.infrastructure.password_hasher import BcryptPasswordHasher
from person_api.infrastructure.person_repository import SqlPersonRepository
from person_api.services.person_service import PersonService

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_blob_store() -> BlobStore:
    return FilesystemBlobStore(get_settings().picture_dir)


def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    """Resolve the authenticated requester from the Authorization header."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return decode_access_token(credentials.credentials, settings)


def get_person_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> PersonService:
    return PersonService(
        repository=SqlPersonRepository(db),
        hasher=hasher,
        blob_store=blob_store,
        picture_policy=settings.picture_policy(),
    )

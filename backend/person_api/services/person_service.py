"""Person Service — record manager for registration, lookup, mutation and pictures.

Invariants:
    - Plaintext passwords cross the hasher boundary exactly once and are never persisted
    - Only ConstraintViolation is translated (to ConflictError); every other failure
      propagates unchanged
    - NotFound is decided before authorization; authorization before any write
    - Picture blob is written before the record references it (write-before-link)
    - Upload policy is checked before any lookup or write

Design Decisions:
    - Collaborators injected (repository, hasher, blob store, access policy):
      service has no knowledge of SQLAlchemy, bcrypt or the filesystem
    - update is an explicit read-then-merge so NotFound and Forbidden stay distinct
    - upload targets the caller's own record: "whose picture" == "who is asking"
"""

import logging

from person_api.core.access_policy import (
    AccessPolicy, PicturePolicy, is_owner, picture_filename, validate_picture_upload,
)
from person_api.core.domain_types import CallerIdentity, PersonId, PictureUpload
from person_api.core.errors import (
    ConflictError, ErrorContext, ForbiddenError, InvalidUploadError,
    ResourceNotFoundError,
)
from person_api.core.repository_protocols import (
    BlobStore, ConstraintViolation, PasswordHasher, PersonLike, PersonRepository,
)

logger = logging.getLogger(__name__)


class PersonService:
    """Owns the Person lifecycle and its authorization rules."""

    def __init__(
        self,
        repository: PersonRepository,
        hasher: PasswordHasher,
        blob_store: BlobStore,
        picture_policy: PicturePolicy | None = None,
        access_policy: AccessPolicy = is_owner,
    ):
        self.repository = repository
        self.hasher = hasher
        self.blob_store = blob_store
        self.picture_policy = picture_policy or PicturePolicy()
        self.access_policy = access_policy

    async def create(self, name: str, email: str, password: str) -> PersonLike:
        """Register a person. Duplicate email -> ConflictError."""
        password_hash = await self.hasher.hash(password)
        draft = self.repository.create({
            "name": name,
            "email": email,
            "password_hash": password_hash,
        })
        try:
            person = await self.repository.save(draft)
        except ConstraintViolation as e:
            logger.info(
                f"Rejected duplicate registration ({e.constraint})",
                extra={"error_code": "EMAIL_ALREADY_REGISTERED"},
            )
            raise ConflictError() from e
        logger.info("Person registered", extra={"person_id": person.id})
        return person

    async def find_all(self) -> list[PersonLike]:
        """All persons, newest id first."""
        return await self.repository.find_all()

    async def find_one(self, person_id: PersonId) -> PersonLike:
        person = await self.repository.find_one_by_id(person_id)
        if person is None:
            raise ResourceNotFoundError(
                "Person", person_id, ErrorContext(person_id=person_id),
            )
        return person

    async def update(
        self,
        person_id: PersonId,
        caller: CallerIdentity,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> PersonLike:
        """Apply a partial update to the caller's own record."""
        changes: dict = {}
        if name is not None:
            changes["name"] = name
        if password is not None:
            changes["password_hash"] = await self.hasher.hash(password)

        person = await self.find_one(person_id)
        self._authorize(caller, person)

        person = await self.repository.merge(person, changes)
        person = await self.repository.save(person)
        logger.info(
            f"Person updated ({', '.join(sorted(changes)) or 'no fields'})",
            extra={"person_id": person.id, "caller_id": caller.subject_id},
        )
        return person

    async def remove(self, person_id: PersonId, caller: CallerIdentity) -> PersonLike:
        """Delete the caller's own record and return its last-known state."""
        person = await self.find_one(person_id)
        self._authorize(caller, person)
        removed = await self.repository.remove(person)
        logger.info(
            "Person removed",
            extra={"person_id": person_id, "caller_id": caller.subject_id},
        )
        return removed

    async def upload_picture(
        self, upload: PictureUpload, caller: CallerIdentity,
    ) -> PersonLike:
        """Store the caller's profile picture and link it to their record."""
        error = validate_picture_upload(
            upload.size, upload.content_type, self.picture_policy,
        )
        if error:
            raise InvalidUploadError(
                error, ErrorContext(caller_id=caller.subject_id),
            )

        person = await self.find_one(caller.subject_id)
        filename = picture_filename(person.id, self.picture_policy)
        await self.blob_store.write(filename, upload.content)

        person.picture = filename
        person = await self.repository.save(person)
        logger.info(
            f"Picture stored as {filename} ({upload.size} bytes)",
            extra={"person_id": person.id, "caller_id": caller.subject_id},
        )
        return person

    def _authorize(self, caller: CallerIdentity, person: PersonLike) -> None:
        if not self.access_policy(caller, person):
            logger.warning(
                "Access denied",
                extra={
                    "person_id": person.id, "caller_id": caller.subject_id,
                    "error_code": "FORBIDDEN",
                },
            )
            raise ForbiddenError(
                context=ErrorContext(
                    person_id=person.id, caller_id=caller.subject_id,
                ),
            )

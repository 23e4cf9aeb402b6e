"""Person Routes — thin HTTP surface over PersonService.

Invariants:
    - Routes never contain business logic: shape validation (Pydantic) + delegation
    - Registration and reads are public; mutations require a bearer token
    - Responses never include password_hash
    - Domain errors propagate to the global handler (api/error_handlers.py)

Design Decisions:
    - upload-picture declared before /{person_id} routes: static path wins
    - DELETE returns the removed record (200) so clients see its last state
    - Uploads read at most max_bytes + 1: oversized bodies are never buffered whole
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from person_api.api.dependencies import get_current_caller, get_person_service
from person_api.core.domain_types import CallerIdentity, PersonId, PictureUpload
from person_api.schemas.person import PersonCreate, PersonResponse, PersonUpdate
from person_api.services.person_service import PersonService

router = APIRouter(prefix="/api/v1/persons", tags=["persons"])


@router.post(
    "", response_model=PersonResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_person(
    body: PersonCreate,
    service: PersonService = Depends(get_person_service),
):
    """Register a new person."""
    person = await service.create(body.name, body.email, body.password)
    return PersonResponse.model_validate(person)


@router.get("", response_model=list[PersonResponse])
async def list_persons(
    service: PersonService = Depends(get_person_service),
):
    """List every person, newest first."""
    persons = await service.find_all()
    return [PersonResponse.model_validate(p) for p in persons]


@router.post("/upload-picture", response_model=PersonResponse)
async def upload_picture(
    file: UploadFile = File(...),
    caller: CallerIdentity = Depends(get_current_caller),
    service: PersonService = Depends(get_person_service),
):
    """Upload the caller's profile picture."""
    # one byte past the limit is enough for the size gate to reject it
    content = await file.read(service.picture_policy.max_bytes + 1)
    person = await service.upload_picture(
        PictureUpload(
            content=content,
            content_type=file.content_type,
            filename=file.filename,
        ),
        caller,
    )
    return PersonResponse.model_validate(person)


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: int,
    service: PersonService = Depends(get_person_service),
):
    person = await service.find_one(PersonId(person_id))
    return PersonResponse.model_validate(person)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int,
    body: PersonUpdate,
    caller: CallerIdentity = Depends(get_current_caller),
    service: PersonService = Depends(get_person_service),
):
    """Partially update the caller's own record."""
    person = await service.update(
        PersonId(person_id), caller,
        name=body.name, password=body.password,
    )
    return PersonResponse.model_validate(person)


@router.delete("/{person_id}", response_model=PersonResponse)
async def delete_person(
    person_id: int,
    caller: CallerIdentity = Depends(get_current_caller),
    service: PersonService = Depends(get_person_service),
):
    """Delete the caller's own record."""
    person = await service.remove(PersonId(person_id), caller)
    return PersonResponse.model_validate(person)

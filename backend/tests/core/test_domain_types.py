"""Domain Types — identity wrappers and value objects.

Tests:
    - PersonId wraps int
    - CallerIdentity and PictureUpload are immutable
    - PictureUpload.size derives from content
"""

import dataclasses

import pytest

from person_api.core.domain_types import CallerIdentity, PersonId, PictureUpload


def test_person_id_wraps_int():
    assert PersonId(5) == 5


def test_caller_identity_is_frozen():
    caller = CallerIdentity(subject_id=PersonId(1), email="a@x.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        caller.subject_id = PersonId(2)


def test_picture_upload_size_is_content_length():
    assert PictureUpload(content=b"abc").size == 3
    assert PictureUpload(content=b"").size == 0

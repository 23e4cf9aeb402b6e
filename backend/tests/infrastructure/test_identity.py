"""Caller Identity — JWT round trip into CallerIdentity and rejection paths."""

import jwt
import pytest

from person_api.config import Settings
from person_api.core.errors import AuthenticationError
from person_api.infrastructure.identity import create_access_token, decode_access_token

SECRET = "identity-test-secret-with-32-plus-bytes"


def _settings(**overrides) -> Settings:
    return Settings(jwt_secret_key=SECRET, **overrides)


def test_token_resolves_caller():
    settings = _settings()
    token = create_access_token(7, settings, email="caio@x.com")
    caller = decode_access_token(token, settings)
    assert caller.subject_id == 7
    assert caller.email == "caio@x.com"


def test_expired_token_rejected():
    settings = _settings()
    token = create_access_token(7, settings, ttl_seconds=-10)
    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)


def test_wrong_signature_rejected():
    token = create_access_token(7, _settings())
    with pytest.raises(AuthenticationError):
        decode_access_token(token, Settings(jwt_secret_key="another-secret-with-32-plus-bytes!!"))


def test_non_numeric_subject_rejected():
    token = jwt.encode({"sub": "bot", "exp": 4102444800}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_access_token(token, _settings())


def test_audience_and_issuer_enforced_when_configured():
    settings = _settings(jwt_audience="person-api", jwt_issuer="https://issuer.test")
    token = create_access_token(3, settings)
    assert decode_access_token(token, settings).subject_id == 3

    foreign = create_access_token(3, _settings(jwt_audience="other-api", jwt_issuer="https://issuer.test"))
    with pytest.raises(AuthenticationError):
        decode_access_token(foreign, settings)

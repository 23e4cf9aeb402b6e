"""Bcrypt Password Hasher — one-way digests with per-call salt."""

from person_api.infrastructure.password_hasher import BcryptPasswordHasher


async def test_hash_is_not_plaintext_and_verifies():
    hasher = BcryptPasswordHasher(rounds=4)
    digest = await hasher.hash("1254")
    assert digest != "1254"
    assert digest.startswith("$2")
    assert await hasher.verify("1254", digest)
    assert not await hasher.verify("wrong", digest)


async def test_hash_is_salted():
    hasher = BcryptPasswordHasher(rounds=4)
    assert await hasher.hash("same") != await hasher.hash("same")


async def test_verify_malformed_digest_returns_false():
    assert not await BcryptPasswordHasher(rounds=4).verify("x", "not-a-bcrypt-hash")

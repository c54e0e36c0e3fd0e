from __future__ import annotations

from cocktail_api.core.security import hash_password, needs_rehash, verify_password


def test_hash_verifies_and_differs_from_plaintext():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not needs_rehash(hashed)


def test_same_password_hashes_differently():
    assert hash_password("repeat") != hash_password("repeat")


def test_missing_or_malformed_hash_never_verifies():
    assert verify_password("anything", None) is False
    assert verify_password("anything", "") is False
    assert verify_password("anything", "not-an-argon2-hash") is False

# tests/test_security.py
"""Tests for password hashing helpers."""

from kridart.core.security import hash_password, verify_password


def test_hash_round_trip() -> None:
    hashed = hash_password("correct horse", rounds=4)
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_hashes_are_salted() -> None:
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_hash_embeds_cost_factor() -> None:
    assert hash_password("pw", rounds=5).startswith("$2b$05$")


def test_non_bcrypt_hash_never_matches() -> None:
    assert not verify_password("pw", "pw")
    assert not verify_password("pw", "")


def test_malformed_bcrypt_hash_never_matches() -> None:
    assert not verify_password("pw", "$2b$04$not-a-real-hash")


def test_password_beyond_bcrypt_limit_never_matches() -> None:
    hashed = hash_password("p" * 72, rounds=4)
    assert verify_password("p" * 72, hashed)
    assert not verify_password("p" * 72 + "WRONG", hashed)

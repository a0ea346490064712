from datetime import timedelta

from jose import jwt

from codemaster.config import settings
from codemaster.core.security import (
    create_access_token,
    decode_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)


def test_access_token_round_trip():
    token = create_access_token({"sub": "7", "username": "alice", "role": "user"})
    payload = decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == "7"
    assert payload["typ"] == "access"


def test_access_token_rejects_other_typ():
    foreign = jwt.encode({"sub": "1", "typ": "refresh"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    assert decode_token(foreign) is not None
    assert decode_access_token(foreign) is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-5))
    assert decode_access_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "1", "typ": "access"}, "not-the-secret", algorithm=settings.ALGORITHM)
    assert decode_access_token(forged) is None


def test_password_hash_verifies_only_matching_password():
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)

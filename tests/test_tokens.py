from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from resume_backend.application.services.password_hashing import BcryptPasswordHasher
from resume_backend.application.services.tokens import JwtTokenCodec
from resume_backend.domain.users.exceptions import InvalidTokenError

SECRET = "codec-test-secret"


@pytest.fixture()
def codec() -> JwtTokenCodec:
    return JwtTokenCodec(SECRET, ttl=timedelta(days=7))


def test_issue_embeds_identity_and_seven_day_expiry(codec: JwtTokenCodec) -> None:
    now = datetime(2026, 1, 1, 12, 0, 0, 654321, tzinfo=UTC)

    issued = codec.issue("user-1", "a@x.io", now)

    payload = jwt.decode(
        issued.token, SECRET, algorithms=["HS256"], options={"verify_exp": False}
    )
    assert payload["userId"] == "user-1"
    assert payload["email"] == "a@x.io"
    assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60
    assert payload["jti"] == issued.claims.token_id
    assert issued.claims.expires_at == datetime(2026, 1, 8, 12, 0, 0, tzinfo=UTC)


def test_tokens_issued_in_same_second_differ(codec: JwtTokenCodec) -> None:
    now = datetime.now(UTC)

    first = codec.issue("user-1", "a@x.io", now)
    second = codec.issue("user-1", "a@x.io", now)

    assert first.token != second.token


def test_decode_rejects_expired_token(codec: JwtTokenCodec) -> None:
    issued = codec.issue("user-1", "a@x.io", datetime.now(UTC) - timedelta(days=8))

    with pytest.raises(InvalidTokenError) as exc_info:
        codec.decode(issued.token)

    assert exc_info.value.message == "Session token expired"


def test_decode_rejects_tampered_token(codec: JwtTokenCodec) -> None:
    token = codec.issue("user-1", "a@x.io", datetime.now(UTC)).token
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError):
        codec.decode(tampered)


def test_decode_rejects_token_signed_with_other_secret(codec: JwtTokenCodec) -> None:
    other = JwtTokenCodec("another-secret", ttl=timedelta(days=7))
    token = other.issue("user-1", "a@x.io", datetime.now(UTC)).token

    with pytest.raises(InvalidTokenError):
        codec.decode(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_decode_rejects_malformed_token(codec: JwtTokenCodec, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        codec.decode(token)


def test_decode_requires_user_id_claim(codec: JwtTokenCodec) -> None:
    exp = int((datetime.now(UTC) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"email": "a@x.io", "exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        codec.decode(token)


def test_bcrypt_hasher_round_trip() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    hashed = hasher.hash("password1")

    assert hashed != "password1"
    assert hashed.startswith("$2")
    assert hasher.verify("password1", hashed)
    assert not hasher.verify("password2", hashed)


def test_bcrypt_hashes_are_salted() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.hash("password1") != hasher.hash("password1")


def test_bcrypt_verify_tolerates_malformed_hash() -> None:
    assert BcryptPasswordHasher(rounds=4).verify("password1", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize("password", ["p" * 80, "пароль" * 7])
def test_bcrypt_hasher_accepts_input_over_72_bytes(password: str) -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    hashed = hasher.hash(password)

    assert hasher.verify(password, hashed)
    assert not hasher.verify("password1", hashed)


def test_bcrypt_verify_matches_hash_of_truncated_password() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    legacy = hasher.hash("p" * 72)

    assert hasher.verify("p" * 80, legacy)

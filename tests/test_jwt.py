"""
tests.test_jwt

Claim encoding and token verification.
"""

from __future__ import annotations

from datetime import timedelta

import jwt as pyjwt
import pytest

from rbac_platform.security.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
    join_claim,
    principal_from_claims,
    principal_from_token,
    split_claim,
)

CFG = JwtConfig(alg="HS256", secret="unit-test-secret-that-is-long-enough")


def _token(**overrides) -> str:
    kwargs = {
        "cfg": CFG,
        "user_id": 7,
        "email": "ada@example.com",
        "full_name": "Ada Lovelace",
        "roles": ["ROLE_ADMIN", "ROLE_USER"],
        "permissions": ["READ_PRODUCTS", "WRITE_PRODUCTS"],
    }
    kwargs.update(overrides)
    return issue_token(**kwargs)


def test_claims_are_comma_joined_strings() -> None:
    claims = decode_and_validate(cfg=CFG, token=_token())

    assert claims["sub"] == "7"
    assert claims["userId"] == "7"
    assert claims["email"] == "ada@example.com"
    assert claims["fullName"] == "Ada Lovelace"
    assert claims["roles"] == "ROLE_ADMIN,ROLE_USER"
    assert claims["permissions"] == "READ_PRODUCTS,WRITE_PRODUCTS"
    assert claims["exp"] > claims["iat"]


def test_join_claim_drops_duplicates_and_keeps_order() -> None:
    assert join_claim(["B", "A", "B", "", "C", "A"]) == "B,A,C"
    assert join_claim([]) == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("READ_PRODUCTS, WRITE_PRODUCTS", ("READ_PRODUCTS", "WRITE_PRODUCTS")),
        (" A ,, ,B,", ("A", "B")),
        ("", ()),
        (None, ()),
    ],
)
def test_split_claim(raw, expected) -> None:
    assert split_claim(raw) == expected


def test_principal_from_token() -> None:
    principal = principal_from_token(cfg=CFG, token=_token())

    assert principal.user_id == "7"
    assert principal.email == "ada@example.com"
    assert principal.roles == ("ROLE_ADMIN", "ROLE_USER")
    assert principal.has_permission("WRITE_PRODUCTS")
    assert not principal.has_permission("DELETE_PRODUCTS")
    assert principal.has_role("ROLE_ADMIN")


def test_empty_permissions_claim_gives_empty_tuple() -> None:
    principal = principal_from_token(cfg=CFG, token=_token(permissions=[], roles=[]))

    assert principal.permissions == ()
    assert principal.roles == ()


def test_foreign_secret_is_rejected() -> None:
    other = JwtConfig(alg="HS256", secret="some-other-secret-also-long-enough!!")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=_token(cfg=other))


def test_tampered_payload_is_rejected() -> None:
    header, payload, signature = _token().split(".")
    forged = pyjwt.encode(
        {"sub": "1", "permissions": "DELETE_PRODUCTS"}, "guess", algorithm="HS256"
    ).split(".")[1]
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=f"{header}.{forged}.{signature}")


def test_expired_token_is_rejected() -> None:
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=_token(ttl=timedelta(seconds=-5)))


def test_token_without_exp_is_accepted() -> None:
    token = pyjwt.encode({"sub": "9", "permissions": "READ_PRODUCTS"}, CFG.secret, algorithm="HS256")

    assert principal_from_token(cfg=CFG, token=token).permissions == ("READ_PRODUCTS",)


def test_missing_subject_is_rejected() -> None:
    with pytest.raises(JwtValidationError):
        principal_from_claims({"email": "x@example.com"})


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token="not-a-jwt")

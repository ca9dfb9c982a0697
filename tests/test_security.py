import json

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from hotel_booking_api.app.core.config import settings
from hotel_booking_api.app.core.exceptions import Forbidden, Unauthenticated
from hotel_booking_api.app.core.security import (
    _b64_url_decode,
    _b64_url_encode,
    _sign,
    authorize,
    create_access_token,
    decode_access_token,
    get_current_identity,
)


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_round_trip_keeps_email_claim():
    token = create_access_token({"email": "a@x.com"})
    payload = decode_access_token(token)
    assert payload["email"] == "a@x.com"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token({"email": "a@x.com"}, expires_delta=-10)
    assert decode_access_token(token) is None


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "###.###.###"])
def test_malformed_tokens_are_rejected(token):
    assert decode_access_token(token) is None


def test_tampered_payload_is_rejected():
    header, _, signature = create_access_token({"email": "a@x.com"}).split(".")
    _, forged_payload, _ = create_access_token({"email": "b@x.com"}).split(".")
    assert decode_access_token(f"{header}.{forged_payload}.{signature}") is None


def test_header_names_hs256():
    header = create_access_token({"email": "a@x.com"}).split(".")[0]
    assert json.loads(_b64_url_decode(header)) == {"alg": "HS256", "typ": "JWT"}


@pytest.mark.parametrize("alg", ["none", "HS512", None])
def test_token_with_other_algorithm_is_rejected(alg):
    _, payload, _ = create_access_token({"email": "a@x.com"}).split(".")
    header = _b64_url_encode(json.dumps({"alg": alg, "typ": "JWT"}).encode("utf-8"))
    signature = _b64_url_encode(_sign(f"{header}.{payload}".encode("utf-8"), settings.secret_key))
    assert decode_access_token(f"{header}.{payload}.{signature}") is None


def test_current_identity_requires_credentials():
    with pytest.raises(Unauthenticated) as excinfo:
        get_current_identity(None)
    assert excinfo.value.error == "No token provided"


def test_current_identity_rejects_invalid_token():
    with pytest.raises(Unauthenticated) as excinfo:
        get_current_identity(_credentials("not-a-token"))
    assert excinfo.value.error == "Invalid token"


def test_current_identity_requires_email_claim():
    token = create_access_token({"sub": "someone"})
    with pytest.raises(Unauthenticated):
        get_current_identity(_credentials(token))


def test_current_identity_returns_claims():
    token = create_access_token({"email": "a@x.com"})
    assert get_current_identity(_credentials(token))["email"] == "a@x.com"


def test_authorize_allows_exact_match():
    authorize("a@x.com", "a@x.com")


@pytest.mark.parametrize("owner", ["b@x.com", "A@x.com", "a@x.com ", None])
def test_authorize_denies_any_other_owner(owner):
    with pytest.raises(Forbidden) as excinfo:
        authorize("a@x.com", owner)
    assert excinfo.value.to_dict() == {"success": False, "message": "You are not authorized"}

import pytest
from firebase_admin import auth

from bloodcare.errors import Unauthenticated
from bloodcare.identity import IdentityResolver, bearer_token


def test_bearer_token_extraction():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token(None) is None
    assert bearer_token("") is None
    assert bearer_token("Bearer") is None


def test_missing_header_fails_without_calling_verifier():
    calls = []
    resolver = IdentityResolver(lambda token: calls.append(token))
    with pytest.raises(Unauthenticated):
        resolver.resolve(None)
    assert calls == []


def test_verified_token_returns_email():
    resolver = IdentityResolver(lambda token: {"email": "a@x.com", "uid": "u1"})
    assert resolver.resolve("Bearer good") == "a@x.com"


def test_provider_failure_carries_diagnostic():
    def verify(token):
        raise auth.ExpiredIdTokenError("Token expired", cause=None)

    with pytest.raises(Unauthenticated) as exc:
        IdentityResolver(verify).resolve("Bearer old")
    assert exc.value.status_code == 401
    assert "expired" in exc.value.to_dict()["err"]


def test_malformed_token_value_error_is_unauthenticated():
    def verify(token):
        raise ValueError("Illegal ID token provided")

    with pytest.raises(Unauthenticated):
        IdentityResolver(verify).resolve("Bearer ???")


def test_token_without_email_claim_is_rejected():
    with pytest.raises(Unauthenticated):
        IdentityResolver(lambda token: {"uid": "u1"}).resolve("Bearer t")

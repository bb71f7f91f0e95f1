from __future__ import annotations

import hmac
from hashlib import sha256

import pytest

from cex_client.core.errors import ConfigurationError
from cex_client.exchange.adapters.auth import Credentials, load_credentials_from_env, sign_nonce
from cex_client.exchange.cexio.issuer import SignedRequestIssuer

SECRET = "s3cr3t-value"


def _issuer(transport) -> SignedRequestIssuer:
    return SignedRequestIssuer("alice", "api-key-1", SECRET, transport=transport)


def test_sign_matches_hmac_sha256_of_nonce_user_key(transport):
    expected = hmac.new(SECRET.encode(), b"1400000000001aliceapi-key-1", sha256).hexdigest().upper()
    assert _issuer(transport).sign(1400000000001) == expected


def test_sign_is_pure(transport):
    issuer = _issuer(transport)
    assert issuer.sign(42, {"a": "1"}) == issuer.sign(42, {"a": "1"})
    assert issuer.sign(42) == _issuer(transport).sign(42)


def test_sign_changes_with_nonce(transport):
    issuer = _issuer(transport)
    assert issuer.sign(42) != issuer.sign(43)


def test_signature_never_contains_secret(transport):
    issuer = _issuer(transport)
    sig = issuer.sign(42)
    assert SECRET not in sig
    assert SECRET.upper() not in sig
    assert len(sig) == 64


def test_credentials_repr_hides_secret():
    creds = Credentials("alice", "api-key-1", SECRET)
    assert SECRET not in repr(creds)
    assert sign_nonce(1, creds) != sign_nonce(2, creds)


@pytest.mark.parametrize(
    "user,key,secret",
    [("", "k", "s"), ("u", "", "s"), ("u", "k", ""), ("u", "k", "   ")],
)
def test_construct_rejects_empty_credentials(user, key, secret, transport):
    with pytest.raises(ConfigurationError):
        SignedRequestIssuer(user, key, secret, transport=transport)
    assert transport.calls == []


def test_construct_defaults_agent_label(transport):
    issuer = _issuer(transport)
    assert issuer.agent_label == "cex_client-python"
    custom = SignedRequestIssuer("u", "k", "s", "my-bot/1.0", transport=transport)
    assert custom.agent_label == "my-bot/1.0"


def test_load_credentials_from_env(monkeypatch):
    monkeypatch.setenv("CEXIO_USERNAME", "alice")
    monkeypatch.setenv("CEXIO_API_KEY", " key ")
    monkeypatch.setenv("CEXIO_API_SECRET", "secret")
    creds = load_credentials_from_env()
    assert (creds.user, creds.key, creds.secret) == ("alice", "key", "secret")


def test_load_credentials_from_env_missing(monkeypatch):
    monkeypatch.setenv("CEXIO_USERNAME", "alice")
    monkeypatch.delenv("CEXIO_API_KEY", raising=False)
    monkeypatch.setenv("CEXIO_API_SECRET", "secret")
    with pytest.raises(ConfigurationError):
        load_credentials_from_env()

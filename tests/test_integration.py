"""
Integration tests for the JOSE SDK

These tests exercise end-to-end workflows through the public package API:
key generation or loading, signing, bearer transport, parsing, and
verification with claims predicates.
"""

import time

import pytest
from cryptography.hazmat.primitives import serialization

import jose_sdk
from jose_sdk import (
    AlgorithmId,
    Claims,
    JoseConfig,
    JwsState,
    ClaimsRejected,
    KeyTooWeak,
    SignatureMismatch,
    create_algorithm,
    derive_public,
    generate_ec,
    load_from_file,
    parse,
    set_default_config,
    sign_bearer,
    verify,
)


def test_public_api_exports():
    """Every name in __all__ resolves on the package"""
    for name in jose_sdk.__all__:
        assert hasattr(jose_sdk, name), name


def test_issuer_to_audience_workflow(tmp_path, rsa_key):
    """An issuer signs with an encrypted key file, a service verifies with the public key"""
    key_path = tmp_path / "issuer.pem"
    key_path.write_bytes(rsa_key.key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.BestAvailableEncryption(b"issuer-pass"),
    ))

    issuer_key = load_from_file(key_path, lambda buf, rwflag: buf.assign("issuer-pass"))
    now = int(time.time())
    claims = Claims(iss="auth.example", sub="user-42", aud="api", iat=now, exp=now + 300)

    header_value = sign_bearer(claims, create_algorithm(AlgorithmId.RS256, issuer_key))

    verifier = create_algorithm(AlgorithmId.RS256, derive_public(issuer_key))

    def accept(c):
        check = c.check()
        return check.iss("auth.example") and check.aud("api") and check.exp() and check.iat()

    token = verify(header_value, verifier, accept)

    assert token.state is JwsState.VERIFIED
    assert token.claims.sub == "user-42"


def test_expired_token_is_rejected():
    """A predicate on exp rejects a token past its lifetime"""
    key = generate_ec(AlgorithmId.ES256)
    token = sign_bearer(Claims(exp=int(time.time()) - 60), create_algorithm("ES256", key))
    verifier = create_algorithm("ES256", derive_public(key))

    with pytest.raises(ClaimsRejected):
        verify(token, verifier, lambda c: c.check().exp())

    set_default_config(JoseConfig(claims_leeway_seconds=120))
    assert verify(token, verifier, lambda c: c.check().exp()).state is JwsState.VERIFIED


def test_key_from_other_family_never_verifies(rsa_key):
    """A token signed with EC cannot be verified by an RSA verifier"""
    ec_key = generate_ec("ES256")
    token = parse(sign_bearer(Claims(), create_algorithm("ES256", ec_key)))

    with pytest.raises(SignatureMismatch):
        token.verify(create_algorithm("RS256", derive_public(rsa_key)))


def test_raised_rsa_floor_rejects_existing_key(rsa_key):
    """Raising the configured floor affects algorithm construction"""
    set_default_config(JoseConfig(min_rsa_key_bits=2048))

    with pytest.raises(KeyTooWeak):
        create_algorithm("RS256", rsa_key)

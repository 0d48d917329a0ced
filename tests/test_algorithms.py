"""
Unit tests for key material and signature algorithms
"""

import pytest

from cryptography.hazmat.primitives.asymmetric import ec

from jose_sdk.config import JoseConfig, set_default_config
from jose_sdk.crypto import (
    KeyMaterial,
    HmacAlgorithm,
    RsaAlgorithm,
    EcAlgorithm,
    EdDSAAlgorithm,
    create_algorithm,
    generate_rsa,
    generate_ec,
    generate_ed25519,
    symmetric_key,
    derive_public,
)
from jose_sdk.exceptions import (
    ConstructionError,
    FamilyMismatch,
    KeyTooWeak,
    SignatureMismatch,
    SigningError,
    UnknownAlgorithm,
)
from jose_sdk.types import AlgorithmId, KeyFamily

MESSAGE = b"eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9.e30"


class TestKeyMaterial:
    """Test cases for key generation and wrapping"""

    def test_rsa_generation_rejects_1023_bits(self):
        """Test the RSA size floor at generation time"""
        with pytest.raises(KeyTooWeak, match="at least 1024 bits"):
            generate_rsa(1023)

    def test_rsa_generation_accepts_1024_bits(self, rsa_key):
        """Test the smallest accepted RSA size"""
        assert rsa_key.family is KeyFamily.RSA
        assert rsa_key.key_size == 1024
        assert rsa_key.is_private

    def test_configured_minimum_is_enforced(self):
        """Test that a raised minimum rejects smaller keys"""
        set_default_config(JoseConfig(min_rsa_key_bits=2048))

        with pytest.raises(KeyTooWeak):
            generate_rsa(1024)

    def test_derive_public(self, rsa_key, rsa_public_key):
        """Test deriving a public key from a private key"""
        assert not rsa_public_key.is_private
        assert rsa_public_key.family is KeyFamily.RSA
        assert rsa_public_key.key_size == rsa_key.key_size
        assert derive_public(rsa_public_key) is rsa_public_key

    def test_symmetric_key(self):
        """Test HMAC secret wrapping"""
        key = symmetric_key("secret")

        assert key.family is KeyFamily.HMAC
        assert key.key == b"secret"
        assert key.key_size == 48
        assert key.public_key() is key

    def test_empty_symmetric_key(self):
        """Test that an empty HMAC secret is rejected"""
        with pytest.raises(KeyTooWeak):
            symmetric_key(b"")

    def test_from_key_infers_family(self):
        """Test family inference from cryptography key objects"""
        ec_key = ec.generate_private_key(ec.SECP256R1())

        assert KeyMaterial.from_key(ec_key).family is KeyFamily.EC
        assert KeyMaterial.from_key(bytearray(b"k")).key == b"k"

    def test_from_key_rejects_unknown_types(self):
        """Test wrapping an unsupported object"""
        with pytest.raises(FamilyMismatch, match="Unsupported key type"):
            KeyMaterial.from_key(12345)

    def test_declared_family_must_match(self, rsa_key):
        """Test that a key cannot be tagged with the wrong family"""
        with pytest.raises(FamilyMismatch):
            KeyMaterial(family=KeyFamily.EC, key=rsa_key.key)

    def test_generate_ec_for_algorithm(self):
        """Test EC generation picks the curve of the algorithm"""
        assert generate_ec(AlgorithmId.ES384).curve_name == "secp384r1"
        assert generate_ec("ES512").curve_name == "secp521r1"

        with pytest.raises(FamilyMismatch):
            generate_ec("RS256")
        with pytest.raises(UnknownAlgorithm):
            generate_ec("XX1")

    def test_repr_hides_key_bytes(self):
        """Test that repr does not leak HMAC secrets"""
        assert "secret" not in repr(symmetric_key("secret"))


class TestAlgorithmConstruction:
    """Test cases for binding algorithms to keys"""

    @pytest.mark.parametrize("alg", [AlgorithmId.RS256, AlgorithmId.RS384, AlgorithmId.RS512])
    def test_rsa_algorithms_accept_rsa_key(self, rsa_key, alg):
        """Test RS* construction with a 1024-bit key"""
        algorithm = RsaAlgorithm(alg, rsa_key)

        assert algorithm.alg is alg
        assert algorithm.key_family is KeyFamily.RSA

    @pytest.mark.parametrize("alg", [AlgorithmId.HS256, AlgorithmId.ES384])
    def test_rsa_class_rejects_other_families(self, rsa_key, alg):
        """Test constructing an RSA algorithm with a foreign algorithm id"""
        with pytest.raises(FamilyMismatch):
            RsaAlgorithm(alg, rsa_key)

    def test_hmac_id_with_rsa_key(self, rsa_key):
        """Test HS256 bound to an RSA key"""
        with pytest.raises(FamilyMismatch):
            create_algorithm(AlgorithmId.HS256, rsa_key)

    def test_rsa_id_with_symmetric_key(self):
        """Test RS256 bound to an HMAC secret"""
        with pytest.raises(ConstructionError):
            create_algorithm("RS256", symmetric_key("secret"))

    def test_ec_curve_must_match(self):
        """Test ES256 with a P-384 key"""
        with pytest.raises(FamilyMismatch) as exc_info:
            create_algorithm(AlgorithmId.ES256, generate_ec(AlgorithmId.ES384))

        assert exc_info.value.error_code == "CURVE_MISMATCH"

    def test_pss_512_needs_larger_key(self, rsa_key):
        """Test PS512 cannot fit its salt and digest in a 1024-bit modulus"""
        with pytest.raises(KeyTooWeak, match="PS512"):
            create_algorithm(AlgorithmId.PS512, rsa_key)

    def test_unknown_algorithm(self):
        """Test constructing with an unknown identifier"""
        with pytest.raises(UnknownAlgorithm):
            create_algorithm("BB6", symmetric_key("secret"))

    def test_raw_cryptography_keys_are_wrapped(self):
        """Test passing a cryptography key object directly"""
        algorithm = EcAlgorithm(AlgorithmId.ES256, ec.generate_private_key(ec.SECP256R1()))

        assert isinstance(algorithm.key, KeyMaterial)

    def test_create_algorithm_dispatches_by_family(self, rsa_key):
        """Test the factory returns the class of the algorithm's family"""
        assert isinstance(create_algorithm("HS384", symmetric_key("s")), HmacAlgorithm)
        assert isinstance(create_algorithm("PS256", rsa_key), RsaAlgorithm)
        assert isinstance(create_algorithm("ES512", generate_ec("ES512")), EcAlgorithm)
        assert isinstance(create_algorithm("EdDSA", generate_ed25519()), EdDSAAlgorithm)


class TestSignVerify:
    """Test cases for raw signing and verification"""

    def test_hmac_is_deterministic(self):
        """Test HMAC signatures are stable and verify"""
        algorithm = create_algorithm(AlgorithmId.HS256, symmetric_key("secret"))

        signature = algorithm.sign(MESSAGE)

        assert signature == algorithm.sign(MESSAGE)
        assert len(signature) == 32
        assert algorithm.verify(MESSAGE, signature)
        assert not algorithm.verify(MESSAGE + b"x", signature)

    def test_hmac_hash_strengths(self):
        """Test HS384 and HS512 digest lengths"""
        key = symmetric_key("secret")

        assert len(create_algorithm("HS384", key).sign(MESSAGE)) == 48
        assert len(create_algorithm("HS512", key).sign(MESSAGE)) == 64

    def test_hmac_different_secret(self):
        """Test that a different secret does not verify"""
        signature = create_algorithm("HS256", symmetric_key("a")).sign(MESSAGE)

        assert not create_algorithm("HS256", symmetric_key("b")).verify(MESSAGE, signature)

    @pytest.mark.parametrize("alg", ["RS256", "RS384", "RS512", "PS256", "PS384"])
    def test_rsa_sign_with_private_verify_with_public(self, rsa_key, rsa_public_key, alg):
        """Test RSA signatures verify with the derived public key"""
        signature = create_algorithm(alg, rsa_key).sign(MESSAGE)

        assert create_algorithm(alg, rsa_public_key).verify(MESSAGE, signature)
        assert not create_algorithm(alg, rsa_public_key).verify(b"other", signature)

    @pytest.mark.parametrize("signer,verifier", [
        ("RS256", "RS384"), ("RS256", "RS512"),
        ("RS384", "RS256"), ("RS384", "RS512"),
        ("RS512", "RS256"), ("RS512", "RS384"),
    ])
    def test_rsa_hash_strengths_do_not_cross_verify(self, rsa_key, rsa_public_key, signer, verifier):
        """Test that an RSA signature only verifies under its own algorithm"""
        signature = create_algorithm(signer, rsa_key).sign(MESSAGE)

        assert not create_algorithm(verifier, rsa_public_key).verify(MESSAGE, signature)

    def test_public_key_cannot_sign(self, rsa_public_key):
        """Test signing with a public key"""
        with pytest.raises(SigningError) as exc_info:
            create_algorithm("RS256", rsa_public_key).sign(MESSAGE)

        assert exc_info.value.error_code == "PUBLIC_KEY_CANNOT_SIGN"

    @pytest.mark.parametrize("alg,size", [("ES256", 64), ("ES384", 96), ("ES512", 132)])
    def test_ec_signatures_use_raw_form(self, alg, size):
        """Test ECDSA signatures are fixed-width r||s and verify"""
        key = generate_ec(alg)
        signature = create_algorithm(alg, key).sign(MESSAGE)

        assert len(signature) == size
        assert create_algorithm(alg, derive_public(key)).verify(MESSAGE, signature)
        assert not create_algorithm(alg, derive_public(key)).verify(b"other", signature)

    def test_ec_malformed_signature(self):
        """Test that a wrong-length ECDSA signature is a structural error"""
        algorithm = create_algorithm("ES256", generate_ec("ES256"))

        with pytest.raises(SignatureMismatch) as exc_info:
            algorithm.verify(MESSAGE, b"\x00" * 10)

        assert exc_info.value.error_code == "MALFORMED_SIGNATURE"

    def test_eddsa(self):
        """Test Ed25519 signing and verification"""
        key = generate_ed25519()
        signature = create_algorithm("EdDSA", key).sign(MESSAGE)

        assert len(signature) == 64
        assert create_algorithm("EdDSA", key.public_key()).verify(MESSAGE, signature)
        assert not create_algorithm("EdDSA", generate_ed25519()).verify(MESSAGE, signature)

    def test_shared_key_between_algorithms(self, rsa_key):
        """Test several algorithms referencing the same key material"""
        a = create_algorithm("RS256", rsa_key)
        b = create_algorithm("RS512", rsa_key)

        assert a.key is b.key

"""
Key material for JWS algorithms

This module wraps keys from the cryptography package (and raw HMAC secrets)
in an immutable, family-tagged :class:`KeyMaterial`, and provides key
generation for every supported family.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from ..config import get_default_config
from ..exceptions import ErrorCodes, FamilyMismatch, KeyTooWeak, UnknownAlgorithm
from ..types import AlgorithmId, KeyFamily

logger = logging.getLogger(__name__)

RSA_PUBLIC_EXPONENT = 65537
RSA_RECOMMENDED_KEY_BITS = 2048

# Curve required by each ECDSA algorithm (RFC 7518 section 3.4)
EC_CURVES = {
    AlgorithmId.ES256: ec.SECP256R1,
    AlgorithmId.ES384: ec.SECP384R1,
    AlgorithmId.ES512: ec.SECP521R1,
}

_PRIVATE_TYPES = (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey, Ed25519PrivateKey)


@dataclass(frozen=True)
class KeyMaterial:
    """
    Family-tagged key.

    Attributes:
        family: Cryptographic family of the key
        key: A cryptography key object, or the secret bytes for HMAC
    """
    family: KeyFamily
    key: Any

    def __post_init__(self):
        """Validate that the key object matches the declared family"""
        if _family_of(self.key) is not self.family:
            raise FamilyMismatch(
                f"Key object does not belong to the {self.family.value} family",
                details={'family': self.family.value, 'key_type': type(self.key).__name__}
            )

    @classmethod
    def from_key(cls, key: Union[bytes, Any]) -> 'KeyMaterial':
        """Wrap a cryptography key object or HMAC secret, inferring the family"""
        family = _family_of(key)
        if family is None:
            raise FamilyMismatch(
                f"Unsupported key type: {type(key).__name__}",
                details={'key_type': type(key).__name__}
            )
        if isinstance(key, bytearray):
            key = bytes(key)
        return cls(family=family, key=key)

    @property
    def is_private(self) -> bool:
        """True for keys that can produce signatures"""
        return self.family is KeyFamily.HMAC or isinstance(self.key, _PRIVATE_TYPES)

    @property
    def key_size(self) -> int:
        """Key size in bits (secret length for HMAC, curve size for EC)"""
        if self.family is KeyFamily.HMAC:
            return len(self.key) * 8
        if self.family is KeyFamily.EC:
            return self.key.curve.key_size
        if self.family is KeyFamily.EDDSA:
            return 256
        return self.key.key_size

    @property
    def curve_name(self) -> Optional[str]:
        if self.family is KeyFamily.EC:
            return self.key.curve.name
        return None

    def public_key(self) -> 'KeyMaterial':
        """Return the public half of this key (HMAC secrets are returned as-is)"""
        return derive_public(self)

    def __repr__(self) -> str:
        # Never render key bytes
        kind = "private" if self.is_private else "public"
        return f"KeyMaterial(family={self.family.value}, size={self.key_size}, {kind})"


def _family_of(key: Any) -> Optional[KeyFamily]:
    if isinstance(key, (bytes, bytearray)):
        return KeyFamily.HMAC
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return KeyFamily.RSA
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return KeyFamily.EC
    if isinstance(key, (Ed25519PrivateKey, Ed25519PublicKey)):
        return KeyFamily.EDDSA
    return None


def check_rsa_key_size(bits: int) -> None:
    """
    Enforce the RSA modulus floor.

    Raises:
        KeyTooWeak: If ``bits`` is below the configured minimum
    """
    minimum = get_default_config().min_rsa_key_bits
    if bits < minimum:
        raise KeyTooWeak(
            f"RSA key must be at least {minimum} bits, got {bits}",
            details={'key_size': bits, 'minimum': minimum}
        )
    if bits < RSA_RECOMMENDED_KEY_BITS:
        logger.warning(f"Accepting {bits}-bit RSA key; {RSA_RECOMMENDED_KEY_BITS} bits or more is recommended")


def generate_rsa(bits: int = RSA_RECOMMENDED_KEY_BITS) -> KeyMaterial:
    """
    Generate an RSA private key.

    Args:
        bits: Modulus size in bits

    Returns:
        KeyMaterial: The generated private key

    Raises:
        KeyTooWeak: If ``bits`` is below the accepted minimum
    """
    if not isinstance(bits, int):
        raise KeyTooWeak("RSA key size must be an integer")
    check_rsa_key_size(bits)

    private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)
    logger.debug(f"Generated {bits}-bit RSA key")
    return KeyMaterial(family=KeyFamily.RSA, key=private_key)


def generate_ec(alg: Union[AlgorithmId, str, ec.EllipticCurve] = AlgorithmId.ES256) -> KeyMaterial:
    """
    Generate an EC private key.

    Args:
        alg: ECDSA algorithm whose curve should be used, or a curve instance

    Returns:
        KeyMaterial: The generated private key
    """
    if isinstance(alg, ec.EllipticCurve):
        curve = alg
    else:
        try:
            alg_id = AlgorithmId(alg)
        except ValueError as e:
            raise UnknownAlgorithm(f"Unsupported algorithm: {alg}", details={'alg': alg}) from e
        if alg_id.family is not KeyFamily.EC:
            raise FamilyMismatch(
                f"{alg_id.value} is not an ECDSA algorithm",
                details={'alg': alg_id.value}
            )
        curve = EC_CURVES[alg_id]()

    private_key = ec.generate_private_key(curve)
    logger.debug(f"Generated EC key on {curve.name}")
    return KeyMaterial(family=KeyFamily.EC, key=private_key)


def generate_ed25519() -> KeyMaterial:
    """Generate an Ed25519 private key"""
    return KeyMaterial(family=KeyFamily.EDDSA, key=Ed25519PrivateKey.generate())


def symmetric_key(secret: Union[str, bytes]) -> KeyMaterial:
    """
    Wrap an HMAC secret.

    Raises:
        KeyTooWeak: If the secret is empty
    """
    if isinstance(secret, str):
        secret = secret.encode('utf-8')
    if not isinstance(secret, (bytes, bytearray)):
        raise FamilyMismatch("HMAC secret must be bytes or str", ErrorCodes.FAMILY_MISMATCH)
    if not secret:
        raise KeyTooWeak("HMAC secret cannot be empty")
    return KeyMaterial(family=KeyFamily.HMAC, key=bytes(secret))


def derive_public(key: KeyMaterial) -> KeyMaterial:
    """
    Derive the public key of ``key``.

    Public keys are returned unchanged. HMAC secrets have no public half and
    are returned unchanged as well.
    """
    if key.family is KeyFamily.HMAC or not key.is_private:
        return key
    return KeyMaterial(family=key.family, key=key.key.public_key())

"""
JWS signature algorithms

Each :class:`Algorithm` binds one :class:`~jose_sdk.types.AlgorithmId` to one
:class:`~jose_sdk.crypto.keys.KeyMaterial`. The binding is checked when the
algorithm is constructed: the algorithm family and the key family must agree,
RSA moduli must meet the size floor and EC keys must sit on the curve the
algorithm requires. Signing and verification delegate to the cryptography
package.
"""

import hmac
import logging
from abc import ABC, abstractmethod
from typing import Dict, Type, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from ..exceptions import (
    ErrorCodes,
    FamilyMismatch,
    KeyTooWeak,
    SignatureMismatch,
    SigningError,
    UnknownAlgorithm,
)
from ..types import AlgorithmId, KeyFamily
from .keys import EC_CURVES, KeyMaterial, check_rsa_key_size

logger = logging.getLogger(__name__)

_HASHES = {
    256: hashes.SHA256,
    384: hashes.SHA384,
    512: hashes.SHA512,
}


class Algorithm(ABC):
    """
    Signer/verifier bound to a key.

    Subclasses set :attr:`family` and implement :meth:`sign` and
    :meth:`verify`. Instances are immutable and may be shared between
    threads.
    """

    family: KeyFamily

    def __init__(self, alg: Union[AlgorithmId, str], key: KeyMaterial):
        alg_id = _to_algorithm_id(alg)

        if alg_id.family is not self.family:
            raise FamilyMismatch(
                f"{alg_id.value} is not a {self.family.value} algorithm",
                details={'alg': alg_id.value, 'expected_family': self.family.value}
            )

        if not isinstance(key, KeyMaterial):
            key = KeyMaterial.from_key(key)

        if key.family is not self.family:
            raise FamilyMismatch(
                f"{alg_id.value} requires a {self.family.value} key, got {key.family.value}",
                details={'alg': alg_id.value, 'key_family': key.family.value}
            )

        self._alg = alg_id
        self._key = key
        self._validate_key()

    @property
    def alg(self) -> AlgorithmId:
        return self._alg

    @property
    def key(self) -> KeyMaterial:
        return self._key

    @property
    def key_family(self) -> KeyFamily:
        return self.family

    def _validate_key(self) -> None:
        """Family specific key checks, run once at construction"""

    def _require_private_key(self) -> None:
        if not self._key.is_private:
            raise SigningError(
                f"Cannot sign with a {self._key.family.value} public key",
                ErrorCodes.PUBLIC_KEY_CANNOT_SIGN
            )

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Return the JWS signature of ``message``"""

    @abstractmethod
    def verify(self, message: bytes, signature: bytes) -> bool:
        """Return True if ``signature`` is valid for ``message``"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(alg={self._alg.value}, key={self._key!r})"


class HmacAlgorithm(Algorithm):
    """HS256, HS384 and HS512"""

    family = KeyFamily.HMAC

    def _validate_key(self) -> None:
        if not self._key.key:
            raise KeyTooWeak("HMAC secret cannot be empty")

    def sign(self, message: bytes) -> bytes:
        h = crypto_hmac.HMAC(self._key.key, _HASHES[self._alg.hash_bits]())
        h.update(message)
        return h.finalize()

    def verify(self, message: bytes, signature: bytes) -> bool:
        return hmac.compare_digest(self.sign(message), signature)


class RsaAlgorithm(Algorithm):
    """RS256/384/512 (PKCS#1 v1.5) and PS256/384/512 (PSS)"""

    family = KeyFamily.RSA

    def _validate_key(self) -> None:
        check_rsa_key_size(self._key.key_size)
        if self._alg.value.startswith("PS"):
            # EMSA-PSS needs room for the digest, an equally long salt and two bytes
            digest_size = _HASHES[self._alg.hash_bits].digest_size
            modulus_bytes = (self._key.key_size + 7) // 8
            if modulus_bytes < 2 * digest_size + 2:
                raise KeyTooWeak(
                    f"{self._alg.value} needs a larger RSA key than {self._key.key_size} bits",
                    details={'alg': self._alg.value, 'key_size': self._key.key_size}
                )

    def _padding(self):
        if self._alg.value.startswith("PS"):
            hash_cls = _HASHES[self._alg.hash_bits]
            # RFC 7518 section 3.5: salt length equals the hash length
            return padding.PSS(mgf=padding.MGF1(hash_cls()), salt_length=hash_cls.digest_size)
        return padding.PKCS1v15()

    def sign(self, message: bytes) -> bytes:
        self._require_private_key()
        return self._key.key.sign(message, self._padding(), _HASHES[self._alg.hash_bits]())

    def verify(self, message: bytes, signature: bytes) -> bool:
        public_key = self._key.public_key().key
        try:
            public_key.verify(signature, message, self._padding(), _HASHES[self._alg.hash_bits]())
            return True
        except InvalidSignature:
            return False


class EcAlgorithm(Algorithm):
    """
    ES256, ES384 and ES512.

    JWS carries ECDSA signatures as the fixed-width concatenation ``r || s``
    (RFC 7518 section 3.4) rather than the DER structure the cryptography
    package produces, so signatures are converted in both directions.
    """

    family = KeyFamily.EC

    def _validate_key(self) -> None:
        expected = EC_CURVES[self._alg].name
        if self._key.curve_name != expected:
            raise FamilyMismatch(
                f"{self._alg.value} requires a key on {expected}, got {self._key.curve_name}",
                ErrorCodes.CURVE_MISMATCH,
                {'alg': self._alg.value, 'curve': self._key.curve_name}
            )

    @property
    def _coordinate_size(self) -> int:
        return (self._key.key_size + 7) // 8

    def sign(self, message: bytes) -> bytes:
        self._require_private_key()
        der = self._key.key.sign(message, ec.ECDSA(_HASHES[self._alg.hash_bits]()))
        r, s = decode_dss_signature(der)
        size = self._coordinate_size
        return r.to_bytes(size, 'big') + s.to_bytes(size, 'big')

    def verify(self, message: bytes, signature: bytes) -> bool:
        size = self._coordinate_size
        if len(signature) != 2 * size:
            raise SignatureMismatch(
                f"{self._alg.value} signature must be {2 * size} bytes, got {len(signature)}",
                ErrorCodes.MALFORMED_SIGNATURE
            )

        r = int.from_bytes(signature[:size], 'big')
        s = int.from_bytes(signature[size:], 'big')
        public_key = self._key.public_key().key
        try:
            public_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(_HASHES[self._alg.hash_bits]()))
            return True
        except InvalidSignature:
            return False


class EdDSAAlgorithm(Algorithm):
    """EdDSA over Ed25519"""

    family = KeyFamily.EDDSA

    def sign(self, message: bytes) -> bytes:
        self._require_private_key()
        return self._key.key.sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        public_key = self._key.public_key().key
        try:
            public_key.verify(signature, message)
            return True
        except InvalidSignature:
            return False


ALGORITHM_CLASSES: Dict[KeyFamily, Type[Algorithm]] = {
    KeyFamily.HMAC: HmacAlgorithm,
    KeyFamily.RSA: RsaAlgorithm,
    KeyFamily.EC: EcAlgorithm,
    KeyFamily.EDDSA: EdDSAAlgorithm,
}


def create_algorithm(alg: Union[AlgorithmId, str], key: KeyMaterial) -> Algorithm:
    """
    Bind ``alg`` to ``key``.

    Args:
        alg: Algorithm identifier, e.g. ``AlgorithmId.RS256`` or ``"RS256"``
        key: Key material of the matching family

    Returns:
        Algorithm: The concrete algorithm for the identifier's family

    Raises:
        UnknownAlgorithm: If ``alg`` is not a supported identifier
        FamilyMismatch: If the key belongs to a different family
        KeyTooWeak: If the key is below the accepted strength
    """
    alg_id = _to_algorithm_id(alg)
    algorithm = ALGORITHM_CLASSES[alg_id.family](alg_id, key)
    logger.debug(f"Created {alg_id.value} algorithm")
    return algorithm


def _to_algorithm_id(alg: Union[AlgorithmId, str]) -> AlgorithmId:
    if isinstance(alg, AlgorithmId):
        return alg
    try:
        return AlgorithmId.lookup(alg)
    except ValueError as e:
        raise UnknownAlgorithm(f"Unsupported algorithm: {alg}", details={'alg': alg}) from e

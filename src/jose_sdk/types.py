"""
Type definitions shared across the JOSE SDK

This module holds the algorithm identifiers of RFC 7518, the key families
they belong to and the lifecycle states of a JWS object.
"""

from enum import Enum
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .claims import Claims


class KeyFamily(str, Enum):
    """Cryptographic family a key or algorithm belongs to"""
    HMAC = "hmac"
    RSA = "rsa"
    EC = "ec"
    EDDSA = "eddsa"


class AlgorithmId(str, Enum):
    """JWS ``alg`` header values supported by the SDK"""
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    EDDSA = "EdDSA"

    @property
    def family(self) -> KeyFamily:
        """Key family required by this algorithm"""
        return _FAMILIES[self.value[:2]]

    @property
    def hash_bits(self) -> int:
        """Digest size in bits (0 for EdDSA, which hashes internally)"""
        if self is AlgorithmId.EDDSA:
            return 0
        return int(self.value[2:])

    @classmethod
    def lookup(cls, value: str) -> "AlgorithmId":
        """
        Find the algorithm for an ``alg`` header value.

        Lookup is case-sensitive, as header values are.

        Raises:
            ValueError: If the value is not a known identifier
        """
        return cls(value)


_FAMILIES = {
    "HS": KeyFamily.HMAC,
    "RS": KeyFamily.RSA,
    "PS": KeyFamily.RSA,
    "ES": KeyFamily.EC,
    "Ed": KeyFamily.EDDSA,
}


class JwsState(str, Enum):
    """Lifecycle of a JWS object"""
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    PARSED = "parsed"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"


# Caller-supplied claims predicate evaluated after signature verification
ClaimsPredicate = Callable[["Claims"], bool]

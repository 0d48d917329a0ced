"""
JWS compact serialization

A :class:`JWS` moves through two paths:

* signing: ``UNSIGNED`` -> ``SIGNED``, producing
  ``b64(header).b64(claims).b64(signature)``
* parsing: ``PARSED`` -> ``VERIFIED`` or ``VERIFICATION_FAILED``

Parsing only checks structure. Nothing in a parsed token is trusted until
:meth:`JWS.verify` succeeds. Verification failures always raise; success
returns True. :meth:`JWS.is_valid` offers the boolean form.
"""

import logging
from typing import Optional

from .bearer import from_bearer, to_bearer
from .claims import Claims
from .crypto.algorithms import Algorithm
from .exceptions import (
    ErrorCodes,
    ClaimsRejected,
    JoseError,
    MalformedToken,
    SignatureMismatch,
    SigningError,
    VerifyError,
)
from .header import Header
from .types import ClaimsPredicate, JwsState
from .utils import b64url_decode, b64url_decode_text, b64url_encode

logger = logging.getLogger(__name__)

SEGMENT_SEPARATOR = "."


class JWS:
    """
    A signed (or to-be-signed) JSON Web Signature.

    Attributes:
        header: Decoded header, None until signed or parsed
        claims: Token payload
        signature: Raw signature bytes
        encoded_header: First compact segment
        encoded_payload: Second compact segment
        state: Current lifecycle state
    """

    def __init__(self, claims: Optional[Claims] = None):
        self.header: Optional[Header] = None
        self.claims: Claims = Claims() if claims is None else claims
        self.signature: bytes = b""
        self.encoded_header: Optional[str] = None
        self.encoded_payload: Optional[str] = None
        self.state = JwsState.UNSIGNED

    @property
    def signing_input(self) -> bytes:
        """``encoded_header.encoded_payload`` as ASCII bytes"""
        if self.encoded_header is None or self.encoded_payload is None:
            raise VerifyError("Token has not been signed or parsed")
        return f"{self.encoded_header}{SEGMENT_SEPARATOR}{self.encoded_payload}".encode('ascii')

    def sign(self, algorithm: Algorithm) -> str:
        """
        Sign the claims with ``algorithm`` and return the compact form.

        Raises:
            SigningError: If the token was already signed or parsed, the
                claims cannot be serialized, or the algorithm cannot
                produce a signature
        """
        if self.state is not JwsState.UNSIGNED:
            raise SigningError(f"Cannot sign a token in state '{self.state.value}'")

        header = Header.for_algorithm(algorithm.alg)

        try:
            encoded_header = b64url_encode(header.encode())
            encoded_payload = b64url_encode(self.claims.encode())
            signing_input = f"{encoded_header}{SEGMENT_SEPARATOR}{encoded_payload}".encode('ascii')
            signature = algorithm.sign(signing_input)
        except JoseError:
            raise
        except Exception as e:
            raise SigningError(f"Signing failed: {e}", ErrorCodes.SIGNING_FAILED) from e

        self.header = header
        self.encoded_header = encoded_header
        self.encoded_payload = encoded_payload
        self.signature = signature
        self.state = JwsState.SIGNED
        logger.debug(f"Signed token with {algorithm.alg.value}")
        return self.compact()

    def compact(self) -> str:
        """Return ``header.payload.signature``"""
        if self.state is JwsState.UNSIGNED:
            raise SigningError("Token has not been signed")
        return SEGMENT_SEPARATOR.join(
            (self.encoded_header, self.encoded_payload, b64url_encode(self.signature))
        )

    def bearer(self) -> str:
        return to_bearer(self.compact())

    @classmethod
    def parse(cls, token: str) -> 'JWS':
        """
        Decompose a compact (optionally ``Bearer``-prefixed) token.

        The signature is decoded but not checked.

        Raises:
            MalformedToken: If the token does not have three base64url
                segments carrying UTF-8 text
            HeaderError: If the header is invalid
            MalformedClaims: If the payload is not a JSON object
        """
        if not isinstance(token, str):
            raise MalformedToken("Token must be a string")

        segments = from_bearer(token).split(SEGMENT_SEPARATOR)
        if len(segments) != 3:
            raise MalformedToken(
                f"Token must have 3 segments, got {len(segments)}",
                details={'segments': len(segments)}
            )

        encoded_header, encoded_payload, encoded_signature = segments
        if not encoded_header or not encoded_payload:
            raise MalformedToken("Token header and payload segments cannot be empty")

        header_text = b64url_decode_text(encoded_header)
        payload_text = b64url_decode_text(encoded_payload)
        signature = b64url_decode(encoded_signature)

        header = Header.decode(header_text)
        claims = Claims.decode(payload_text)

        jws = cls(claims)
        jws.header = header
        jws.signature = signature
        jws.encoded_header = encoded_header
        jws.encoded_payload = encoded_payload
        jws.state = JwsState.PARSED
        logger.debug(f"Parsed {jws.header.alg.value} token")
        return jws

    def verify(self, algorithm: Algorithm, predicate: Optional[ClaimsPredicate] = None) -> bool:
        """
        Verify the signature with ``algorithm`` and optionally the claims.

        Args:
            algorithm: Algorithm bound to the verification key. Its identifier
                must match the header ``alg``.
            predicate: Called with the claims after the signature checks out;
                a falsy result rejects the token.

        Returns:
            bool: Always True; every failure raises

        Raises:
            SignatureMismatch: If the algorithm differs from the header or
                the signature does not verify
            ClaimsRejected: If ``predicate`` rejects the claims
        """
        if self.state is JwsState.UNSIGNED:
            raise VerifyError("Cannot verify a token that has not been signed or parsed")

        try:
            self._verify_signature(algorithm)
        except VerifyError:
            self.state = JwsState.VERIFICATION_FAILED
            raise

        if predicate is not None and not predicate(self.claims):
            self.state = JwsState.VERIFICATION_FAILED
            logger.debug("Token claims rejected by predicate")
            raise ClaimsRejected("Token claims rejected")

        self.state = JwsState.VERIFIED
        return True

    def is_valid(self, algorithm: Algorithm, predicate: Optional[ClaimsPredicate] = None) -> bool:
        """Boolean form of :meth:`verify`"""
        try:
            return self.verify(algorithm, predicate)
        except VerifyError:
            return False

    def _verify_signature(self, algorithm: Algorithm) -> None:
        if algorithm.alg is not self.header.alg:
            logger.debug(f"Algorithm mismatch: token uses {self.header.alg.value}, verifier {algorithm.alg.value}")
            raise SignatureMismatch(
                f"Token is signed with {self.header.alg.value}, not {algorithm.alg.value}",
                ErrorCodes.ALGORITHM_MISMATCH,
                {'token_alg': self.header.alg.value, 'verifier_alg': algorithm.alg.value}
            )

        if not algorithm.verify(self.signing_input, self.signature):
            logger.debug(f"{algorithm.alg.value} signature mismatch")
            raise SignatureMismatch("Token signature does not match")

    def __repr__(self) -> str:
        alg = self.header.alg.value if self.header else None
        return f"JWS(alg={alg}, state={self.state.value})"


def sign(claims: Claims, algorithm: Algorithm) -> str:
    """Sign ``claims`` and return the compact token"""
    return JWS(claims).sign(algorithm)


def sign_bearer(claims: Claims, algorithm: Algorithm) -> str:
    """Sign ``claims`` and return ``Bearer <token>``"""
    return to_bearer(sign(claims, algorithm))


def parse(token: str) -> JWS:
    """Parse a compact or bearer token without verifying it"""
    return JWS.parse(token)


def verify(token: str, algorithm: Algorithm, predicate: Optional[ClaimsPredicate] = None) -> JWS:
    """
    Parse and verify ``token`` in one step.

    Returns:
        JWS: The verified token
    """
    jws = JWS.parse(token)
    jws.verify(algorithm, predicate)
    return jws

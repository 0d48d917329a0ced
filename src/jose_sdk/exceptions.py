"""
Exception classes for the JOSE Python SDK
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Standard error codes carried by SDK exceptions"""

    # Header errors
    MALFORMED_JSON = "MALFORMED_JSON"
    MISSING_TYP = "MISSING_TYP"
    INVALID_TYP = "INVALID_TYP"
    MISSING_ALG = "MISSING_ALG"
    UNKNOWN_ALGORITHM = "UNKNOWN_ALGORITHM"

    # Algorithm construction errors
    FAMILY_MISMATCH = "FAMILY_MISMATCH"
    CURVE_MISMATCH = "CURVE_MISMATCH"
    KEY_TOO_WEAK = "KEY_TOO_WEAK"

    # Token parsing errors
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    MALFORMED_CLAIMS = "MALFORMED_CLAIMS"

    # Verification errors
    SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"
    ALGORITHM_MISMATCH = "ALGORITHM_MISMATCH"
    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"
    CLAIMS_REJECTED = "CLAIMS_REJECTED"

    # Key loading errors
    KEY_IO_ERROR = "KEY_IO_ERROR"
    INVALID_PASSPHRASE = "INVALID_PASSPHRASE"
    INVALID_KEY_DATA = "INVALID_KEY_DATA"
    PASSPHRASE_REQUIRED = "PASSPHRASE_REQUIRED"

    # Other
    SIGNING_FAILED = "SIGNING_FAILED"
    PUBLIC_KEY_CANNOT_SIGN = "PUBLIC_KEY_CANNOT_SIGN"
    INVALID_CONFIG = "INVALID_CONFIG"


class JoseError(Exception):
    """Base exception for all JOSE SDK errors"""

    default_code = "UNKNOWN_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message='{self.message}', error_code='{self.error_code}')"


class HeaderError(JoseError):
    """Exception raised when a JOSE header cannot be decoded or is invalid"""
    pass


class MalformedJson(HeaderError):
    """Header text is not a JSON object"""
    default_code = ErrorCodes.MALFORMED_JSON


class MissingTyp(HeaderError):
    """Header has no ``typ`` field"""
    default_code = ErrorCodes.MISSING_TYP


class InvalidTyp(HeaderError):
    """Header ``typ`` is not exactly ``JWT``"""
    default_code = ErrorCodes.INVALID_TYP


class MissingAlg(HeaderError):
    """Header has no ``alg`` field"""
    default_code = ErrorCodes.MISSING_ALG


class UnknownAlgorithm(HeaderError):
    """Header ``alg`` is not a supported algorithm identifier"""
    default_code = ErrorCodes.UNKNOWN_ALGORITHM


class ConstructionError(JoseError):
    """Exception raised when an algorithm cannot be bound to a key"""
    pass


class FamilyMismatch(ConstructionError):
    """Algorithm family and key family disagree"""
    default_code = ErrorCodes.FAMILY_MISMATCH


class KeyTooWeak(ConstructionError):
    """Key is below the accepted minimum strength"""
    default_code = ErrorCodes.KEY_TOO_WEAK


class ParseError(JoseError):
    """Exception raised for structurally invalid tokens"""
    pass


class MalformedToken(ParseError):
    default_code = ErrorCodes.MALFORMED_TOKEN


class MalformedClaims(ParseError):
    default_code = ErrorCodes.MALFORMED_CLAIMS


class VerifyError(JoseError):
    """Exception raised when a parsed token fails verification"""
    pass


class SignatureMismatch(VerifyError):
    default_code = ErrorCodes.SIGNATURE_MISMATCH


class ClaimsRejected(VerifyError):
    default_code = ErrorCodes.CLAIMS_REJECTED


class KeyLoadError(JoseError):
    """Exception raised for key loading errors"""
    pass


class KeyIOError(KeyLoadError):
    default_code = ErrorCodes.KEY_IO_ERROR


class PassphraseRequired(KeyLoadError):
    default_code = ErrorCodes.PASSPHRASE_REQUIRED


class SigningError(JoseError):
    """Exception raised when a signature cannot be produced"""
    default_code = ErrorCodes.SIGNING_FAILED


class ConfigError(JoseError):
    """Configuration loading and validation error"""
    default_code = ErrorCodes.INVALID_CONFIG

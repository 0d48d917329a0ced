"""
JOSE Python SDK
JWS compact token signing and verification with HMAC, RSA, EC and EdDSA keys
"""

from .version import __version__
from .types import (
    AlgorithmId,
    KeyFamily,
    JwsState,
    ClaimsPredicate,
)
from .header import Header
from .claims import Claims, ClaimsCheck
from .crypto import (
    KeyMaterial,
    generate_rsa,
    generate_ec,
    generate_ed25519,
    symmetric_key,
    derive_public,
    SecureString,
    load_from_file,
    load_from_pem,
    Algorithm,
    HmacAlgorithm,
    RsaAlgorithm,
    EcAlgorithm,
    EdDSAAlgorithm,
    create_algorithm,
)
from .jws import (
    JWS,
    sign,
    sign_bearer,
    parse,
    verify,
)
from .bearer import (
    BEARER_PREFIX,
    to_bearer,
    from_bearer,
    is_bearer,
)
from .config import (
    JoseConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
    reset_default_config,
    load_config_from_file,
    load_config_from_env,
)
from .exceptions import (
    ErrorCodes,
    JoseError,
    HeaderError,
    MalformedJson,
    MissingTyp,
    InvalidTyp,
    MissingAlg,
    UnknownAlgorithm,
    ConstructionError,
    FamilyMismatch,
    KeyTooWeak,
    ParseError,
    MalformedToken,
    MalformedClaims,
    VerifyError,
    SignatureMismatch,
    ClaimsRejected,
    KeyLoadError,
    KeyIOError,
    PassphraseRequired,
    SigningError,
    ConfigError,
)


# Public API exports
__all__ = [
    '__version__',
    # Types
    'AlgorithmId',
    'KeyFamily',
    'JwsState',
    'ClaimsPredicate',
    # Header and claims
    'Header',
    'Claims',
    'ClaimsCheck',
    # Keys and algorithms
    'KeyMaterial',
    'generate_rsa',
    'generate_ec',
    'generate_ed25519',
    'symmetric_key',
    'derive_public',
    'SecureString',
    'load_from_file',
    'load_from_pem',
    'Algorithm',
    'HmacAlgorithm',
    'RsaAlgorithm',
    'EcAlgorithm',
    'EdDSAAlgorithm',
    'create_algorithm',
    # JWS
    'JWS',
    'sign',
    'sign_bearer',
    'parse',
    'verify',
    # Bearer transport
    'BEARER_PREFIX',
    'to_bearer',
    'from_bearer',
    'is_bearer',
    # Configuration
    'JoseConfig',
    'LoggingConfig',
    'get_default_config',
    'set_default_config',
    'reset_default_config',
    'load_config_from_file',
    'load_config_from_env',
    # Exceptions
    'ErrorCodes',
    'JoseError',
    'HeaderError',
    'MalformedJson',
    'MissingTyp',
    'InvalidTyp',
    'MissingAlg',
    'UnknownAlgorithm',
    'ConstructionError',
    'FamilyMismatch',
    'KeyTooWeak',
    'ParseError',
    'MalformedToken',
    'MalformedClaims',
    'VerifyError',
    'SignatureMismatch',
    'ClaimsRejected',
    'KeyLoadError',
    'KeyIOError',
    'PassphraseRequired',
    'SigningError',
    'ConfigError',
]

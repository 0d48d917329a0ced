"""
Cryptographic operations for the JOSE Python SDK
"""

from .keys import (
    KeyMaterial,
    EC_CURVES,
    generate_rsa,
    generate_ec,
    generate_ed25519,
    symmetric_key,
    derive_public,
)

from .loader import (
    SecureString,
    PassphraseProvider,
    PASSPHRASE_READ,
    PASSPHRASE_WRITE,
    load_from_file,
    load_from_pem,
)

from .algorithms import (
    Algorithm,
    HmacAlgorithm,
    RsaAlgorithm,
    EcAlgorithm,
    EdDSAAlgorithm,
    create_algorithm,
)

__all__ = [
    # Key material
    'KeyMaterial',
    'EC_CURVES',
    'generate_rsa',
    'generate_ec',
    'generate_ed25519',
    'symmetric_key',
    'derive_public',

    # Key loading
    'SecureString',
    'PassphraseProvider',
    'PASSPHRASE_READ',
    'PASSPHRASE_WRITE',
    'load_from_file',
    'load_from_pem',

    # Algorithms
    'Algorithm',
    'HmacAlgorithm',
    'RsaAlgorithm',
    'EcAlgorithm',
    'EdDSAAlgorithm',
    'create_algorithm',
]

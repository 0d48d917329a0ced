"""
PEM key loading with passphrase callbacks

Encrypted private keys are decrypted with a passphrase supplied by a
caller-provided callback. The callback receives a :class:`SecureString`
buffer and a read/write flag and must write the passphrase into the buffer.
The buffer is wiped as soon as the key has been decrypted.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ..exceptions import ErrorCodes, FamilyMismatch, KeyIOError, PassphraseRequired
from .keys import KeyMaterial

logger = logging.getLogger(__name__)

# Passed to the provider: 0 when decrypting (reading) a key, 1 when encrypting
PASSPHRASE_READ = 0
PASSPHRASE_WRITE = 1


class SecureString:
    """
    Mutable passphrase buffer that can be wiped after use.

    Python gives no hard guarantee that copies are never made, so wiping is
    best effort: the backing ``bytearray`` is zeroed in place.
    """

    def __init__(self):
        self._buffer = bytearray()

    def assign(self, value: Union[str, bytes]) -> None:
        """Replace the buffer contents with ``value``"""
        if isinstance(value, str):
            value = value.encode('utf-8')
        self.clear()
        self._buffer.extend(value)

    def clear(self) -> None:
        """Zero and empty the buffer"""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        del self._buffer[:]

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"SecureString(<{len(self._buffer)} bytes>)"


PassphraseProvider = Callable[[SecureString, int], None]


def load_from_pem(data: bytes, passphrase_provider: Optional[PassphraseProvider] = None) -> KeyMaterial:
    """
    Load a private or public key from PEM data.

    Args:
        data: PEM encoded key
        passphrase_provider: Callback filling in the passphrase of an
            encrypted private key

    Returns:
        KeyMaterial: The loaded key

    Raises:
        PassphraseRequired: If the key is encrypted and no provider was given
        KeyIOError: If the data cannot be decoded or the passphrase is wrong
        FamilyMismatch: If the key type is not supported
    """
    if isinstance(data, str):
        data = data.encode('ascii')

    if b"PRIVATE KEY" not in data:
        return _load_public_pem(data)

    try:
        key = serialization.load_pem_private_key(data, password=None)
    except TypeError:
        # The key is encrypted
        key = _load_encrypted_pem(data, passphrase_provider)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyIOError(f"Failed to parse PEM private key: {e}", ErrorCodes.INVALID_KEY_DATA) from e

    return _wrap(key)


def load_from_file(path: Union[str, Path], passphrase_provider: Optional[PassphraseProvider] = None) -> KeyMaterial:
    """
    Load a PEM key from ``path``.

    Raises:
        KeyIOError: If the file cannot be read or decoded
        PassphraseRequired: If the key is encrypted and no provider was given
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise KeyIOError(f"Failed to read key file {path}: {e}", details={'path': str(path)}) from e

    key = load_from_pem(data, passphrase_provider)
    logger.debug(f"Loaded {key.family.value} key from {path}")
    return key


def _load_encrypted_pem(data: bytes, passphrase_provider: Optional[PassphraseProvider]):
    if passphrase_provider is None:
        raise PassphraseRequired("Private key is encrypted and no passphrase provider was given")

    passphrase = SecureString()
    try:
        passphrase_provider(passphrase, PASSPHRASE_READ)
        if not len(passphrase):
            raise PassphraseRequired("Passphrase provider returned an empty passphrase")
        return serialization.load_pem_private_key(data, password=bytes(passphrase))
    except (ValueError, TypeError) as e:
        raise KeyIOError(
            "Failed to decrypt private key - invalid passphrase or corrupted data",
            ErrorCodes.INVALID_PASSPHRASE
        ) from e
    finally:
        passphrase.clear()


def _load_public_pem(data: bytes) -> KeyMaterial:
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyIOError(f"Failed to parse PEM public key: {e}", ErrorCodes.INVALID_KEY_DATA) from e
    return _wrap(key)


def _wrap(key) -> KeyMaterial:
    try:
        return KeyMaterial.from_key(key)
    except FamilyMismatch:
        logger.warning(f"Rejected unsupported key type {type(key).__name__}")
        raise

"""
Shared fixtures for the JOSE SDK test suite
"""

import pytest

from jose_sdk.config import reset_default_config
from jose_sdk.crypto import generate_rsa, derive_public


@pytest.fixture(autouse=True)
def default_config():
    """Restore the built-in configuration after every test"""
    yield
    reset_default_config()


@pytest.fixture(scope="session")
def rsa_key():
    """1024-bit RSA private key, generated once per session"""
    return generate_rsa(1024)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_key):
    """Public half of ``rsa_key``"""
    return derive_public(rsa_key)

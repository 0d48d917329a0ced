"""
``Authorization: Bearer`` transport form of a compact JWS
"""

BEARER_PREFIX = "Bearer "


def to_bearer(token: str) -> str:
    """Prefix a compact token with ``Bearer ``"""
    return BEARER_PREFIX + token


def from_bearer(value: str) -> str:
    """
    Strip a leading ``Bearer `` prefix.

    The prefix is matched literally and case-sensitively. Values without it
    are returned unchanged.
    """
    if value.startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):]
    return value


def is_bearer(value: str) -> bool:
    return value.startswith(BEARER_PREFIX)

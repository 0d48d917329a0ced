"""
JWT claims set

:class:`Claims` is a mutable mapping from claim name to JSON value with typed
properties for the registered claims of RFC 7519 section 4.1. The
:meth:`Claims.check` view evaluates assertions without touching the
underlying data.
"""

import time
from datetime import datetime, timezone
from collections.abc import MutableMapping
from typing import Any, Dict, Iterator, List, Optional, Union

from .config import get_default_config
from .exceptions import MalformedClaims
from .utils import compact_json, parse_json

NumericDate = Union[int, float, datetime]

REGISTERED_CLAIMS = ('iss', 'sub', 'aud', 'exp', 'nbf', 'iat', 'jti')


def to_numeric_date(value: NumericDate) -> int:
    """Convert an epoch number or datetime to integer seconds since epoch."""
    if isinstance(value, bool):
        raise TypeError("NumericDate cannot be a boolean")
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, (int, float)):
        return int(value)
    raise TypeError(f"NumericDate must be int, float or datetime, got {type(value).__name__}")


def _string_property(name: str, doc: str) -> property:
    def getter(self) -> Optional[str]:
        return self._data.get(name)

    def setter(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Claim '{name}' must be a string")
        self._data[name] = value

    def deleter(self) -> None:
        self._data.pop(name, None)

    return property(getter, setter, deleter, doc)


def _date_property(name: str, doc: str) -> property:
    def getter(self) -> Optional[int]:
        return self._data.get(name)

    def setter(self, value: NumericDate) -> None:
        self._data[name] = to_numeric_date(value)

    def deleter(self) -> None:
        self._data.pop(name, None)

    return property(getter, setter, deleter, doc)


class Claims(MutableMapping):
    """
    JWT payload.

    Registered claims are reachable both as properties (``claims.iss``) and
    through the mapping interface (``claims['iss']``); both read and write
    the same underlying JSON object.
    """

    iss = _string_property('iss', "Issuer")
    sub = _string_property('sub', "Subject")
    jti = _string_property('jti', "JWT ID")
    exp = _date_property('exp', "Expiration time (seconds since epoch)")
    nbf = _date_property('nbf', "Not-before time (seconds since epoch)")
    iat = _date_property('iat', "Issued-at time (seconds since epoch)")

    def __init__(self, data: Optional[Dict[str, Any]] = None, **claims: Any):
        self._data: Dict[str, Any] = {}
        if data:
            self.update(data)
        if claims:
            self.update(claims)

    @property
    def aud(self) -> Optional[Union[str, List[str]]]:
        """Audience, a single string or a list of strings"""
        return self._data.get('aud')

    @aud.setter
    def aud(self, value: Union[str, List[str]]) -> None:
        if isinstance(value, str):
            self._data['aud'] = value
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            self._data['aud'] = list(value)
        else:
            raise TypeError("Claim 'aud' must be a string or a list of strings")

    @aud.deleter
    def aud(self) -> None:
        self._data.pop('aud', None)

    # Mapping interface

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if not isinstance(name, str):
            raise TypeError("Claim names must be strings")
        if name in REGISTERED_CLAIMS:
            setattr(self, name, value)
        else:
            self._data[name] = value

    def __delitem__(self, name: str) -> None:
        del self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Claims):
            return self._data == other._data
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Claims({self._data!r})"

    def set(self, name: str, value: Any) -> 'Claims':
        """Set a claim and return self for chaining"""
        self[name] = value
        return self

    def has(self, name: str) -> bool:
        return name in self._data

    def remove(self, name: str) -> None:
        self._data.pop(name, None)

    def check(self) -> 'ClaimsCheck':
        """Return a read-only assertion view over these claims"""
        return ClaimsCheck(self)

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def encode(self) -> str:
        """Serialize to compact JSON"""
        return compact_json(self._data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Claims':
        if not isinstance(data, dict):
            raise MalformedClaims("Claims must be a JSON object")
        claims = cls()
        # Decoded values are kept as-is; typed setters only guard local writes
        claims._data.update(data)
        return claims

    @classmethod
    def decode(cls, json_text: str) -> 'Claims':
        """
        Decode claims JSON text.

        Raises:
            MalformedClaims: If the text is not a JSON object
        """
        try:
            data = parse_json(json_text)
        except (TypeError, ValueError) as e:
            raise MalformedClaims(f"Failed to parse claims JSON: {e}") from e
        return cls.from_dict(data)


class ClaimsCheck:
    """
    Assertion view over a :class:`Claims` instance.

    Every method returns a bool and never mutates the claims. A missing claim
    never satisfies an assertion.
    """

    def __init__(self, claims: Claims):
        self._claims = claims

    def claim(self, name: str, expected: Any) -> bool:
        """Custom claim equals ``expected``"""
        return self._claims.has(name) and self._claims[name] == expected

    def iss(self, expected: str) -> bool:
        return self.claim('iss', expected)

    def sub(self, expected: str) -> bool:
        return self.claim('sub', expected)

    def jti(self, expected: str) -> bool:
        return self.claim('jti', expected)

    def aud(self, expected: str) -> bool:
        """``expected`` is the audience or one of the audiences"""
        aud = self._claims.aud
        if isinstance(aud, list):
            return expected in aud
        return aud is not None and aud == expected

    def exp(self, now: Optional[NumericDate] = None, leeway: Optional[int] = None) -> bool:
        """Token has an expiry that is still in the future"""
        exp = self._claims.exp
        if not isinstance(exp, (int, float)):
            return False
        return self._now(now) < exp + self._leeway(leeway)

    def nbf(self, now: Optional[NumericDate] = None, leeway: Optional[int] = None) -> bool:
        """Token has a not-before time that has been reached"""
        nbf = self._claims.nbf
        if not isinstance(nbf, (int, float)):
            return False
        return self._now(now) >= nbf - self._leeway(leeway)

    def iat(self, now: Optional[NumericDate] = None, leeway: Optional[int] = None) -> bool:
        """Token has an issue time that is not in the future"""
        iat = self._claims.iat
        if not isinstance(iat, (int, float)):
            return False
        return iat <= self._now(now) + self._leeway(leeway)

    @staticmethod
    def _now(now: Optional[NumericDate]) -> int:
        return int(time.time()) if now is None else to_numeric_date(now)

    @staticmethod
    def _leeway(leeway: Optional[int]) -> int:
        return get_default_config().claims_leeway_seconds if leeway is None else leeway

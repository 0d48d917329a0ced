"""
JOSE header handling

A header is the first segment of a compact JWS. Only ``typ`` and ``alg`` are
modelled; ``typ`` must be the exact string ``JWT`` and ``alg`` one of the
identifiers in :class:`~jose_sdk.types.AlgorithmId`.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from .exceptions import (
    MalformedJson,
    MissingTyp,
    InvalidTyp,
    MissingAlg,
    UnknownAlgorithm,
)
from .types import AlgorithmId
from .utils import compact_json, parse_json

JWT_TYP = "JWT"


@dataclass(frozen=True)
class Header:
    """
    Decoded JOSE header.

    Attributes:
        alg: Signature algorithm named by the header
        typ: Token type, always ``JWT``
    """
    alg: AlgorithmId
    typ: str = JWT_TYP

    def __post_init__(self):
        """Validate header after initialization"""
        if self.typ != JWT_TYP:
            raise InvalidTyp(f"Header typ must be '{JWT_TYP}', got '{self.typ}'")
        if not isinstance(self.alg, AlgorithmId):
            raise UnknownAlgorithm(f"Unsupported algorithm: {self.alg!r}")

    @classmethod
    def for_algorithm(cls, alg: Union[AlgorithmId, str]) -> "Header":
        """Build the header used when signing with ``alg``."""
        if isinstance(alg, AlgorithmId):
            return cls(alg=alg)
        return cls(alg=_lookup_algorithm(alg))

    @classmethod
    def decode(cls, json_text: str) -> "Header":
        """
        Decode header JSON text.

        Args:
            json_text: Header JSON as found in the first token segment

        Returns:
            Header: The validated header

        Raises:
            MalformedJson: If the text is not a JSON object
            MissingTyp: If ``typ`` is absent
            InvalidTyp: If ``typ`` is not exactly ``JWT``
            MissingAlg: If ``alg`` is absent
            UnknownAlgorithm: If ``alg`` is not a supported identifier
        """
        try:
            data = parse_json(json_text)
        except (TypeError, ValueError) as e:
            raise MalformedJson(f"Failed to parse header JSON: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> "Header":
        """Validate an already parsed header object."""
        if not isinstance(data, dict):
            raise MalformedJson("Header must be a JSON object")

        if 'typ' not in data:
            raise MissingTyp("Header is missing 'typ'")

        typ = data['typ']
        if typ != JWT_TYP:
            raise InvalidTyp(
                f"Header typ must be '{JWT_TYP}'",
                details={'typ': typ}
            )

        if 'alg' not in data:
            raise MissingAlg("Header is missing 'alg'")

        return cls(alg=_lookup_algorithm(data['alg']), typ=typ)

    def to_dict(self) -> Dict[str, str]:
        return {'typ': self.typ, 'alg': self.alg.value}

    def encode(self) -> str:
        """Serialize to the compact JSON form, e.g. ``{"typ":"JWT","alg":"RS256"}``."""
        return compact_json(self.to_dict())


def _lookup_algorithm(value: Any) -> AlgorithmId:
    if not isinstance(value, str):
        raise UnknownAlgorithm("Header alg must be a string", details={'alg': value})
    try:
        return AlgorithmId.lookup(value)
    except ValueError as e:
        raise UnknownAlgorithm(f"Unsupported algorithm: {value}", details={'alg': value}) from e

"""
jwtlab Algorithms - The closed set of JWS algorithms the engine understands.

Each algorithm belongs to exactly one family, and the family decides which
verification strategy runs and what kind of key material is required.
"""

from enum import Enum
from typing import Optional, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from jwtlab.errors import UnsupportedAlgorithm


class AlgorithmFamily(Enum):
    """Signature scheme families."""

    HMAC = "hmac"
    RSA_PKCS1 = "rsa-pkcs1v15"
    RSA_PSS = "rsa-pss"
    ECDSA = "ecdsa"

    @property
    def is_symmetric(self) -> bool:
        return self is AlgorithmFamily.HMAC


_DIGESTS = {
    256: hashes.SHA256,
    384: hashes.SHA384,
    512: hashes.SHA512,
}

# ES512 uses P-521, so the curve size does not follow the digest size
_CURVES = {
    256: (ec.SECP256R1, 32),
    384: (ec.SECP384R1, 48),
    512: (ec.SECP521R1, 66),
}

_FAMILIES = {
    "HS": AlgorithmFamily.HMAC,
    "RS": AlgorithmFamily.RSA_PKCS1,
    "PS": AlgorithmFamily.RSA_PSS,
    "ES": AlgorithmFamily.ECDSA,
}


class Algorithm(Enum):
    """
    Supported JWS algorithms (RFC 7518).

    Example:
        >>> Algorithm.from_name("es256").curve.name
        'secp256r1'
    """

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

    @property
    def family(self) -> AlgorithmFamily:
        return _FAMILIES[self.value[:2]]

    @property
    def bits(self) -> int:
        return int(self.value[2:])

    @property
    def digest(self) -> Type[hashes.HashAlgorithm]:
        """The cryptography hash class used by this algorithm."""
        return _DIGESTS[self.bits]

    @property
    def hash_name(self) -> str:
        """hashlib name of the digest, e.g. 'sha256'."""
        return f"sha{self.bits}"

    @property
    def curve(self) -> Optional[Type[ec.EllipticCurve]]:
        """Elliptic curve for ES algorithms, None for everything else."""
        if self.family is not AlgorithmFamily.ECDSA:
            return None
        return _CURVES[self.bits][0]

    @property
    def component_size(self) -> Optional[int]:
        """Byte width of each of R and S in a raw ECDSA signature."""
        if self.family is not AlgorithmFamily.ECDSA:
            return None
        return _CURVES[self.bits][1]

    @classmethod
    def lookup(cls, name: object) -> Optional["Algorithm"]:
        """Case-insensitive lookup; returns None for anything unrecognized."""
        if isinstance(name, Algorithm):
            return name
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip().upper())
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: object) -> "Algorithm":
        """
        Resolve an algorithm name or instance.

        Raises:
            UnsupportedAlgorithm: If the name is not a supported algorithm.
        """
        algorithm = cls.lookup(name)
        if algorithm is None:
            raise UnsupportedAlgorithm(f"unknown algorithm {name!r}")
        return algorithm

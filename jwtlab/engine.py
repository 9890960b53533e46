"""
jwtlab Engine - Decode, verify and generate JSON Web Tokens.

The engine is stateless apart from its crypto backend, so one instance can be
shared freely between threads.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from jwtlab import config
from jwtlab.algorithms import Algorithm
from jwtlab.backend import CryptoBackend, CryptographyBackend
from jwtlab.claims import ClaimValidation, extract_standard_claims, validate_claims
from jwtlab.encoding import (
    JSONObject,
    b64url_decode,
    b64url_encode,
    canonical_json,
    parse_json_object,
    pretty_json,
)
from jwtlab.errors import (
    AlgorithmMismatch,
    InvalidJSON,
    JWTError,
    MalformedToken,
    MissingSecret,
    UnsupportedAlgorithm,
)
from jwtlab.verifiers import KeyMaterial, build_strategies, hmac_sign


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedToken:
    """A token split into its parts. Nothing here has been verified."""

    header: JSONObject
    payload: JSONObject
    signature: str
    """The signature segment, still base64url encoded."""

    header_json: str
    payload_json: str

    @property
    def algorithm(self) -> Optional[Algorithm]:
        """Algorithm named by the header; a display hint only."""
        return Algorithm.lookup(self.header.get("alg"))


def split_token(token: str) -> Tuple[str, str, str]:
    """
    Split a compact token into its three segments.

    Raises:
        MalformedToken: Unless there are exactly three non-empty segments.
    """
    if not isinstance(token, str):
        raise MalformedToken("Token must be a string")

    parts = token.strip().split(".")
    if len(parts) != 3 or not all(parts):
        logger.debug(f"Rejecting token with {len(parts)} segment(s)")
        raise MalformedToken()
    return parts[0], parts[1], parts[2]


class JWTEngine:
    """
    Decodes, verifies and generates JWTs.

    Example:
        >>> engine = JWTEngine()
        >>> token = engine.generate({"sub": "1234567890"}, "secret")
        >>> engine.verify(token, "HS256", "secret")
        True
        >>> engine.decode(token).payload
        {'sub': '1234567890'}
    """

    def __init__(self, backend: Optional[CryptoBackend] = None):
        """
        Args:
            backend: Crypto provider for RSA/ECDSA (default: CryptographyBackend).
        """
        self.backend = backend or CryptographyBackend()
        self._strategies = build_strategies(self.backend)

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode(self, token: str) -> DecodedToken:
        """
        Decode a token without verifying its signature.

        Raises:
            MalformedToken: Wrong number of segments.
            InvalidEncoding: Header or payload is not base64url.
            InvalidJSON: Header or payload is not a JSON object.
        """
        header_segment, payload_segment, signature = split_token(token)

        header = parse_json_object(b64url_decode(header_segment))
        payload = parse_json_object(b64url_decode(payload_segment))

        return DecodedToken(
            header=header,
            payload=payload,
            signature=signature,
            header_json=pretty_json(header, config.JSON_INDENT),
            payload_json=pretty_json(payload, config.JSON_INDENT),
        )

    def detect_algorithm(self, token: str) -> Optional[Algorithm]:
        """
        Best-effort algorithm hint from the header segment alone.

        Payload and signature are ignored, so partially corrupted tokens still
        produce a hint. Never use this in place of verify().
        """
        if not isinstance(token, str) or not token.strip():
            return None
        try:
            header = parse_json_object(b64url_decode(token.strip().split(".")[0]))
        except JWTError:
            return None
        return Algorithm.lookup(header.get("alg"))

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify(
        self,
        token: str,
        algorithm: Union[Algorithm, str],
        key: Optional[KeyMaterial] = None,
    ) -> bool:
        """
        Verify a token's signature.

        The header is decoded again here and its 'alg' must match the
        requested algorithm, so an HMAC secret can never be used to check an
        RSA token (or the reverse).

        Args:
            token: Compact serialized JWT.
            algorithm: Expected algorithm, as an Algorithm or its name.
            key: HMAC secret for HS*, PEM/JWK public key for RS*/PS*/ES*.

        Returns:
            True if the signature is valid, False if it does not match.

        Raises:
            JWTError: If verification could not be attempted (see errors).
        """
        algorithm = Algorithm.from_name(algorithm)
        header_segment, payload_segment, signature_segment = split_token(token)

        header = parse_json_object(b64url_decode(header_segment))
        declared = header.get("alg")
        # same name rules as detect_algorithm, so the hint and the check agree
        if Algorithm.lookup(declared) is not algorithm:
            raise AlgorithmMismatch(algorithm.value, declared)

        signing_input = f"{header_segment}.{payload_segment}".encode("utf-8")
        signature = b64url_decode(signature_segment)

        strategy = self._strategies[algorithm.family]
        valid = strategy.verify(algorithm, signing_input, signature, key)
        logger.debug(f"{algorithm.value} verification result: {valid}")
        return valid

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(
        self,
        payload: JSONObject,
        secret: KeyMaterial,
        algorithm: Union[Algorithm, str] = Algorithm.HS256,
    ) -> str:
        """
        Create an HMAC-signed token.

        Header and payload are serialized with keys sorted at every level, so
        the same input always yields the same token.

        Raises:
            MissingSecret: If secret is empty.
            InvalidJSON: If payload is not a JSON-serializable object.
            UnsupportedAlgorithm: For non-HMAC algorithms.
        """
        algorithm = Algorithm.from_name(algorithm)
        if not algorithm.family.is_symmetric:
            raise UnsupportedAlgorithm(
                f"token generation supports HMAC only, not {algorithm.value}"
            )
        if not secret:
            raise MissingSecret()
        if not isinstance(payload, dict):
            raise InvalidJSON(f"Payload must be a JSON object, got {type(payload).__name__}")

        header = {"alg": algorithm.value, "typ": "JWT"}
        encoded_header = b64url_encode(canonical_json(header))
        encoded_payload = b64url_encode(canonical_json(payload))
        signing_input = f"{encoded_header}.{encoded_payload}"
        signature = hmac_sign(algorithm, secret, signing_input.encode("ascii"))

        logger.debug(f"Generated {algorithm.value} token")
        return f"{signing_input}.{b64url_encode(signature)}"

    # -------------------------------------------------------------------------
    # Claims
    # -------------------------------------------------------------------------

    def validate_claims(
        self,
        payload: JSONObject,
        now: Optional[float] = None,
        leeway: Optional[int] = None,
    ) -> List[ClaimValidation]:
        """Report on exp/nbf/iat and list the identity claims present."""
        return validate_claims(payload, now=now, leeway=leeway)

    def extract_standard_claims(self, payload: JSONObject) -> JSONObject:
        return extract_standard_claims(payload)

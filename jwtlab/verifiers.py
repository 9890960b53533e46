"""
jwtlab Verifiers - One signature verification strategy per algorithm family.

``build_strategies()`` maps each family to its strategy; the engine never
branches on the algorithm family itself.
"""

import hashlib
import hmac
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from jwtlab.algorithms import Algorithm, AlgorithmFamily
from jwtlab.backend import CryptoBackend
from jwtlab.der import raw_to_der
from jwtlab.errors import MissingPublicKey, MissingSecret


logger = logging.getLogger(__name__)

KeyMaterial = Union[str, bytes]


def hmac_sign(algorithm: Algorithm, secret: KeyMaterial, message: bytes) -> bytes:
    """Compute HMAC-SHA{256,384,512} of message under secret."""
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    return hmac.new(secret, message, getattr(hashlib, algorithm.hash_name)).digest()


class SignatureVerifier(ABC):
    """Abstract verification strategy."""

    @abstractmethod
    def verify(
        self,
        algorithm: Algorithm,
        signing_input: bytes,
        signature: bytes,
        key: Optional[KeyMaterial],
    ) -> bool:
        pass


class HMACVerifier(SignatureVerifier):
    """HS256/384/512: recompute the MAC and compare in constant time."""

    def verify(self, algorithm, signing_input, signature, key):
        if not key:
            raise MissingSecret()
        expected = hmac_sign(algorithm, key, signing_input)
        return hmac.compare_digest(expected, signature)


class PublicKeyVerifier(SignatureVerifier):
    """RS/PS algorithms: parse the public key and delegate to the backend."""

    def __init__(self, backend: CryptoBackend):
        self._backend = backend

    def verify(self, algorithm, signing_input, signature, key):
        if not key:
            raise MissingPublicKey()
        public_key = self._backend.parse_public_key(key)
        return self._backend.verify_signature(
            algorithm, signing_input, self.prepare_signature(algorithm, signature), public_key
        )

    def prepare_signature(self, algorithm: Algorithm, signature: bytes) -> bytes:
        return signature


class ECDSAVerifier(PublicKeyVerifier):
    """ES algorithms: JWS raw R||S is converted to DER before verification."""

    def prepare_signature(self, algorithm: Algorithm, signature: bytes) -> bytes:
        return raw_to_der(signature, algorithm.component_size)


def build_strategies(backend: CryptoBackend) -> Dict[AlgorithmFamily, SignatureVerifier]:
    rsa_verifier = PublicKeyVerifier(backend)
    return {
        AlgorithmFamily.HMAC: HMACVerifier(),
        AlgorithmFamily.RSA_PKCS1: rsa_verifier,
        AlgorithmFamily.RSA_PSS: rsa_verifier,
        AlgorithmFamily.ECDSA: ECDSAVerifier(backend),
    }

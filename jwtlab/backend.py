"""
jwtlab Crypto Backend - Minimal capability interface over a crypto library.

The engine never touches ``cryptography`` key objects directly; it asks a
backend to parse keys and to check signatures. Swapping the backend swaps the
crypto provider without touching token handling.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Union

from cryptography.exceptions import InvalidSignature
from cryptography.exceptions import UnsupportedAlgorithm as CryptoUnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from jwtlab.algorithms import Algorithm, AlgorithmFamily
from jwtlab.errors import InvalidPublicKey, UnsupportedAlgorithm
from jwtlab.keys import describe_key, parse_public_key


logger = logging.getLogger(__name__)


class CryptoBackend(ABC):
    """Abstract interface for asymmetric signature verification."""

    @abstractmethod
    def parse_public_key(self, pem: Union[str, bytes]) -> Any:
        """Parse key material into a backend key handle. Raises InvalidPublicKey."""
        pass

    @abstractmethod
    def verify_signature(
        self, algorithm: Algorithm, message: bytes, signature: bytes, key: Any
    ) -> bool:
        """
        Check a signature over message.

        ECDSA signatures are passed DER encoded. Returns False when the
        signature does not match; raises UnsupportedAlgorithm when the
        primitive refuses the operation.
        """
        pass


class CryptographyBackend(CryptoBackend):
    """
    Backend built on the ``cryptography`` package (OpenSSL).

    Example:
        >>> backend = CryptographyBackend()
        >>> key = backend.parse_public_key(pem_text)
        >>> backend.verify_signature(Algorithm.RS256, b"a.b", sig, key)
        True
    """

    def parse_public_key(self, pem: Union[str, bytes]) -> Any:
        return parse_public_key(pem)

    def verify_signature(
        self, algorithm: Algorithm, message: bytes, signature: bytes, key: Any
    ) -> bool:
        if algorithm.family.is_symmetric:
            raise UnsupportedAlgorithm(f"{algorithm.value} is not an asymmetric algorithm")
        self._check_key(algorithm, key)
        hash_algorithm = algorithm.digest()

        try:
            if algorithm.family is AlgorithmFamily.RSA_PKCS1:
                key.verify(signature, message, padding.PKCS1v15(), hash_algorithm)
            elif algorithm.family is AlgorithmFamily.RSA_PSS:
                pss = padding.PSS(
                    mgf=padding.MGF1(algorithm.digest()),
                    salt_length=padding.PSS.DIGEST_LENGTH,
                )
                key.verify(signature, message, pss, hash_algorithm)
            else:
                key.verify(signature, message, ec.ECDSA(hash_algorithm))
        except InvalidSignature:
            logger.debug(f"{algorithm.value} signature did not verify")
            return False
        except (CryptoUnsupportedAlgorithm, ValueError, TypeError) as e:
            raise UnsupportedAlgorithm(f"{algorithm.value} verification failed: {e}") from e

        return True

    @staticmethod
    def _check_key(algorithm: Algorithm, key: Any) -> None:
        if algorithm.family in (AlgorithmFamily.RSA_PKCS1, AlgorithmFamily.RSA_PSS):
            if not isinstance(key, rsa.RSAPublicKey):
                raise InvalidPublicKey(f"{algorithm.value} requires an RSA public key")
            return

        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise InvalidPublicKey(f"{algorithm.value} requires an EC public key")
        if not isinstance(key.curve, algorithm.curve):
            raise InvalidPublicKey(
                f"{algorithm.value} requires curve {algorithm.curve.name}, "
                f"key is {describe_key(key)}"
            )

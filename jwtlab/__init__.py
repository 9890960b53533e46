"""
jwtlab - Decode, verify and generate JSON Web Tokens.

This package provides a small, dependency-light JWT engine for developer
tooling: inspect any token, check its signature against an HMAC secret or an
RSA/EC public key, and mint deterministic HS256 test tokens.
"""

__version__ = "1.0.0"

# Engine
from .engine import JWTEngine, DecodedToken, split_token

# Algorithms
from .algorithms import Algorithm, AlgorithmFamily

# Claims
from .claims import ClaimValidation, validate_claims, extract_standard_claims

# Crypto backend
from .backend import CryptoBackend, CryptographyBackend

# Errors
from .errors import (
    JWTError,
    MalformedToken,
    InvalidEncoding,
    InvalidJSON,
    AlgorithmMismatch,
    MissingSecret,
    MissingPublicKey,
    InvalidPublicKey,
    SignatureMismatch,
    UnsupportedAlgorithm,
)


__all__ = [
    "__version__",
    # Engine
    "JWTEngine",
    "DecodedToken",
    "split_token",
    # Algorithms
    "Algorithm",
    "AlgorithmFamily",
    # Claims
    "ClaimValidation",
    "validate_claims",
    "extract_standard_claims",
    # Backend
    "CryptoBackend",
    "CryptographyBackend",
    # Errors
    "JWTError",
    "MalformedToken",
    "InvalidEncoding",
    "InvalidJSON",
    "AlgorithmMismatch",
    "MissingSecret",
    "MissingPublicKey",
    "InvalidPublicKey",
    "SignatureMismatch",
    "UnsupportedAlgorithm",
]

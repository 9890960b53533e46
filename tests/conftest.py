"""
Shared pytest fixtures for jwtlab tests.
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jwcrypto import jwk, jws
from jwcrypto.common import json_encode

from jwtlab import JWTEngine


# jwt.io's canonical example, signed with "your-256-bit-secret"
JWT_IO_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)
JWT_IO_SECRET = "your-256-bit-secret"

CURVES = {
    "ES256": ec.SECP256R1,
    "ES384": ec.SECP384R1,
    "ES512": ec.SECP521R1,
}


def public_pem(private_key, fmt=serialization.PublicFormat.SubjectPublicKeyInfo) -> str:
    """Export the public half of a private key as PEM text."""
    return private_key.public_key().public_bytes(
        serialization.Encoding.PEM, fmt
    ).decode("ascii")


def sign_reference_token(private_key, alg: str, payload: dict) -> str:
    """Sign a token with jwcrypto, independently of jwtlab."""
    key = jwk.JWK.from_pyca(private_key)
    token = jws.JWS(json_encode(payload))
    token.add_signature(key, None, json_encode({"alg": alg, "typ": "JWT"}), None)
    return token.serialize(compact=True)


@pytest.fixture
def engine() -> JWTEngine:
    """Engine with the default cryptography backend."""
    return JWTEngine()


@pytest.fixture
def sample_payload() -> dict:
    """Sample payload for signing tests."""
    return {
        "sub": "1234567890",
        "name": "John Doe",
        "iat": 1516239022,
        "roles": ["admin", "user"],
        "profile": {"locale": "en", "age": 42},
    }


@pytest.fixture(scope="session")
def rsa_private_key():
    """One RSA key per session; generation is slow."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_keys() -> dict:
    """EC private keys keyed by the ES algorithm that uses their curve."""
    return {alg: ec.generate_private_key(curve()) for alg, curve in CURVES.items()}


@pytest.fixture(scope="session")
def other_ec_private_keys() -> dict:
    return {alg: ec.generate_private_key(curve()) for alg, curve in CURVES.items()}


@pytest.fixture
def rsa_public_pem(rsa_private_key) -> str:
    return public_pem(rsa_private_key)


@pytest.fixture
def jwt_io_token() -> str:
    return JWT_IO_TOKEN


@pytest.fixture
def jwt_io_secret() -> str:
    return JWT_IO_SECRET


@pytest.fixture
def reference_signer():
    """sign(private_key, alg, payload) -> token, signed by jwcrypto."""
    return sign_reference_token


@pytest.fixture
def pem_of():
    """pem_of(private_key[, fmt]) -> public key PEM text."""
    return public_pem

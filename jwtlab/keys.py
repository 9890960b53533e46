"""
jwtlab Keys - Public key parsing helpers.

Turns user supplied key text into a ``cryptography`` public key object.
Accepted inputs:

- PEM public keys (SubjectPublicKeyInfo or PKCS#1 ``RSA PUBLIC KEY``)
- PEM X.509 certificates (the subject public key is used)
- JWK JSON (RFC 7517)
"""

import base64
import binascii
import logging
import re
from typing import Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jwcrypto import jwk
from jwcrypto.common import JWException

from jwtlab.errors import InvalidPublicKey


logger = logging.getLogger(__name__)

PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]

_PEM_BOUNDARY_RE = re.compile(r"-----(BEGIN|END) ([A-Z0-9 ]+)-----")


def pem_label(pem: str) -> str:
    """Return the label of the first BEGIN marker, e.g. 'PUBLIC KEY'."""
    match = _PEM_BOUNDARY_RE.search(pem)
    return match.group(2) if match else ""


def pem_to_der(pem: str) -> bytes:
    """
    Strip the BEGIN/END markers and whitespace from PEM text and decode it.

    Raises:
        InvalidPublicKey: If what remains is not valid base64.
    """
    body = _PEM_BOUNDARY_RE.sub("", pem)
    body = "".join(body.split())
    if not body:
        raise InvalidPublicKey("PEM contains no key data")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidPublicKey(f"PEM body is not valid base64: {e}") from e


def _jwk_to_pem(jwk_json: str) -> str:
    try:
        key = jwk.JWK.from_json(jwk_json)
        return key.export_to_pem().decode("ascii")
    except (JWException, ValueError, TypeError, KeyError) as e:
        raise InvalidPublicKey(f"Invalid JWK public key: {e}") from e


def parse_public_key(key_material: Union[str, bytes]) -> PublicKey:
    """
    Parse a public key from PEM, certificate PEM or JWK JSON.

    Raises:
        InvalidPublicKey: If the input cannot be parsed or is not an RSA or EC
            public key.
    """
    if isinstance(key_material, bytes):
        try:
            key_material = key_material.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidPublicKey("Key must be PEM or JWK text") from e

    text = key_material.strip()
    if text.startswith("{"):
        logger.debug("Parsing public key from JWK")
        text = _jwk_to_pem(text)

    label = pem_label(text)
    der = pem_to_der(text)

    try:
        if label == "CERTIFICATE":
            public_key = x509.load_der_x509_certificate(der).public_key()
        else:
            public_key = serialization.load_der_public_key(der)
    except (ValueError, TypeError) as e:
        raise InvalidPublicKey(f"Could not parse public key: {e}") from e

    if not isinstance(public_key, (rsa.RSAPublicKey, ec.EllipticCurvePublicKey)):
        raise InvalidPublicKey(f"Unsupported key type: {type(public_key).__name__}")

    logger.debug(f"Parsed {describe_key(public_key)} public key")
    return public_key


def describe_key(key: PublicKey) -> str:
    """Short human-readable key description, e.g. 'RSA-2048' or 'EC secp256r1'."""
    if isinstance(key, rsa.RSAPublicKey):
        return f"RSA-{key.key_size}"
    return f"EC {key.curve.name}"

"""
jwtlab Errors - Typed failures raised by the JWT engine.

Every operation in jwtlab reports problems through one of these exceptions
instead of leaking parser or crypto library errors. A signature that simply
does not match is *not* an error: ``verify()`` returns ``False`` for that.
"""

from typing import Optional


class JWTError(Exception):
    """Base class for all jwtlab errors."""

    code = "jwt_error"
    default_message = "JWT operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedToken(JWTError):
    """Token does not have exactly three non-empty segments."""

    code = "malformed_token"
    default_message = "JWT must have 3 segments (header.payload.signature)"


class InvalidEncoding(JWTError):
    """A segment is not valid base64url."""

    code = "invalid_encoding"
    default_message = "Invalid base64url encoding"


class InvalidJSON(JWTError):
    """A decoded segment is not a JSON object."""

    code = "invalid_json"
    default_message = "Invalid JSON structure"


class AlgorithmMismatch(JWTError):
    """Header 'alg' differs from the algorithm requested for verification."""

    code = "algorithm_mismatch"
    default_message = "Token algorithm does not match the requested algorithm"

    def __init__(self, expected: str, actual: Optional[str]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Token header declares alg={actual!r} but {expected} was requested"
        )


class MissingSecret(JWTError):
    code = "missing_secret"
    default_message = "Secret is required for HMAC verification"


class MissingPublicKey(JWTError):
    code = "missing_public_key"
    default_message = "Public key is required for RSA/ECDSA verification"


class InvalidPublicKey(JWTError):
    """PEM/DER parsing failed or the key type does not fit the algorithm."""

    code = "invalid_public_key"
    default_message = "Invalid public key"


class SignatureMismatch(JWTError):
    """Signature is structurally invalid and cannot be checked."""

    code = "signature_mismatch"
    default_message = "Signature verification failed"


class UnsupportedAlgorithm(JWTError):
    """Unknown algorithm name, or the crypto primitive rejected the operation."""

    code = "unsupported_algorithm"
    default_message = "Unsupported algorithm"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(
            f"{self.default_message}: {detail}" if detail else self.default_message
        )

"""
jwtlab DER - Conversion of raw ECDSA signatures to DER.

JWS carries ECDSA signatures as fixed-width big-endian R and S concatenated
(RFC 7518 section 3.4). X.509-style verifiers expect the ASN.1 form:

    SEQUENCE { INTEGER r, INTEGER s }
"""

from jwtlab.errors import SignatureMismatch

INTEGER_TAG = 0x02
SEQUENCE_TAG = 0x30


def encode_length(length: int) -> bytes:
    """DER definite length: short form below 128, long form otherwise."""
    if length < 0x80:
        return bytes([length])
    size = (length.bit_length() + 7) // 8
    return bytes([0x80 | size]) + length.to_bytes(size, "big")


def encode_integer(value: bytes) -> bytes:
    """
    Encode unsigned big-endian bytes as a DER INTEGER.

    Leading zero bytes are stripped (keeping at least one byte) and a single
    zero is re-added when the high bit is set, so the integer stays positive.
    """
    stripped = value.lstrip(b"\x00") or b"\x00"
    if stripped[0] & 0x80:
        stripped = b"\x00" + stripped
    return bytes([INTEGER_TAG]) + encode_length(len(stripped)) + stripped


def raw_to_der(signature: bytes, component_size: int) -> bytes:
    """
    Convert a raw R||S ECDSA signature to a DER SEQUENCE.

    Args:
        signature: Raw signature bytes, R followed by S.
        component_size: Width of each of R and S (32, 48 or 66).

    Returns:
        The DER encoded signature.

    Raises:
        SignatureMismatch: If the signature is not exactly 2 * component_size
            bytes long.
    """
    if len(signature) != 2 * component_size:
        raise SignatureMismatch(
            f"ECDSA signature must be {2 * component_size} bytes, got {len(signature)}"
        )

    r = encode_integer(signature[:component_size])
    s = encode_integer(signature[component_size:])
    body = r + s
    return bytes([SEQUENCE_TAG]) + encode_length(len(body)) + body

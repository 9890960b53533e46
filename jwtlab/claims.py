"""
jwtlab Claims - Standard claim extraction and time-based claim checks.

Claim validation is informational: it reports on exp/nbf/iat against the
current time and never fails a token on its own. Deciding whether an expired
token is acceptable is up to the caller.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

from jwtlab import config
from jwtlab.encoding import JSONObject


STANDARD_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")
TIME_CLAIMS = ("exp", "nbf", "iat")

_LABELS = {
    "iss": "Issuer",
    "sub": "Subject",
    "aud": "Audience",
    "jti": "Token ID",
}


@dataclass(frozen=True)
class ClaimValidation:
    """Outcome of checking one standard claim."""

    claim: str
    """Claim name, e.g. 'exp'."""

    value: Any
    """Raw claim value from the payload."""

    valid: bool
    """False for expired, not-yet-valid or future-issued tokens."""

    message: str
    """Human-readable explanation."""

    informational: bool = False
    """True for identity claims (iss/sub/aud/jti) which are never checked."""


def extract_standard_claims(payload: JSONObject) -> JSONObject:
    """Return the registered claims (RFC 7519 section 4.1) present in payload."""
    return {key: payload[key] for key in STANDARD_CLAIMS if key in payload}


def is_numeric_date(value: Any) -> bool:
    # bool is an int subclass but never a timestamp
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_timestamp(timestamp: float) -> str:
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return f"{timestamp} (out of range)"
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def _check_time_claim(claim: str, value: Any, now: float, leeway: int) -> ClaimValidation:
    if not is_numeric_date(value):
        return ClaimValidation(
            claim, value, False, f"'{claim}' must be a numeric timestamp, got {value!r}"
        )

    when = format_timestamp(value)
    if claim == "exp":
        if value > now - leeway:
            return ClaimValidation(claim, value, True, f"Token expires at {when}")
        return ClaimValidation(claim, value, False, f"Token expired at {when}")

    if claim == "nbf":
        if value <= now + leeway:
            return ClaimValidation(claim, value, True, f"Token valid since {when}")
        return ClaimValidation(claim, value, False, f"Token not valid until {when}")

    if value <= now + leeway:
        return ClaimValidation(claim, value, True, f"Token issued at {when}")
    return ClaimValidation(
        claim, value, False, f"Token issued in the future at {when} (suspicious)"
    )


def _describe_identity_claim(claim: str, value: Any) -> ClaimValidation:
    if claim == "aud" and isinstance(value, list):
        shown = ", ".join(str(item) for item in value)
    else:
        shown = str(value)
    return ClaimValidation(claim, value, True, f"{_LABELS[claim]}: {shown}", informational=True)


def validate_claims(
    payload: JSONObject,
    now: Optional[float] = None,
    leeway: Optional[int] = None,
) -> List[ClaimValidation]:
    """
    Check the standard claims present in a payload.

    Args:
        payload: Decoded JWT payload.
        now: Reference epoch seconds (default: current time).
        leeway: Allowed clock skew in seconds (default: JWTLAB_CLAIM_LEEWAY).

    Returns:
        One ClaimValidation per standard claim present, in registry order
        (iss, sub, aud, exp, nbf, iat, jti).
    """
    if now is None:
        now = time.time()
    if leeway is None:
        leeway = config.CLAIM_LEEWAY_SECONDS

    results = []
    for claim, value in extract_standard_claims(payload).items():
        if claim in TIME_CLAIMS:
            results.append(_check_time_claim(claim, value, now, leeway))
        else:
            results.append(_describe_identity_claim(claim, value))
    return results

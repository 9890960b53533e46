# jwtlab/config.py
"""
Centralized configuration for jwtlab.

All configurable values are read from environment variables with sensible
defaults, so a shell profile or CI job can tune the CLI without flags.

Usage:
    from jwtlab.config import CLAIM_LEEWAY_SECONDS

Environment Variables:
    JWTLAB_CLAIM_LEEWAY: Clock-skew leeway in seconds for exp/nbf/iat (default: 0)
    JWTLAB_JSON_INDENT: Indent for pretty-printed header/payload JSON (default: 2)
    JWTLAB_LOG_LEVEL: Logging level override for the CLI (default: unset)
    JWTLAB_SECRET: Default HMAC secret for the CLI
    JWTLAB_PUBLIC_KEY: Default PEM/JWK public key for the CLI
"""

import os
from typing import Final, Optional


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


# =============================================================================
# Claim Validation
# =============================================================================

# Seconds of clock drift tolerated when comparing exp/nbf/iat to now
CLAIM_LEEWAY_SECONDS: Final[int] = _int_env("JWTLAB_CLAIM_LEEWAY", 0)

# =============================================================================
# Output
# =============================================================================

JSON_INDENT: Final[int] = _int_env("JWTLAB_JSON_INDENT", 2)

LOG_LEVEL: Final[Optional[str]] = os.getenv("JWTLAB_LOG_LEVEL") or None

# =============================================================================
# Key Material
# =============================================================================

SECRET_ENV: Final[str] = "JWTLAB_SECRET"
PUBLIC_KEY_ENV: Final[str] = "JWTLAB_PUBLIC_KEY"


def get_default_secret() -> Optional[str]:
    """HMAC secret from the environment, read at call time."""
    return os.environ.get(SECRET_ENV) or None


def get_default_public_key() -> Optional[str]:
    """PEM or JWK public key from the environment, read at call time."""
    return os.environ.get(PUBLIC_KEY_ENV) or None


# =============================================================================
# Configuration Summary (for debugging)
# =============================================================================

def print_config() -> None:
    """Print current configuration. Key material is only reported as set/unset."""
    print("jwtlab Configuration:")
    print(f"  CLAIM_LEEWAY_SECONDS: {CLAIM_LEEWAY_SECONDS}")
    print(f"  JSON_INDENT:          {JSON_INDENT}")
    print(f"  LOG_LEVEL:            {LOG_LEVEL or '(default)'}")
    print(f"  {SECRET_ENV}:        {'set' if get_default_secret() else 'unset'}")
    print(f"  {PUBLIC_KEY_ENV}:    {'set' if get_default_public_key() else 'unset'}")


if __name__ == "__main__":
    print_config()

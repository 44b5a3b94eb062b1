"""Random identifier generation"""

import secrets

from ..constants import (
    CLIENT_TOKEN_PREFIX,
    GENERATED_SUBDOMAIN_LENGTH,
    SUBDOMAIN_ALPHABET,
)


def generate_subdomain(length: int = GENERATED_SUBDOMAIN_LENGTH) -> str:
    """Random lowercase alphanumeric subdomain"""
    return "".join(secrets.choice(SUBDOMAIN_ALPHABET) for _ in range(length))


def generate_client_token() -> str:
    """Anonymous client token: ``cli_`` followed by 32 hex characters"""
    return CLIENT_TOKEN_PREFIX + secrets.token_hex(16)

"""
Password reset token helpers shared by the request and confirm use cases.
"""

import hashlib
import secrets
from urllib.parse import urlencode

RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """32 bytes from the OS CSPRNG, hex encoded (64 URL-safe characters)"""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    """SHA-256 digest stored on the account in place of the raw token"""
    return hashlib.sha256(token.encode()).hexdigest()


def build_reset_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/auth/reset-password?{urlencode({'token': token})}"

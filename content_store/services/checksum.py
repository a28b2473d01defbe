"""
Content checksums and storage key generation.
"""

import hashlib
import uuid


def compute_checksum(data: bytes) -> str:
    """Return the lower-case hex MD5 digest of ``data``."""
    return hashlib.md5(data).hexdigest()


def generate_key() -> str:
    """Return a random 128-bit token as 32 hex characters, no separators."""
    return uuid.uuid4().hex

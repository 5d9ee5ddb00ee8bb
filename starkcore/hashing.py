"""SHA-256 digest helpers shared by the Merkle tree and the channel."""

import hashlib
from typing import Iterable

from starkcore.field import FieldElement

DIGEST_HEX_LENGTH = 64


def sha256_hex(data: str) -> str:
    """Return the lowercase hex SHA-256 digest of a UTF-8 string (always 64 chars)."""
    return hashlib.sha256(data.encode()).hexdigest()


def serialize(values: Iterable[FieldElement]) -> str:
    """Comma-join the canonical decimal forms of field elements."""
    return ",".join(str(v) for v in values)

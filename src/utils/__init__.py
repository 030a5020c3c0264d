"""Shared utilities for nologs."""

from utils.hashing import hash_sha256_hex
from utils.uuid_factory import uuid7, uuid7_str, uuid7_suffix

__all__ = [
    "hash_sha256_hex",
    "uuid7",
    "uuid7_str",
    "uuid7_suffix",
]

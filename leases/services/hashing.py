"""
Audit fingerprints for completed agreements.

The full hash is a lowercase SHA-256 hex digest (64 chars). The short hash is a
display reference taken from its first 8 characters, not a separate digest.
"""
from __future__ import annotations

import hashlib
from pathlib import Path

SHORT_HASH_LENGTH = 8


def content_hash(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def short_hash(full_hash: str) -> str:
    return full_hash[:SHORT_HASH_LENGTH]


def file_hash(path: str | Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()

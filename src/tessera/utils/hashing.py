"""Hashing utilities for Tessera.

Used for content-addressed compile cache keys.

Example:
    >>> from tessera.utils.hashing import hash_str
    >>> len(hash_str("<p>{x}</p>", truncate=16))
    16
"""

import hashlib


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash string content using the given algorithm.

    Args:
        content: String content to hash
        truncate: Truncate result to N characters (None = full hash)
        algorithm: Any name accepted by ``hashlib.new``

    Returns:
        Hex digest, optionally truncated
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content.encode("utf-8"))
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate is not None else digest

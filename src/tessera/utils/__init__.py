"""Utility modules for Tessera.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger for namespaced logging
"""

from tessera.utils.hashing import hash_str
from tessera.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]

"""Deterministic digests of byte sequences.

Used for input fingerprints and available to callers that need a
content hash for cache keys or naming.
"""

import hashlib

from scratchctl.core.errors import HashAlgorithmError

DEFAULT_ALGORITHM = "md5"


def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the lowercase hex digest of data.

    Args:
        data: Bytes to hash.
        algorithm: Any algorithm name known to hashlib.

    Returns:
        Fixed-length lowercase hexadecimal digest.

    Raises:
        HashAlgorithmError: If the algorithm is not available in this runtime.
    """
    try:
        digest = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        msg = f"Hash algorithm not available: {algorithm}"
        raise HashAlgorithmError(msg) from e
    digest.update(data)
    if digest.digest_size == 0:
        # Variable-length digests (shake_*) need an explicit length
        msg = f"Hash algorithm has no fixed digest length: {algorithm}"
        raise HashAlgorithmError(msg)
    return digest.hexdigest()


def hash_text(text: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the hex digest of the UTF-8 encoding of text."""
    return hash_bytes(text.encode("utf-8"), algorithm)


def is_algorithm_available(algorithm: str) -> bool:
    """Check if an algorithm can be used by hash_bytes.

    Args:
        algorithm: Algorithm name to check.

    Returns:
        True if hash_bytes would accept the algorithm.
    """
    try:
        hash_bytes(b"", algorithm)
    except HashAlgorithmError:
        return False
    return True

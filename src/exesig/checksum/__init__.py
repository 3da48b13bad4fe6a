"""
This package handles content digests for executables being verified.
"""

from .base import CHUNK_SIZE, DIGEST_SIZE, calculate_digest  # noqa

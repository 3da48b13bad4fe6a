import hashlib
import os

from exesig.exceptions import DigestFailure, FileOpenFailure

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"

# Size of each read fed into the hash. Any size works, files are streamed.
CHUNK_SIZE = 65536

# Length of a SHA-256 digest in bytes.
DIGEST_SIZE = 32


def calculate_digest(path, chunk_size=CHUNK_SIZE):
    """
    Calculate the SHA-256 digest of the file at ``path`` and return the raw
    32 byte digest.

    The file is read sequentially in ``chunk_size`` pieces until EOF, so
    arbitrarily large files never have to fit in memory. An empty file makes
    no update() calls at all and yields the digest of the empty string.

    Raises FileOpenFailure if the file cannot be opened and DigestFailure if
    reading or hashing fails part way through.
    """
    try:
        f = open(path, "rb")
    except (OSError, ValueError) as e:
        raise FileOpenFailure(_display(path), getattr(e, "errno", None)) from e

    with f:
        try:
            shasum = hashlib.sha256()
        except ValueError as e:
            raise DigestFailure(f"Failed to create SHA256 context: {e}") from e

        while True:
            try:
                chunk = f.read(chunk_size)
            except OSError as e:
                raise DigestFailure(
                    f"Failed to read executable while hashing: {e.errno}"
                ) from e
            if not chunk:
                break
            try:
                shasum.update(chunk)
            except (TypeError, ValueError) as e:
                raise DigestFailure(f"Failed to update SHA256 digest: {e}") from e

    digest = shasum.digest()
    if len(digest) != DIGEST_SIZE:
        raise DigestFailure(
            f"Failed to finalize SHA256 digest: got {len(digest)} bytes"
        )
    return digest


def _display(path):
    if isinstance(path, bytes):
        return os.fsdecode(path)
    return os.fspath(path)

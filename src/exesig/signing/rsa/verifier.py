"""
This module handles RSA signature verification for executables. It makes use
of the cryptography library (which ultimately calls into OpenSSL).

Executables are signed over their SHA-256 digest with a 4096-bit RSA key and
PKCS#1 v1.5 padding. The 512 byte signature lives in a sidecar file:

    /opt/app/bin/launcher.exe -> /opt/app/bin/signatures/launcher.sig
"""

import os

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa, utils

from exesig.checksum import calculate_digest
from exesig.exceptions import (
    EncodingFailure,
    KeyLoadFailure,
    KeyTooLarge,
    SignatureFileOpenFailure,
    SignatureMismatch,
    SignatureSizeMismatch,
    SignatureVerificationError,
    VerificationContextFailure,
)
from exesig.keys import signature_check_for
from exesig.signing.base import (
    SignatureVerifier,
    SignatureVerificationResult,
)

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"

# A 4096-bit public key in PEM form is 800 bytes on disk.
MAX_PUBLIC_KEY_SIZE = 800

KEY_SIZE = 4096

# RSA signatures are as long as the modulus.
SIGNATURE_SIZE = KEY_SIZE // 8

# Upper bound on how much of a signature file we read.
SIGNATURE_READ_LIMIT = 65536

SIGNATURES_DIR = "signatures"
SIGNATURE_SUFFIX = ".sig"


def signature_path_for(path):
    """
    Given the path of an executable, return where its detached signature
    lives: a ``signatures`` directory next to it, holding ``<stem>.sig``.

    Works on str and bytes paths and returns the same type it was given.
    Nothing is checked for existence.
    """
    path = os.fspath(path)
    if isinstance(path, bytes):
        sigdir = os.fsencode(SIGNATURES_DIR)
        suffix = os.fsencode(SIGNATURE_SUFFIX)
    else:
        sigdir = SIGNATURES_DIR
        suffix = SIGNATURE_SUFFIX
    parent, filename = os.path.split(path)
    stem = os.path.splitext(filename)[0]
    return os.path.join(parent, sigdir, stem + suffix)


class RSAVerifier(SignatureVerifier):
    def __init__(self, public_key):
        super(RSAVerifier, self).__init__()

        if public_key is None:
            raise RuntimeError("public_key must not be None")
        if isinstance(public_key, str):
            public_key = public_key.encode("utf-8")
        self.public_key = bytes(public_key)

    @property
    def signature_check(self):
        return signature_check_for(self.public_key)

    def verify(self, path) -> SignatureVerificationResult:
        """
        Verify the executable at ``path``, which may be bytes, str or any
        path-like object. Text paths are encoded with the filesystem encoding
        first and verification continues with verify_bytes().
        """
        if not isinstance(path, bytes):
            try:
                path = os.fsencode(path)
            except (TypeError, UnicodeError) as e:
                return SignatureVerificationResult.from_error(
                    EncodingFailure(f"Failed to encode executable path: {e}")
                )
        return self.verify_bytes(path)

    def verify_bytes(self, path) -> SignatureVerificationResult:
        try:
            self._verify(path)
        except SignatureVerificationError as e:
            return SignatureVerificationResult.from_error(e)

        return SignatureVerificationResult(
            success=True,
            summary="Executable signature verification succeeded.",
            extra_information={
                "path": os.fsdecode(path),
                "signature_path": os.fsdecode(signature_path_for(path)),
            },
        )

    def _verify(self, path):
        if len(self.public_key) > MAX_PUBLIC_KEY_SIZE:
            raise KeyTooLarge(len(self.public_key), MAX_PUBLIC_KEY_SIZE)

        digest = calculate_digest(path)
        signature = self._read_signature(signature_path_for(path))
        key = self._load_key()

        try:
            key.verify(
                signature,
                digest,
                padding.PKCS1v15(),
                utils.Prehashed(hashes.SHA256()),
            )
        except InvalidSignature:
            raise SignatureMismatch(
                "Executable's signature does not match signature file"
            ) from None
        except (UnsupportedAlgorithm, ValueError) as e:
            raise VerificationContextFailure(
                f"Failed to set up RSA PKCS1 SHA256 verification: {e}"
            ) from e

    def _read_signature(self, signature_path):
        display_path = os.fsdecode(signature_path)
        try:
            with open(signature_path, "rb") as f:
                signature = f.read(SIGNATURE_READ_LIMIT)
        except OSError as e:
            raise SignatureFileOpenFailure(display_path, e.errno) from e

        if len(signature) != SIGNATURE_SIZE:
            raise SignatureSizeMismatch(display_path, SIGNATURE_SIZE, len(signature))
        return signature

    def _load_key(self):
        try:
            key = serialization.load_pem_public_key(self.public_key)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyLoadFailure(f"Failed to load RSA public key: {e}") from e

        if not isinstance(key, rsa.RSAPublicKey):
            raise KeyLoadFailure(
                f"Failed to load RSA public key: got a {type(key).__name__}"
            )
        if key.key_size != KEY_SIZE:
            raise KeyLoadFailure(
                f"Failed to load RSA public key: expected a {KEY_SIZE}-bit key, "
                f"got {key.key_size} bits"
            )
        return key

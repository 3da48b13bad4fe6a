"""
This package handles verifying detached signatures of executables.

Each verification method provides a verifier subclass of SignatureVerifier,
which makes no assumptions about the verification strategy used. All it
demands is the implementation of a 'verify' method that takes the path of
the file to check and returns a SignatureVerificationResult.
"""

from .base import SignatureVerificationResult, SignatureVerifier  # noqa: F401
from .rsa import RSAVerifier, signature_path_for  # noqa: F401

__all__ = [
    "RSAVerifier",
    "SignatureVerificationResult",
    "SignatureVerifier",
    "signature_path_for",
]

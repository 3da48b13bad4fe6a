"""
This package handles RSA signature validation for executables.
"""

from .verifier import RSAVerifier, signature_path_for  # noqa

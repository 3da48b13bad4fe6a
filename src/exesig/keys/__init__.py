"""
This package holds the public key that executables are verified against.

The release build drops the trusted key next to this module as
``key_pub.pem``. Builds without signature checking ship no key file, and
load_embedded_public_key() returns empty bytes for them.
"""

import enum
import os

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"

EMBEDDED_KEY_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "key_pub.pem")


class SignatureCheck(enum.Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


def load_embedded_public_key(path=None):
    if path is None:
        path = EMBEDDED_KEY_PATH
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return b""


def load_public_key_file(path):
    """
    Read a PEM public key from ``path``. Unlike load_embedded_public_key(), a
    missing file is an error here, since somebody explicitly asked for it.
    """
    with open(path, "rb") as f:
        return f.read()


def signature_check_for(key_data):
    """
    Empty (or whitespace-only) key material means this build does not check
    signatures. Callers must test for this before verifying; verification
    with an empty key always fails rather than passing.
    """
    if isinstance(key_data, str):
        key_data = key_data.encode("utf-8")
    if not key_data or not key_data.strip():
        return SignatureCheck.DISABLED
    return SignatureCheck.ENABLED

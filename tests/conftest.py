import os

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from exesig.signing import signature_path_for

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"


def _generate_key(key_size=4096):
    return rsa.generate_private_key(public_exponent=65537, key_size=key_size)


def _public_pem(private_key):
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture(scope="session")
def trusted_key():
    return _generate_key()


@pytest.fixture(scope="session")
def untrusted_key():
    return _generate_key()


@pytest.fixture(scope="session")
def trusted_public_pem(trusted_key):
    return _public_pem(trusted_key)


@pytest.fixture(scope="session")
def small_public_pem():
    return _public_pem(_generate_key(key_size=2048))


@pytest.fixture(scope="session")
def sign_file():
    """
    Returns a function that signs a file the way the release tooling does and
    writes the signature to its sidecar location.
    """

    def _sign(path, private_key):
        with open(path, "rb") as f:
            data = f.read()
        signature = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
        signature_path = signature_path_for(str(path))
        os.makedirs(os.path.dirname(signature_path), exist_ok=True)
        with open(signature_path, "wb") as f:
            f.write(signature)
        return signature_path

    return _sign


@pytest.fixture
def signed_executable(tmp_path, trusted_key, sign_file):
    exe = tmp_path / "bin" / "launcher.exe"
    exe.parent.mkdir()
    exe.write_bytes(b"\x7fELF" + bytes(range(256)) * 300)
    sign_file(exe, trusted_key)
    return exe

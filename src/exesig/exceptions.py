__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"


class SignatureVerificationError(Exception):
    """
    Base class for every way signature verification can fail. Verifiers raise
    these internally and turn them into a failed SignatureVerificationResult
    before returning, so callers never have to catch them.
    """

    def details(self):
        """Structured context for this failure, suitable for logging."""
        return {}


class KeyTooLarge(SignatureVerificationError):
    def __init__(self, size, limit):
        super(KeyTooLarge, self).__init__(
            f"Invalid public key, size is too large: {size} bytes (limit {limit})"
        )
        self.size = size
        self.limit = limit

    def details(self):
        return {"actual": self.size, "expected": self.limit}


class KeyLoadFailure(SignatureVerificationError):
    pass


class FileOpenFailure(SignatureVerificationError):
    def __init__(self, path, errno):
        super(FileOpenFailure, self).__init__(
            f"Failed to open executable ({path}) for reading: {errno}"
        )
        self.path = path
        self.errno = errno

    def details(self):
        return {"path": self.path, "errno": self.errno}


class DigestFailure(SignatureVerificationError):
    pass


class SignatureFileOpenFailure(SignatureVerificationError):
    def __init__(self, signature_path, errno):
        super(SignatureFileOpenFailure, self).__init__(
            f"Failed to open signature file ({signature_path}) for reading: {errno}"
        )
        self.signature_path = signature_path
        self.errno = errno

    def details(self):
        return {"signature_path": self.signature_path, "errno": self.errno}


class SignatureSizeMismatch(SignatureVerificationError):
    def __init__(self, signature_path, expected, actual):
        super(SignatureSizeMismatch, self).__init__(
            "Signature file is an invalid size, or failed to read entire file. "
            f"Expected {expected} bytes, read {actual}."
        )
        self.signature_path = signature_path
        self.expected = expected
        self.actual = actual

    def details(self):
        return {
            "signature_path": self.signature_path,
            "expected": self.expected,
            "actual": self.actual,
        }


class VerificationContextFailure(SignatureVerificationError):
    pass


class SignatureMismatch(SignatureVerificationError):
    pass


class EncodingFailure(SignatureVerificationError):
    pass

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"


class SignatureVerificationResult:
    """Represents the result after performing signature verification."""

    def __init__(self, success, summary, error=None, extra_information=None):
        self.success = success
        self.summary = summary
        self.error = error
        self.extra_information = extra_information or {}

    @classmethod
    def from_error(cls, error):
        return cls(
            success=False,
            summary=str(error),
            error=error,
            extra_information=error.details(),
        )

    def __bool__(self):
        return self.success

    def __repr__(self):
        return f"<SignatureVerificationResult success={self.success} summary={self.summary!r}>"


class SignatureVerifier:
    """
    Represents a way of performing content verification. It doesn't make any
    assumptions about the kind of verification being done.
    """

    def verify(self, path) -> SignatureVerificationResult:
        """
        Does the actual verification of the file at ``path``.

        Returns an instance of SignatureVerificationResult.
        """
        raise NotImplementedError("verify")

"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ScoringServiceError(DomainException):
    """A call to the remote scoring service did not produce a usable result"""

    detail: str | None = None


class TransportFailure(ScoringServiceError):
    """Connection-level failure: service unreachable, connection reset, timeout"""

    pass


class RemoteRejection(ScoringServiceError):
    """Scoring service answered with a non-2xx status"""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail
        message = f"Scoring service returned {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedResponse(ScoringServiceError):
    """Response body is not valid JSON or lacks expected fields"""

    pass

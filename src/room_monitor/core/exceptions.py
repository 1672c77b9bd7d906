class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced schedule or entry does not exist."""


class MalformedRecordError(DomainError):
    """Raised for a single unusable record (bad timestamp, missing key).

    Batch operations catch it, count the record as skipped and carry on.
    """

    def __init__(self, message: str, *, record_id=None, kind: str = "record"):
        super().__init__(message)
        self.record_id = record_id
        self.kind = kind


class StoreConflictError(DomainError):
    """Raised by a schedule store that rejected a write as a user/room double-booking."""

    def __init__(self, message: str, *, reason=None, conflicting_id=None):
        super().__init__(message)
        self.reason = reason
        self.conflicting_id = conflicting_id

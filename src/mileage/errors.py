"""Exception taxonomy for mileage runs."""


class MileageError(Exception):
    """Base class for errors that end a mileage run."""

    pass


class ValidationError(MileageError, ValueError):
    """Raised for a malformed date range, threshold or missing setting."""

    pass


class RateLimitError(MileageError):
    """Raised when the calendar API signals throttling."""

    pass


class ExternalServiceError(MileageError):
    """Raised on transport or authorization failures of an external API."""

    pass


class AuthenticationError(MileageError):
    """Raised when Google credentials are missing or unusable."""

    pass

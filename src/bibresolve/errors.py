"""Error hierarchy for identifier resolution.

Every failure a single resolution can hit is one of these. The batch
runner turns them into per-job error messages; nothing here is retried.
"""

__all__ = [
    "ResolutionError",
    "UnrecognizedIdentifierError",
    "FetchError",
    "ExtractionError",
    "ValidationError",
    "SerializationError",
]


class ResolutionError(Exception):
    """Base class for failures while resolving one identifier."""

    def __init__(
        self,
        message: str,
        identifier: str | None = None,
    ) -> None:
        """Initialize resolution error.

        Parameters
        ----------
        message : str
            Error message.
        identifier : str | None, optional
            Raw identifier being resolved when the error occurred.
        """
        super().__init__(message)
        self.identifier = identifier


class UnrecognizedIdentifierError(ResolutionError):
    """Raised when no identifier family recognizes the input."""

    def __init__(self, identifier: str) -> None:
        """Initialize with the offending identifier text."""
        super().__init__(f"unrecognized identifier: {identifier}", identifier=identifier)


class FetchError(ResolutionError):
    """Raised on transport failure, timeout, non-2xx status or wrong content type."""


class ExtractionError(ResolutionError):
    """Raised when a fetched document lacks the signals a family requires."""


class ValidationError(ResolutionError):
    """Raised when a synthesized record misses a required field."""


class SerializationError(ResolutionError):
    """Raised when a serialized record does not read back as a valid entry."""

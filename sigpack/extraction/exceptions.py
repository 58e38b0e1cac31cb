class ExtractionError(Exception):
    """Raised when signature metadata extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the oracle response does not match the expected structure."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""

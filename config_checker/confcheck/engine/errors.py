"""Exceptions raised by the validation engine."""


class ValidationFailure(Exception):
    """Base class: the request produced no ValidationResult."""


class ContentTooLargeError(ValidationFailure):
    """Content exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Content is {size} bytes, the limit is {limit} bytes")
        self.size = size
        self.limit = limit


class ValidationTimeoutError(ValidationFailure):
    """Analyses did not finish within the wall-clock budget."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Validation timed out after {timeout:g} seconds")
        self.timeout = timeout


class ValidationCancelledError(ValidationFailure):
    """The caller cancelled the run."""

    def __init__(self) -> None:
        super().__init__("Validation was cancelled")


class AnalysisError(ValidationFailure):
    """An analysis raised unexpectedly."""

    def __init__(self, analysis: str, cause: Exception) -> None:
        super().__init__(f"{analysis} analysis failed: {cause}")
        self.analysis = analysis

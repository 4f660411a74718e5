r"""
Exceptions raised by graphdb-bench.

Backend client errors are never wrapped and reach callers as raised
by the vendor library.
"""

__all__ = ["ConfigurationError", "DatasetOpenError"]


class ConfigurationError(ValueError):
    """Benchmark configuration is missing, invalid or inconsistent.

    Attributes:
        field: Configuration key the error refers to, if any.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DatasetOpenError(RuntimeError):
    """A validated dataset file could not be opened."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"unable to open file {filename}")
        self.filename = filename

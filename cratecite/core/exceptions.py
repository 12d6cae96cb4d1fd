"""Exception classes for citation generation."""


class CiteError(Exception):
    """Base exception for all fatal citation errors."""

    pass


class NotFoundError(CiteError):
    """Raised when the search root or a required manifest is missing."""

    def __init__(self, path, message: str | None = None):
        """Initialize with the missing path."""
        self.path = path
        super().__init__(message or f"Path not found: {path}")


class AlreadyExistsError(CiteError):
    """Raised when the destination file exists and overwrite was not requested."""

    def __init__(self, path):
        """Initialize with the existing destination."""
        self.path = path
        super().__init__(
            f"Citation file already exists at {path}. Use --overwrite to replace it."
        )


class ManifestParseError(CiteError, ValueError):
    """Raised when a manifest cannot be parsed."""

    def __init__(self, path, details: str = ""):
        """Initialize with manifest path and details."""
        self.path = path
        message = f"Invalid manifest at {path}"
        if details:
            message += f": {details}"
        super().__init__(message)


class EnrichmentError(CiteError):
    """Raised inside the registry enricher when a lookup fails.

    Never escapes the enricher: it is turned into a failed
    ``EnrichmentResult``.
    """

    def __init__(self, name: str, reason: str):
        """Initialize with the crate name and failure reason."""
        self.name = name
        self.reason = reason
        super().__init__(f"Registry lookup failed for {name}: {reason}")


class WriteError(CiteError):
    """Raised when an output file cannot be written."""

    def __init__(self, path, details: str = ""):
        """Initialize with destination path and details."""
        self.path = path
        message = f"Could not write {path}"
        if details:
            message += f": {details}"
        super().__init__(message)

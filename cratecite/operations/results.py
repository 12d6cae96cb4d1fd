"""Result types for citation operations."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ResultStatus(Enum):
    """Status of an operation result."""

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    SKIPPED = "skipped"

    def is_success(self) -> bool:
        """Check if status indicates success."""
        return self in [self.SUCCESS, self.PARTIAL_SUCCESS, self.SKIPPED]


@dataclass
class OperationResult:
    """Result of a single operation.

    Fatal conditions are raised as ``CiteError``; a result always
    describes an operation that ran to completion.
    """

    status: ResultStatus
    message: str
    path: Path | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    # Additional data
    data: dict[str, Any] | None = None
    warnings: list[str] | None = None

    @property
    def success(self) -> bool:
        """Check if the operation succeeded."""
        return self.status.is_success()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "status": self.status.value,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "timestamp": self.timestamp.isoformat(),
        }

        if self.data:
            result["data"] = self.data

        if self.warnings:
            result["warnings"] = self.warnings

        return result

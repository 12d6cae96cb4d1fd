"""Output sinks for rendered citations."""

from __future__ import annotations

import enum
import logging
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cratecite.core.exceptions import AlreadyExistsError, WriteError
from cratecite.operations.results import OperationResult, ResultStatus

from .readme import merge_section

logger = logging.getLogger(__name__)

STDOUT = "STDOUT"


class WriteMode(enum.Enum):
    """How a file target treats existing content."""

    CREATE = "create"
    OVERWRITE = "overwrite"
    APPEND = "append"


@dataclass(frozen=True)
class OutputTarget:
    """Destination of rendered text.

    ``path`` of None designates standard output.
    """

    path: Path | None
    mode: WriteMode = WriteMode.CREATE

    @classmethod
    def stdout(cls) -> OutputTarget:
        """The console sentinel."""
        return cls(path=None)

    @classmethod
    def from_filename(
        cls, directory: Path, filename: str, overwrite: bool = False
    ) -> OutputTarget:
        """Build a target from a CLI filename; ``STDOUT`` selects the console."""
        if filename == STDOUT:
            return cls.stdout()
        mode = WriteMode.OVERWRITE if overwrite else WriteMode.CREATE
        return cls(path=Path(directory) / filename, mode=mode)

    @property
    def is_stdout(self) -> bool:
        return self.path is None


class FileSink:
    """Write rendered text to a file or the console.

    File writes are atomic: content goes to a temporary file beside the
    destination which is then renamed into place.
    """

    def __init__(self, stream: TextIO | None = None):
        """Initialize sink.

        Args:
            stream: Console stream (``sys.stdout`` at write time when omitted)
        """
        self.stream = stream

    def write(self, target: OutputTarget, text: str) -> OperationResult:
        """Write ``text`` to ``target``.

        In APPEND mode ``text`` is the body of a managed section merged
        into the existing document.

        Raises:
            AlreadyExistsError: CREATE mode and the file exists.
            WriteError: The file could not be written.
        """
        if target.is_stdout:
            stream = self.stream or sys.stdout
            stream.write(text)
            stream.flush()
            return OperationResult(
                status=ResultStatus.SUCCESS, message="Written to standard output"
            )

        path = target.path
        match target.mode:
            case WriteMode.CREATE:
                if path.exists():
                    raise AlreadyExistsError(path)
                content = text
                message = f"Created {path}"
            case WriteMode.OVERWRITE:
                content = text
                message = f"Wrote {path}"
            case WriteMode.APPEND:
                content = merge_section(self._read_existing(path), text)
                message = f"Updated {path}"

        if not content.endswith("\n"):
            content += "\n"
        exclusive = target.mode is WriteMode.CREATE
        self._write_atomic(path, content, exclusive=exclusive)
        logger.info(message)
        return OperationResult(status=ResultStatus.SUCCESS, message=message, path=path)

    def _read_existing(self, path: Path) -> str:
        if not path.exists():
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise WriteError(path, f"could not read existing content: {e}") from e

    def _write_atomic(self, path: Path, content: str, exclusive: bool = False) -> None:
        """Publish ``content`` at ``path`` in one filesystem operation.

        With ``exclusive`` the temporary file is hard-linked into place,
        which fails if ``path`` appeared in the meantime; otherwise it is
        renamed over any existing file.
        """
        try:
            temp_fd, temp_path = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise WriteError(path, str(e)) from e

        temp = Path(temp_path)
        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            if exclusive:
                os.link(temp, path)
                temp.unlink()
            else:
                temp.replace(path)
        except FileExistsError as e:
            temp.unlink(missing_ok=True)
            raise AlreadyExistsError(path) from e
        except OSError as e:
            temp.unlink(missing_ok=True)
            raise WriteError(path, str(e)) from e

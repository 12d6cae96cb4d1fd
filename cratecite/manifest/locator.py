"""Manifest discovery in a directory tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from cratecite.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


def describe_depth(max_depth: int | None) -> str:
    """Human readable description of a depth limit."""
    if max_depth is None or max_depth < 0:
        return "all subdirectories"
    if max_depth == 0:
        return "current directory only"
    return f"max depth: {max_depth}"


class ManifestLocator:
    """Find manifests below a root directory.

    Depth counts directories below the root: a manifest directly in the
    root is at depth 0, ``root/a/Cargo.toml`` at depth 1. A negative or
    missing limit means unlimited.
    """

    def __init__(self, manifest_name: str = MANIFEST_NAME):
        self.manifest_name = manifest_name

    def locate(self, root: Path | str, max_depth: int | None = -1) -> list[Path]:
        """Return every manifest found below ``root``.

        Raises:
            NotFoundError: If ``root`` does not exist.
        """
        manifests = list(self.iter_manifests(root, max_depth))
        logger.debug(
            f"Found {len(manifests)} {self.manifest_name} file(s) in {root} "
            f"({describe_depth(max_depth)})"
        )
        return manifests

    def iter_manifests(
        self, root: Path | str, max_depth: int | None = -1
    ) -> Iterator[Path]:
        """Lazily yield manifests below ``root`` in sorted directory order.

        Symbolic links are followed; a directory already visited through
        another link is skipped. Unreadable directories are logged and
        skipped.
        """
        root = Path(root)
        if not root.exists():
            raise NotFoundError(root, f"Directory {root} does not exist")

        if root.is_file():
            if root.name == self.manifest_name:
                yield root
            return

        unlimited = max_depth is None or max_depth < 0
        visited: set[tuple[int, int]] = set()

        def on_error(error: OSError) -> None:
            logger.warning(f"Error accessing path {error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=on_error, followlinks=True
        ):
            current = Path(dirpath)
            try:
                stat = current.stat()
            except OSError as e:
                logger.warning(f"Error accessing path {current}: {e}")
                dirnames[:] = []
                continue

            identity = (stat.st_dev, stat.st_ino)
            if identity in visited:
                logger.debug(f"Skipping already visited directory {current}")
                dirnames[:] = []
                continue
            visited.add(identity)

            depth = len(current.relative_to(root).parts)
            if not unlimited and depth >= max_depth:
                dirnames[:] = []
            else:
                dirnames.sort()

            if self.manifest_name in filenames:
                candidate = current / self.manifest_name
                if candidate.is_file():
                    logger.info(f"Found {self.manifest_name} at: {candidate}")
                    yield candidate

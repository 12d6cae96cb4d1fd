"""Citation workflows for a crate and its dependencies.

Two modes exist. ``cite_project`` renders the citation of the crate in
a directory; ``cite_dependencies`` walks a tree, gathers the explicit
dependencies of every crate found, and renders them as one batch.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cratecite.citations.renderer import CitationRenderer, Enricher
from cratecite.core.exceptions import ManifestParseError, NotFoundError
from cratecite.manifest.classifier import DependencyClassifier
from cratecite.manifest.locator import ManifestLocator, describe_depth
from cratecite.manifest.parser import ManifestParser
from cratecite.output.readme import citing_section
from cratecite.output.sink import STDOUT, FileSink, OutputTarget, WriteMode

from .results import OperationResult, ResultStatus

logger = logging.getLogger(__name__)

CITATION_FILE = "CITATION.bib"
DEPENDENCIES_FILE = "DEPENDENCIES.bib"


class Orchestrator:
    """Wire locator, parser, classifier, renderer and sink together."""

    def __init__(
        self,
        locator: ManifestLocator | None = None,
        parser: ManifestParser | None = None,
        classifier: DependencyClassifier | None = None,
        renderer: CitationRenderer | None = None,
        sink: FileSink | None = None,
        enricher: Enricher | None = None,
    ):
        self.locator = locator or ManifestLocator()
        self.parser = parser or ManifestParser()
        self.classifier = classifier or DependencyClassifier()
        self.renderer = renderer or CitationRenderer()
        self.sink = sink or FileSink()
        self.enricher = enricher

    def cite_project(
        self,
        root: Path | str,
        filename: str | None = None,
        overwrite: bool = False,
        readme_append: bool = False,
    ) -> OperationResult:
        """Render the citation of the crate whose manifest is in ``root``.

        Raises:
            NotFoundError: ``root`` or its manifest is missing.
            ManifestParseError: The manifest is malformed.
            AlreadyExistsError: The citation file exists and
                ``overwrite`` is False.
            WriteError: The citation file could not be written.
        """
        root = Path(root)
        manifests = self.locator.locate(root, max_depth=0)
        if not manifests:
            raise NotFoundError(
                root, f"No {self.locator.manifest_name} found in {root}"
            )

        manifest_path = manifests[0]
        document = self.parser.parse_file(manifest_path)
        entry = self.renderer.render_project(document.package)

        filename = filename or CITATION_FILE
        target = OutputTarget.from_filename(manifest_path.parent, filename, overwrite)
        result = self.sink.write(target, self.renderer.render_text([entry]))

        updated = []
        if readme_append:
            updated = self.append_readme(manifest_path.parent, filename)

        return OperationResult(
            status=ResultStatus.SUCCESS,
            message=result.message,
            path=result.path,
            data={"key": entry.key, "readmes": [str(p) for p in updated]},
        )

    def append_readme(self, directory: Path, filename: str = CITATION_FILE) -> list[Path]:
        """Add the "Citing" section to every README in ``directory``."""
        if filename == STDOUT:
            filename = CITATION_FILE
        readmes = sorted(
            p for p in directory.iterdir() if p.is_file() and "README" in p.name
        )
        if not readmes:
            logger.warning(f"No README found in {directory}")

        section = citing_section(filename)
        for readme in readmes:
            logger.info(f"Appending to readme file: {readme}")
            self.sink.write(OutputTarget(readme, WriteMode.APPEND), section)
        return readmes

    def cite_dependencies(
        self,
        root: Path | str,
        max_depth: int | None = -1,
        filename: str | None = None,
        overwrite: bool = False,
        enrich: bool = True,
    ) -> OperationResult:
        """Render citations for the dependencies of every crate below ``root``.

        Malformed manifests are skipped with a warning. Failed registry
        lookups only reduce an entry to its locally known fields.

        Raises:
            NotFoundError: ``root`` is missing or holds no manifest within
                ``max_depth``.
            AlreadyExistsError: The output file exists and ``overwrite`` is
                False.
            WriteError: The output file could not be written.
        """
        root = Path(root)
        logger.info(f"Searching for manifests in {root} ({describe_depth(max_depth)})")
        manifests = self.locator.locate(root, max_depth=max_depth)
        if not manifests:
            raise NotFoundError(
                root,
                f"No {self.locator.manifest_name} files found in {root} "
                f"({describe_depth(max_depth)})",
            )

        documents = []
        warnings = []
        for manifest_path in manifests:
            try:
                documents.append(self.parser.parse_file(manifest_path))
            except ManifestParseError as e:
                logger.warning(f"{e}. Skipping this file.")
                warnings.append(str(e))

        descriptors = self.classifier.classify_all(documents)
        data = {
            "manifests": len(manifests),
            "processed": len(documents),
            "skipped": len(manifests) - len(documents),
            "dependencies": len(descriptors),
        }

        if not descriptors:
            logger.warning("No dependencies found, nothing written")
            return OperationResult(
                status=ResultStatus.SKIPPED,
                message="No dependencies found",
                data=data,
                warnings=warnings or None,
            )

        entries = self.renderer.render_dependencies(
            descriptors, self.enricher if enrich else None
        )
        target = OutputTarget.from_filename(
            root if root.is_dir() else root.parent,
            filename or DEPENDENCIES_FILE,
            overwrite,
        )
        result = self.sink.write(target, self.renderer.render_text(entries))

        status = ResultStatus.PARTIAL_SUCCESS if warnings else ResultStatus.SUCCESS
        return OperationResult(
            status=status,
            message=result.message,
            path=result.path,
            data=data,
            warnings=warnings or None,
        )

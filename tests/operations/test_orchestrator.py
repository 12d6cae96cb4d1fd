"""Tests for the citation workflows.

These exercise the real locator, parser, classifier, renderer and sink
against temporary crate trees; only registry lookups are faked.
"""

import io
import logging

import pytest

from cratecite.citations.renderer import CitationRenderer
from cratecite.core.exceptions import (
    AlreadyExistsError,
    ManifestParseError,
    NotFoundError,
)
from cratecite.core.models import PartialMetadata
from cratecite.operations.orchestrator import Orchestrator
from cratecite.operations.results import ResultStatus
from cratecite.output.readme import BEGIN_FMT
from cratecite.output.sink import FileSink

DEPENDENCIES = """\
serde = "1.0"
local = { path = "../local" }
forked = { git = "https://github.com/example/forked", branch = "dev" }
"""


@pytest.fixture
def orchestrator(fixed_today):
    return Orchestrator(renderer=CitationRenderer(today=fixed_today))


class TestCiteProject:
    """Test the crate's own citation."""

    def test_writes_citation_file(self, tmp_path, make_crate, orchestrator):
        """CITATION.bib is written beside the manifest."""
        make_crate(tmp_path, name="demo", version="1.0.0", extra='authors = ["Jane"]')

        result = orchestrator.cite_project(tmp_path)

        citation = tmp_path / "CITATION.bib"
        assert result.success
        assert result.path == citation
        assert citation.read_text() == (
            "@misc{demo,\n"
            "    title = {demo},\n"
            "    author = {Jane},\n"
            "    version = {1.0.0},\n"
            "    year = {2024},\n"
            "    month = mar\n"
            "}\n"
        )

    def test_only_looks_in_given_directory(self, tmp_path, make_crate, orchestrator):
        """A nested manifest does not count for the crate's own citation."""
        make_crate(tmp_path / "nested")

        with pytest.raises(NotFoundError) as exc_info:
            orchestrator.cite_project(tmp_path)

        assert "No Cargo.toml found" in str(exc_info.value)

    def test_missing_root(self, tmp_path, orchestrator):
        """A missing path is fatal."""
        with pytest.raises(NotFoundError):
            orchestrator.cite_project(tmp_path / "missing")

    def test_malformed_manifest_is_fatal(self, tmp_path, orchestrator):
        """In project mode a parse error aborts."""
        (tmp_path / "Cargo.toml").write_text("[package\n")

        with pytest.raises(ManifestParseError):
            orchestrator.cite_project(tmp_path)

    def test_existing_file_requires_overwrite(self, tmp_path, make_crate, orchestrator):
        """An existing CITATION.bib is kept unless overwrite is given."""
        make_crate(tmp_path)
        citation = tmp_path / "CITATION.bib"
        citation.write_text("keep\n")

        with pytest.raises(AlreadyExistsError):
            orchestrator.cite_project(tmp_path)
        assert citation.read_text() == "keep\n"

        orchestrator.cite_project(tmp_path, overwrite=True)
        assert citation.read_text().startswith("@misc{demo,")

    def test_custom_filename(self, tmp_path, make_crate, orchestrator):
        """The file name can be chosen."""
        make_crate(tmp_path)

        orchestrator.cite_project(tmp_path, filename="REFS.bib")

        assert (tmp_path / "REFS.bib").exists()

    def test_stdout(self, tmp_path, make_crate, fixed_today):
        """STDOUT prints the entry and writes nothing."""
        make_crate(tmp_path)
        stream = io.StringIO()
        orchestrator = Orchestrator(
            renderer=CitationRenderer(today=fixed_today), sink=FileSink(stream=stream)
        )

        result = orchestrator.cite_project(tmp_path, filename="STDOUT")

        assert stream.getvalue().startswith("@misc{demo,")
        assert result.path is None
        assert not (tmp_path / "CITATION.bib").exists()

    def test_readme_append(self, tmp_path, make_crate, orchestrator):
        """README files receive the Citing section exactly once."""
        make_crate(tmp_path)
        readme = tmp_path / "README.md"
        readme.write_text("# Demo\n")

        result = orchestrator.cite_project(tmp_path, readme_append=True)
        orchestrator.cite_project(tmp_path, overwrite=True, readme_append=True)

        content = readme.read_text()
        assert content.startswith("# Demo\n")
        assert content.count(BEGIN_FMT.format(key="citing")) == 1
        assert "See CITATION.bib" in content
        assert result.data["readmes"] == [str(readme)]


class TestCiteDependencies:
    """Test dependency citations across a tree."""

    def test_writes_combined_file(self, tmp_path, make_crate, orchestrator):
        """Dependencies of every crate land in one DEPENDENCIES.bib at root."""
        make_crate(tmp_path / "app", name="app", dependencies=DEPENDENCIES)
        make_crate(tmp_path / "lib", name="lib", dependencies='rand = "0.8"\n')

        result = orchestrator.cite_dependencies(tmp_path, enrich=False)

        text = (tmp_path / "DEPENDENCIES.bib").read_text()
        assert result.status is ResultStatus.SUCCESS
        assert result.data["dependencies"] == 4
        assert [line for line in text.splitlines() if line.startswith("@misc")] == [
            "@misc{rust-serde,",
            "@misc{rust-local,",
            "@misc{rust-forked,",
            "@misc{rust-rand,",
        ]
        assert "note = {Local path dependency}" in text
        assert "note = {Git dependency}" in text
        assert "url = {https://github.com/example/forked}" in text
        assert "howpublished = {https://crates.io/crates/serde}" in text

    def test_duplicates_across_manifests(self, tmp_path, make_crate, orchestrator):
        """A dependency shared by two crates is cited once."""
        make_crate(tmp_path / "a", name="a", dependencies='serde = "1.0"\n')
        make_crate(tmp_path / "b", name="b", dependencies='serde = "1.0.100"\n')

        orchestrator.cite_dependencies(tmp_path, enrich=False)

        text = (tmp_path / "DEPENDENCIES.bib").read_text()
        assert text.count("@misc{rust-serde,") == 1
        assert "version = {1.0}" in text

    def test_skips_malformed_manifest(self, tmp_path, make_crate, orchestrator, caplog):
        """A broken manifest is skipped with a warning."""
        caplog.set_level(logging.WARNING)
        make_crate(tmp_path / "good", dependencies='rand = "0.8"\n')
        (tmp_path / "bad").mkdir()
        (tmp_path / "bad" / "Cargo.toml").write_text("not [ toml")

        result = orchestrator.cite_dependencies(tmp_path, enrich=False)

        assert result.status is ResultStatus.PARTIAL_SUCCESS
        assert result.data["skipped"] == 1
        assert "Skipping this file" in caplog.text
        assert "rust-rand" in (tmp_path / "DEPENDENCIES.bib").read_text()

    def test_respects_max_depth(self, tmp_path, make_crate, orchestrator):
        """Manifests deeper than max_depth are ignored."""
        make_crate(tmp_path, dependencies='top = "1"\n')
        make_crate(tmp_path / "a" / "b", name="deep", dependencies='deep-dep = "1"\n')

        orchestrator.cite_dependencies(tmp_path, max_depth=1, enrich=False)

        text = (tmp_path / "DEPENDENCIES.bib").read_text()
        assert "rust-top" in text
        assert "deep-dep" not in text

    def test_no_manifest_is_fatal(self, tmp_path, orchestrator):
        """An empty tree is a NotFoundError."""
        with pytest.raises(NotFoundError):
            orchestrator.cite_dependencies(tmp_path)

    def test_no_dependencies_writes_nothing(self, tmp_path, make_crate, orchestrator):
        """Crates without dependencies produce no file."""
        make_crate(tmp_path)

        result = orchestrator.cite_dependencies(tmp_path, enrich=False)

        assert result.status is ResultStatus.SKIPPED
        assert not (tmp_path / "DEPENDENCIES.bib").exists()

    def test_enrichment_failure_is_not_fatal(
        self, tmp_path, make_crate, fixed_today, fake_enricher
    ):
        """A failed lookup reduces one entry to local fields only."""
        make_crate(tmp_path, dependencies='serde = "1.0"\nghost = "0.1"\n')
        enricher = fake_enricher({"serde": PartialMetadata(description="Serialization")})
        orchestrator = Orchestrator(
            renderer=CitationRenderer(today=fixed_today), enricher=enricher
        )

        result = orchestrator.cite_dependencies(tmp_path)

        text = (tmp_path / "DEPENDENCIES.bib").read_text()
        ghost = text.split("@misc{rust-ghost,")[1]
        assert result.success
        assert "note = {Serialization}" in text
        assert "note" not in ghost
        assert "version = {0.1}" in ghost
        assert enricher.calls == ["serde", "ghost"]

    def test_enrich_false_skips_lookups(
        self, tmp_path, make_crate, fixed_today, fake_enricher
    ):
        """Offline runs never call the enricher."""
        make_crate(tmp_path, dependencies='serde = "1.0"\n')
        enricher = fake_enricher()
        orchestrator = Orchestrator(
            renderer=CitationRenderer(today=fixed_today), enricher=enricher
        )

        orchestrator.cite_dependencies(tmp_path, enrich=False)

        assert enricher.calls == []

    def test_existing_output_requires_overwrite(self, tmp_path, make_crate, orchestrator):
        """DEPENDENCIES.bib follows the same create/overwrite rules."""
        make_crate(tmp_path, dependencies='serde = "1.0"\n')
        (tmp_path / "DEPENDENCIES.bib").write_text("old\n")

        with pytest.raises(AlreadyExistsError):
            orchestrator.cite_dependencies(tmp_path, enrich=False)

        orchestrator.cite_dependencies(tmp_path, enrich=False, overwrite=True)
        assert "rust-serde" in (tmp_path / "DEPENDENCIES.bib").read_text()

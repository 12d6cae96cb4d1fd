"""Main CLI entry point."""

import logging
import sys
from pathlib import Path

import click
from click.exceptions import Exit

from cratecite import __version__
from cratecite.citations.renderer import CitationRenderer
from cratecite.cli.config import load_settings
from cratecite.cli.output import (
    create_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from cratecite.operations.orchestrator import Orchestrator
from cratecite.operations.results import ResultStatus
from cratecite.registry.enricher import RegistryEnricher

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags.

    Warnings (skipped manifests, failed lookups) are shown by default.
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("cratecite").setLevel(level)


class CiteCommand(click.Command):
    """Command that turns failures into an error line and exit status 1."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            print_warning("Interrupted")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            # Let Click exceptions and exits propagate with their exit codes
            raise
        except Exception as e:
            if ctx.params.get("debug"):
                raise
            print_error(str(e), create_console(no_color=ctx.params.get("no_color", False)))
            ctx.exit(1)


@click.command(cls=CiteCommand, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=Path("."),
    show_default=True,
    help="Path to the crate. With --dependencies, the root of the recursive search.",
)
@click.option(
    "--max-depth",
    "-m",
    type=int,
    default=-1,
    show_default=True,
    help="Maximum depth for recursive search. 0 means only the given directory, "
    "-1 means unlimited depth.",
)
@click.option(
    "--dependencies",
    "-d",
    is_flag=True,
    help="Generate BibTeX entries for all explicit dependencies.",
)
@click.option(
    "--generate",
    "-g",
    is_flag=True,
    help="Generate the crate's own CITATION.bib file (the default).",
)
@click.option(
    "--filename",
    "-f",
    help='Citation file to write, default CITATION.bib (or DEPENDENCIES.bib with '
    '--dependencies). "STDOUT" writes to standard output.',
)
@click.option("--overwrite", "-o", is_flag=True, help="Overwrite an existing citation file.")
@click.option(
    "--readme-append",
    "-r",
    is_flag=True,
    help='Append a "Citing" section to the README.',
)
@click.option("--offline", is_flag=True, help="Do not query the registry for metadata.")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.version_option(
    version=__version__, prog_name="cratecite", message="cratecite version %(version)s"
)
def cli(
    path: Path,
    max_depth: int,
    dependencies: bool,
    generate: bool,
    filename: str | None,
    overwrite: bool,
    readme_append: bool,
    offline: bool,
    config: Path | None,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
) -> None:
    """Generate BibTeX citations for a Rust crate or its dependencies.

    By default writes CITATION.bib for the crate in --path. With
    --dependencies, searches --path recursively for Cargo.toml files and
    writes one DEPENDENCIES.bib citing every explicit dependency.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)
    console = create_console(no_color=no_color)

    if generate and dependencies:
        raise click.UsageError("--generate and --dependencies are mutually exclusive")

    settings = load_settings(config)
    renderer = CitationRenderer(
        key_prefix=settings.key_prefix, registry_site=settings.registry_site
    )

    if not dependencies:
        if max_depth != -1:
            logger.debug("--max-depth only applies to --dependencies")
        result = Orchestrator(renderer=renderer).cite_project(
            path, filename=filename, overwrite=overwrite, readme_append=readme_append
        )
        if not quiet:
            if result.path:
                print_success(result.message, console)
            for readme in result.data.get("readmes", []):
                print_success(f"Appended Citing section to {readme}", console)
        return

    if readme_append:
        print_warning("--readme-append only applies to the crate's own citation", console)

    with RegistryEnricher(
        api_url=settings.registry_api,
        timeout=settings.timeout,
        user_agent=settings.user_agent,
    ) as enricher:
        result = Orchestrator(renderer=renderer, enricher=enricher).cite_dependencies(
            path,
            max_depth=max_depth,
            filename=filename,
            overwrite=overwrite,
            enrich=settings.enrich and not offline,
        )

    if quiet:
        return
    if result.path:
        print_success(result.message, console)
    elif result.status is ResultStatus.SKIPPED:
        print_warning(result.message, console)

    data = result.data or {}
    print_info(
        f"Processed {data.get('processed', 0)} manifest(s), "
        f"skipped {data.get('skipped', 0)}, "
        f"cited {data.get('dependencies', 0)} dependencies",
        console,
    )


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        # Exit gracefully on Ctrl+C
        sys.exit(130)


if __name__ == "__main__":
    main()

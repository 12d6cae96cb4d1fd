"""Generate BibTeX citations for Rust crates and their dependencies."""

__version__ = "0.3.0"

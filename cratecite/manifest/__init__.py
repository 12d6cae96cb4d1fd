"""Manifest discovery, parsing and dependency classification."""

from cratecite.manifest.classifier import DependencyClassifier
from cratecite.manifest.locator import MANIFEST_NAME, ManifestLocator
from cratecite.manifest.parser import ManifestParser

__all__ = [
    "MANIFEST_NAME",
    "DependencyClassifier",
    "ManifestLocator",
    "ManifestParser",
]

"""Package registry access."""

from cratecite.registry.enricher import (
    DEFAULT_REGISTRY_API,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    RegistryEnricher,
)

__all__ = [
    "DEFAULT_REGISTRY_API",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "RegistryEnricher",
]

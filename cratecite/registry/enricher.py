"""Registry metadata lookups for crates.io dependencies."""

from __future__ import annotations

import logging
from typing import Any

import requests

from cratecite import __version__
from cratecite.core.exceptions import EnrichmentError
from cratecite.core.models import EnrichmentResult, PartialMetadata
from cratecite.core.strings import clean_text

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_API = "https://crates.io/api/v1"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = f"cratecite/{__version__}"


class RegistryEnricher:
    """Fetch descriptive metadata for registry dependencies.

    Each distinct crate name is looked up at most once per enricher.
    Lookups never raise: failures come back as an ``EnrichmentResult``
    with ``error`` set and empty metadata.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_REGISTRY_API,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ):
        """Initialize enricher.

        Args:
            api_url: Base URL of the registry API
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header; crates.io rejects anonymous clients
            session: HTTP session to use (created when omitted)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self._results: dict[str, EnrichmentResult] = {}

    def __enter__(self) -> RegistryEnricher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP session."""
        self.session.close()

    def __call__(self, name: str) -> EnrichmentResult:
        return self.enrich(name)

    def enrich(self, name: str) -> EnrichmentResult:
        """Look up ``name`` in the registry."""
        if name in self._results:
            return self._results[name]

        try:
            result = EnrichmentResult(name=name, metadata=self.fetch(name))
        except EnrichmentError as e:
            logger.warning(str(e))
            result = EnrichmentResult.failed(name, e.reason)

        self._results[name] = result
        return result

    def fetch(self, name: str) -> PartialMetadata:
        """Perform the HTTP lookup.

        Raises:
            EnrichmentError: On network errors, timeouts, missing crates and
                malformed responses.
        """
        url = f"{self.api_url}/crates/{name}"
        logger.debug(f"Fetching registry metadata from {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout:
            raise EnrichmentError(name, f"timed out after {self.timeout}s")
        except requests.RequestException as e:
            raise EnrichmentError(name, f"network error: {e}")

        if response.status_code == 404:
            raise EnrichmentError(name, "crate not found")
        if response.status_code != 200:
            raise EnrichmentError(name, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise EnrichmentError(name, "response is not valid JSON")

        return self.parse_payload(name, payload)

    def parse_payload(self, name: str, payload: Any) -> PartialMetadata:
        """Extract metadata from a crates.io ``/crates/<name>`` response."""
        info = payload.get("crate") if isinstance(payload, dict) else None
        if not isinstance(info, dict):
            raise EnrichmentError(name, "unexpected response shape")

        authors = info.get("authors")
        if isinstance(authors, list):
            authors = tuple(a.strip() for a in authors if isinstance(a, str) and a.strip())
        else:
            authors = ()

        return PartialMetadata(
            description=clean_text(info.get("description")),
            authors=authors,
            repository=clean_text(info.get("repository")),
            homepage=clean_text(info.get("homepage")),
        )

"""Link shortening service.

This module contains the ShorteningService class which implements the business
logic for issuing short codes: URL normalisation and validation, code
generation and storage with transparent collision retries.
"""

import logging
import re
from typing import Collection, Optional, Set
from urllib.parse import urlsplit

from shortlink.models.link import Link
from shortlink.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    LinkStore,
    RepositoryError,
)
from shortlink.services.codegen import CodeGenerator
from shortlink.services.exceptions import (
    CodeGenerationExhaustedError,
    InvalidURLError,
    LinkCreationError,
)

logger = logging.getLogger(__name__)

# A URL is considered to carry a scheme when it starts with "<scheme>://"
SCHEME_PREFIX_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*://')

# Dot-separated labels of letters, digits and inner hyphens; at least one dot
HOST_PATTERN = re.compile(
    r'^([a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+'
    r'[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$'
)

INVALID_URL_MESSAGE = "Invalid URL format. Example: example.org or https://example.org"


class ShorteningService:
    """
    Service for issuing short codes.

    This service owns no state of its own: links live in the store handed to
    it, and codes come from the injected generator.
    """

    def __init__(
        self,
        store: LinkStore,
        generator: CodeGenerator,
        max_attempts: int = 10,
        default_scheme: str = "https",
        allowed_schemes: Collection[str] = ("http", "https"),
        max_url_length: int = 2048,
    ):
        """
        Initialize the shortening service.

        Args:
            store: Link store shared with the redirect service
            generator: Short code generator
            max_attempts: Store attempts before giving up on a submission
            default_scheme: Scheme prepended to URLs submitted without one
            allowed_schemes: Schemes accepted for target URLs
            max_url_length: Maximum accepted length of a normalised URL
        """
        self.store = store
        self.generator = generator
        self.max_attempts = max_attempts
        self.default_scheme = default_scheme
        self.allowed_schemes = {scheme.lower() for scheme in allowed_schemes}
        self.max_url_length = max_url_length

    async def create(self, raw_url: str) -> str:
        """
        Issue a short code for ``raw_url``.

        Returns:
            str: The issued short code

        Raises:
            InvalidURLError: If the URL is not a valid absolute URL
            CodeGenerationExhaustedError: If no free code was found in time
            LinkCreationError: If the store fails
        """
        link = await self.create_link(raw_url)
        return link.code

    async def create_link(self, raw_url: str) -> Link:
        """
        Validate ``raw_url`` and persist a new Link for it.

        Collisions reported by the store are retried with a fresh code; the
        caller never sees them. With a deterministic generator a collision on
        a code already pointing at the same URL returns that existing Link.

        Args:
            raw_url: The URL as submitted by the client

        Returns:
            Link: The created link

        Raises:
            InvalidURLError: If the URL is not a valid absolute URL
            CodeGenerationExhaustedError: If no free code was found in time
            LinkCreationError: If the store fails
        """
        target_url = self.normalize_url(raw_url)
        if not self.is_valid_url(target_url):
            raise InvalidURLError(INVALID_URL_MESSAGE)

        used_codes: Set[str] = set()
        for _ in range(self.max_attempts):
            code = self.generator.generate(target_url, used_codes)
            try:
                link = await self.store.put(code, target_url)
            except DuplicateCodeError:
                if self.generator.deterministic:
                    existing = await self._find_existing_link(code, target_url)
                    if existing is not None:
                        logger.info(f"Reusing short code '{code}' for {target_url}")
                        return existing
                logger.debug(f"Short code collision on '{code}', retrying")
                used_codes.add(code)
                continue
            except RepositoryError as e:
                logger.error(f"Error storing link: {e}")
                raise LinkCreationError(f"Failed to store link: {str(e)}") from e

            logger.info(f"Issued short code '{code}' for {target_url}")
            return link

        logger.error(f"Gave up issuing a code for {target_url} after {self.max_attempts} collisions")
        raise CodeGenerationExhaustedError(
            "Failed to generate a unique short code. Try again later."
        )

    async def _find_existing_link(self, code: str, target_url: str) -> Optional[Link]:
        """Return the Link under ``code`` if it already points at ``target_url``."""
        try:
            link = await self.store.get(code)
        except CodeNotFoundError:
            return None
        except RepositoryError as e:
            logger.error(f"Error reading existing link: {e}")
            raise LinkCreationError(f"Failed to store link: {str(e)}") from e
        return link if link.target_url == target_url else None

    def normalize_url(self, raw_url) -> str:
        """
        Strip surrounding whitespace and add the default scheme when missing.

        Args:
            raw_url: URL to normalise (string or pydantic URL object)

        Returns:
            str: The normalised URL, or an empty string for empty input
        """
        url = str(raw_url).strip() if raw_url is not None else ""
        if url and not SCHEME_PREFIX_PATTERN.match(url):
            url = f"{self.default_scheme}://{url}"
        return url

    def is_valid_url(self, url: str) -> bool:
        """
        Check whether ``url`` is a well-formed absolute URL.

        Args:
            url: Normalised URL to validate

        Returns:
            bool: True if the URL is valid, False otherwise
        """
        if not url or len(url) > self.max_url_length:
            return False
        if any(ch.isspace() for ch in url):
            return False

        try:
            parts = urlsplit(url)
            # Accessing the port validates it
            parts.port
        except ValueError:
            return False

        if parts.scheme.lower() not in self.allowed_schemes:
            return False

        host = parts.hostname
        return bool(host and HOST_PATTERN.match(host))

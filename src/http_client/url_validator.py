"""URL validation for outbound requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Validates that a URL is absolute and can be handed to a transport.

    A valid URL has an allowed scheme, a host, a numeric port (if any)
    and no whitespace.

    Example:
        validator = UrlValidator()
        result = validator.validate("https://example.com/page")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    DEFAULT_ALLOWED_SCHEMES = frozenset({"http", "https"})

    def __init__(
        self,
        allowed_schemes: set[str] | frozenset[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_schemes: Set of allowed URL schemes (default: {"http", "https"})
            logger: Optional logger for validation messages
        """
        self.allowed_schemes = allowed_schemes or self.DEFAULT_ALLOWED_SCHEMES
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate a URL.

        Args:
            url: The URL to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not url or any(char.isspace() for char in url):
            return UrlValidationResult.invalid("URL is empty or contains whitespace")

        try:
            parsed = urlsplit(url)
            # Raises for non-numeric or out of range ports
            _ = parsed.port
        except ValueError as e:
            return UrlValidationResult.invalid(f"Invalid URL format: {e}")

        if parsed.scheme.lower() not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        if not parsed.hostname:
            return UrlValidationResult.invalid("URL has no host")

        return UrlValidationResult.valid()

    def is_valid(self, url: str) -> bool:
        """
        Quick check if URL is valid.

        Args:
            url: The URL to check

        Returns:
            True if valid, False otherwise
        """
        return self.validate(url).is_valid

    def get_rejection_reason(self, url: str) -> str | None:
        """
        Get rejection reason for a URL.

        Args:
            url: The URL to check

        Returns:
            Rejection reason string if invalid, None if valid
        """
        return self.validate(url).rejection_reason

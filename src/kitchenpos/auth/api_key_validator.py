"""API key validation for write endpoints.

Keys are configured through ADMIN_API_KEY (comma separated) and compared in
constant time.
"""

import secrets


class APIKeyValidator:
    """Checks presented API keys against a configured set."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator.

        Args:
            api_keys: Accepted API keys

        Raises:
            ValueError: If no API key is configured
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = tuple(dict.fromkeys(api_keys))

    def validate(self, api_key: str) -> bool:
        """Return True if ``api_key`` matches one of the configured keys.

        Keys are compared as UTF-8 bytes; compare_digest rejects non-ASCII str.
        """
        presented = api_key.encode("utf-8")
        return any(
            secrets.compare_digest(presented, key.encode("utf-8")) for key in self.api_keys
        )

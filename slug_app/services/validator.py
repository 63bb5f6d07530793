"""
Syntactic URL validation.

No network access is performed: a URL is accepted when it parses as an
absolute URL with both a scheme and a host.
"""

from typing import Any, Tuple

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from slug_app.config import settings

INVALID_URL_REASON = "Original url is not valid"


class UrlValidator:
    """Checks candidate URLs before a slug is allocated for them"""

    _adapter = TypeAdapter(AnyUrl)

    def __init__(self, max_length: int = None):
        self.max_length = max_length or settings.max_url_length

    def validate(self, candidate: Any) -> Tuple[bool, str]:
        """
        Validate a candidate URL.

        Args:
            candidate: Raw value submitted as original_url

        Returns:
            Tuple of (is_valid, reason); reason is empty when valid
        """
        if not isinstance(candidate, str) or not candidate:
            return False, INVALID_URL_REASON

        if len(candidate) > self.max_length:
            return False, INVALID_URL_REASON

        # The parser would quietly strip or escape whitespace
        if any(char.isspace() for char in candidate):
            return False, INVALID_URL_REASON

        try:
            url = self._adapter.validate_python(candidate)
        except PydanticValidationError:
            return False, INVALID_URL_REASON

        if not url.scheme or not url.host:
            return False, INVALID_URL_REASON

        return True, ""

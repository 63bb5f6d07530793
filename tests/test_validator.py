"""
Tests for URL validation.
"""
import pytest

from slug_app.services.validator import INVALID_URL_REASON, UrlValidator


class TestUrlValidator:
    """Absolute URLs with scheme and host pass, everything else is rejected"""

    @pytest.mark.parametrize("candidate", [
        "https://google.com",
        "http://example.com/path?query=1#frag",
        "https://sub.example.co.uk:8443/a/b",
        "ftp://files.example.com/pub",
        "http://127.0.0.1:8000/",
    ])
    def test_accepts_absolute_urls(self, candidate):
        assert UrlValidator().validate(candidate) == (True, "")

    @pytest.mark.parametrize("candidate", [
        "",
        None,
        "test",
        "example.com",
        "/relative/path",
        "http://",
        "https://",
        "mailto:someone@example.com",
        "https://exa mple.com",
        " https://example.com",
        12345,
    ])
    def test_rejects_invalid_urls(self, candidate):
        ok, reason = UrlValidator().validate(candidate)

        assert ok is False
        assert reason == "Original url is not valid"

    def test_rejects_overlong_urls(self):
        validator = UrlValidator(max_length=30)

        assert validator.validate("https://example.com/short")[0] is True
        assert validator.validate("https://example.com/" + "a" * 50) == (False, INVALID_URL_REASON)

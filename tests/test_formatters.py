"""Tests for utils/formatters.py.

Tests display-only cleanup of geo-IP ISP names and message truncation.
"""

from utils.formatters import cleanup_isp_name, shorten_text


class TestCleanupIspName:
    """Tests for cleanup_isp_name function."""

    def test_empty_passthrough(self) -> None:
        """Test missing ISP stays empty."""
        assert cleanup_isp_name("") == ""

    def test_remove_as_number(self) -> None:
        """Test AS number prefix is removed."""
        assert cleanup_isp_name("AS12345 Comcast") == "Comcast"
        assert cleanup_isp_name("AS28573 Claro") == "Claro"

    def test_remove_corporate_suffixes(self) -> None:
        """Test corporate suffixes are removed (case-insensitive)."""
        assert cleanup_isp_name("Comcast Corporation") == "Comcast"
        assert cleanup_isp_name("Google LLC") == "Google"
        assert cleanup_isp_name("Claro S.A.") == "Claro"
        assert cleanup_isp_name("Deutsche Telekom GmbH") == "Deutsche Telekom"

    def test_suffix_inside_word_kept(self) -> None:
        """Test suffixes only match whole words."""
        assert cleanup_isp_name("Incapsula") == "Incapsula"

    def test_returns_original_if_empty(self) -> None:
        """Test original is returned if cleaning produces empty string."""
        assert cleanup_isp_name("Corporation Inc.") == "Corporation Inc."

    def test_real_world_examples(self) -> None:
        """Test real-world ISP names."""
        assert cleanup_isp_name("AS7922 Comcast Cable Communications, LLC") == "Comcast Cable Communications"
        assert cleanup_isp_name("Proton AG") == "Proton AG"


class TestShortenText:
    """Tests for shorten_text function."""

    def test_text_within_max(self) -> None:
        """Test text up to max_length is unchanged."""
        assert shorten_text("connection reset", 50) == "connection reset"
        assert shorten_text("12345", 5) == "12345"

    def test_text_longer_than_max(self) -> None:
        """Test text longer than max_length is truncated."""
        result = shorten_text("x" * 80, 50)
        assert len(result) == 50
        assert result.endswith("...")

    def test_word_boundary_break(self) -> None:
        """Test truncation prefers a word boundary."""
        result = shorten_text("hello world this is long", 15)
        assert result == "hello world..."

"""
Tests for PhotoFetcher with HTTP requests mocked.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from services.photo_fetcher import PLACEHOLDER_DIMENSIONS, PhotoDimensions, PhotoFetcher

URL = "https://storage.example.com/compliance-photos/1.jpg"


@pytest.fixture
def fetcher():
    fetcher = PhotoFetcher(timeout=2.0, max_width_px=600)
    yield fetcher
    fetcher.close()


def mock_response(content=b"", status_code=200):
    response = Mock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    return response


class TestFetch:
    """Test suite for PhotoFetcher.fetch."""

    def test_returns_content(self, fetcher):
        with patch.object(fetcher.session, "get", return_value=mock_response(b"jpeg-bytes")) as mock_get:
            assert fetcher.fetch(URL) == b"jpeg-bytes"

        mock_get.assert_called_once_with(URL, timeout=2.0)

    def test_http_error_returns_none(self, fetcher):
        with patch.object(fetcher.session, "get", return_value=mock_response(status_code=404)):
            assert fetcher.fetch(URL) is None

    def test_timeout_returns_none(self, fetcher):
        with patch.object(fetcher.session, "get", side_effect=requests.exceptions.Timeout("slow")):
            assert fetcher.fetch(URL) is None

    def test_empty_body_returns_none(self, fetcher):
        with patch.object(fetcher.session, "get", return_value=mock_response(b"")):
            assert fetcher.fetch(URL) is None


class TestDimensions:
    """Test suite for preview sizing."""

    def test_wide_image_is_scaled_down(self, fetcher, png_factory):
        assert fetcher.scaled_dimensions(png_factory(1200, 900)) == PhotoDimensions(600, 450)

    def test_small_image_keeps_size(self, fetcher, png_factory):
        assert fetcher.scaled_dimensions(png_factory(300, 200)) == PhotoDimensions(300, 200)

    def test_undecodable_image_uses_placeholder(self, fetcher):
        assert fetcher.scaled_dimensions(b"garbage") == PLACEHOLDER_DIMENSIONS
        assert PLACEHOLDER_DIMENSIONS == PhotoDimensions(400, 300)

"""Tests for configuration overrides."""

import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from traintable import config


class TestConfig(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        self.assertEqual(config.get_feed_url(), config.DEFAULT_GTFS_URL)
        self.assertIsNone(config.get_http_timeout())

    @patch.dict(os.environ, {"TRAINTABLE_GTFS_URL": "https://example.com/feed.zip", "TRAINTABLE_HTTP_TIMEOUT": "12.5"})
    def test_overrides(self):
        self.assertEqual(config.get_feed_url(), "https://example.com/feed.zip")
        self.assertEqual(config.get_http_timeout(), 12.5)

    @patch.dict(os.environ, {"TRAINTABLE_HTTP_TIMEOUT": "soon"})
    def test_invalid_timeout_ignored(self):
        self.assertIsNone(config.get_http_timeout())

    @patch.dict(os.environ, {"TRAINTABLE_HTTP_TIMEOUT": "0"})
    def test_zero_timeout_means_none(self):
        self.assertIsNone(config.get_http_timeout())


if __name__ == "__main__":
    unittest.main()

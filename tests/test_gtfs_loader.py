"""Tests for GTFS feed loading."""

import io
import math
import sys
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from traintable.exceptions import FeedLoadError
from traintable.gtfs_loader import GTFSLoader

from feed_fixtures import caltrain_feed, make_feed


class TestGTFSLoader(unittest.TestCase):
    """Test decoding a zipped feed into typed records."""

    def test_load_from_bytes(self):
        feed = GTFSLoader().load(caltrain_feed())

        self.assertEqual(len(feed.stops), 6)
        self.assertEqual(set(feed.routes), {"L1", "B7", "LTD"})
        self.assertEqual(len(feed.calendar), 2)
        self.assertEqual(len(feed.trips), 4)
        self.assertEqual(len(feed.stop_times), 12)

        stop = feed.stops[0]
        self.assertEqual(stop.stop_id, "70011")
        self.assertEqual(stop.stop_name, "San Francisco Caltrain Northbound")
        self.assertAlmostEqual(stop.stop_lat, 37.7765, places=4)

        stop_time = feed.stop_times[6]
        self.assertEqual(stop_time.departure_time, "25:10:00")
        self.assertEqual(stop_time.stop_sequence, 1)
        self.assertTrue(feed.calendar[0].monday)
        self.assertFalse(feed.calendar[0].saturday)

    def test_missing_stops_is_fatal(self):
        with self.assertRaises(FeedLoadError):
            GTFSLoader().load(caltrain_feed(stops=None))

    def test_missing_optional_tables(self):
        feed = GTFSLoader().load(make_feed(stops="stop_id,stop_name,stop_lat,stop_lon\n1,Foo Northbound,1,2\n"))
        self.assertEqual(len(feed.stops), 1)
        self.assertEqual(feed.routes, {})
        self.assertEqual(feed.trips, [])
        self.assertEqual(feed.stop_times, [])
        self.assertEqual(feed.calendar, [])

    def test_read_table_absent_vs_empty(self):
        payload = make_feed(stops="stop_id,stop_name\n", routes=None)
        with zipfile.ZipFile(io.BytesIO(payload)) as zip_file:
            self.assertEqual(GTFSLoader.read_table(zip_file, "stops.txt"), [])
            self.assertIsNone(GTFSLoader.read_table(zip_file, "routes.txt"))

    def test_malformed_rows(self):
        stops = "stop_id,stop_name,stop_lat,stop_lon\n1,Foo Northbound,north,\n,Nameless,1,2\n"
        stop_times = (
            "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
            "T,08:00,08:00,1,first\n"
            "T,08:10,08:10,1,2\n"
        )
        feed = GTFSLoader().load(make_feed(stops=stops, stop_times=stop_times))

        self.assertEqual(len(feed.stops), 1)
        self.assertTrue(math.isnan(feed.stops[0].stop_lat))
        self.assertTrue(math.isnan(feed.stops[0].stop_lon))
        self.assertEqual([st.stop_sequence for st in feed.stop_times], [2])

    def test_unsupported_archive_members(self):
        for error in (NotImplementedError("compression type 99"), RuntimeError("encrypted, password required")):
            with patch.object(zipfile.ZipFile, "read", side_effect=error):
                with self.assertRaises(FeedLoadError) as ctx:
                    GTFSLoader().load(caltrain_feed())
            self.assertIs(ctx.exception.__cause__, error)

    def test_not_a_zip(self):
        with self.assertRaises(FeedLoadError):
            GTFSLoader().load(b"definitely not a zip")

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "feed.zip"
            path.write_bytes(caltrain_feed())
            feed = GTFSLoader().load(str(path))
        self.assertEqual(len(feed.stops), 6)

    def test_missing_file(self):
        with self.assertRaises(FeedLoadError):
            GTFSLoader().load("/nonexistent/feed.zip")

    @patch("traintable.gtfs_loader.requests.get")
    def test_load_from_url(self, mock_get):
        mock_response = MagicMock()
        mock_response.content = caltrain_feed()
        mock_get.return_value = mock_response

        feed = GTFSLoader(timeout=5).load("https://example.com/gtfs.zip")

        mock_get.assert_called_once_with("https://example.com/gtfs.zip", timeout=5)
        self.assertEqual(len(feed.trips), 4)

    @patch("traintable.gtfs_loader.requests.get")
    def test_fetch_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(FeedLoadError) as ctx:
            GTFSLoader().load("https://example.com/gtfs.zip")
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    @patch("traintable.gtfs_loader.requests.get")
    def test_http_error(self, mock_get):
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.HTTPError("404")
        mock_get.return_value = mock_response
        with self.assertRaises(FeedLoadError):
            GTFSLoader().load("http://example.com/missing.zip")


if __name__ == "__main__":
    unittest.main()

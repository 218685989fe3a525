"""Tests for schedule time helpers."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from traintable.times import (
    duration_minutes,
    format_duration,
    format_time_12h,
    time_to_minutes,
)


class TestTimeToMinutes(unittest.TestCase):

    def test_keeps_rollover_hours(self):
        self.assertEqual(time_to_minutes("25:10:00"), 25 * 60 + 10)
        self.assertEqual(time_to_minutes("08:15"), 8 * 60 + 15)

    def test_rejects_garbage(self):
        with self.assertRaises(ValueError):
            time_to_minutes("soon")
        with self.assertRaises(ValueError):
            time_to_minutes("ab:cd")


class TestDuration(unittest.TestCase):

    def test_same_day(self):
        self.assertEqual(duration_minutes("08:00:00", "08:20:00"), 20)

    def test_across_rollover(self):
        self.assertEqual(duration_minutes("23:50:00", "24:10:00"), 20)

    def test_wraps_when_arrival_is_earlier(self):
        self.assertEqual(duration_minutes("23:50", "00:10"), 20)

    def test_format(self):
        self.assertEqual(format_duration(65), "1h 5m")
        self.assertEqual(format_duration(20), "0h 20m")

    def test_blank_times(self):
        self.assertIsNone(duration_minutes("", "08:20:00"))
        self.assertIsNone(duration_minutes("08:00:00", " "))
        self.assertEqual(format_duration(None), "")


class TestFormatTime12h(unittest.TestCase):

    def test_morning_and_evening(self):
        self.assertEqual(format_time_12h("08:15:00"), "8:15 AM")
        self.assertEqual(format_time_12h("12:05:00"), "12:05 PM")
        self.assertEqual(format_time_12h("17:40"), "5:40 PM")
        self.assertEqual(format_time_12h("00:30:00"), "12:30 AM")

    def test_next_day_marker(self):
        self.assertEqual(format_time_12h("25:10:00"), "1:10 AM (+1)")
        self.assertEqual(format_time_12h("24:00:00"), "12:00 AM (+1)")

    def test_blank_time(self):
        self.assertEqual(format_time_12h(""), "")


if __name__ == "__main__":
    unittest.main()

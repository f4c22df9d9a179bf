#!/usr/bin/env python3
"""
Tests for next-stop selection, street labels and stop-table validation.
"""

from __future__ import annotations

import unittest

from sim.errors import RouteConfigError
from sim.stops import Stop, StopTable, StreetLabel

_LABELS = [
    StreetLabel(0.0, "Howrah Station Rd"),
    StreetLabel(15.0, "Rabindra Setu (Howrah Bridge)"),
    StreetLabel(25.0, "Jawaharlal Nehru Rd"),
    StreetLabel(45.0, "J.B.S Haldane Ave (EM Bypass)"),
    StreetLabel(75.0, "Salt Lake Sector V Main Rd"),
]


def _stops(*progress_values: float):
    return [
        Stop(id=f"S{i}", name=f"Stop {i}", progress=p, x=float(i), y=0.0)
        for i, p in enumerate(progress_values)
    ]


class NextStopTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = StopTable(_stops(0.0, 35.0, 65.0, 100.0), _LABELS)

    def test_next_stop_ahead(self) -> None:
        self.assertEqual(self.table.next_stop(30.0).progress, 35.0)
        self.assertEqual(self.table.next_stop(0.0).progress, 35.0)

    def test_reached_stop_is_not_next(self) -> None:
        self.assertEqual(self.table.next_stop(35.0).progress, 65.0)

    def test_stop_within_epsilon_is_skipped(self) -> None:
        self.assertEqual(self.table.next_stop(34.5).progress, 65.0)

    def test_wraps_to_first_stop(self) -> None:
        table = StopTable(_stops(0.0, 40.0, 90.0), _LABELS)
        self.assertEqual(table.next_stop(99.0).id, "S0")
        self.assertEqual(table.next_stop(89.5).id, "S0")

    def test_terminal_at_100_then_wrap(self) -> None:
        self.assertEqual(self.table.next_stop(98.0).progress, 100.0)
        self.assertEqual(self.table.next_stop(99.0).id, "S0")

    def test_progress_gap_wraps(self) -> None:
        first = self.table.first
        self.assertAlmostEqual(StopTable.progress_gap(first, 99.0), 1.0)
        self.assertAlmostEqual(StopTable.progress_gap(self.table.stops[1], 30.0), 5.0)

    def test_reached_stops(self) -> None:
        reached = [s.id for s in self.table.reached(35.0)]
        self.assertEqual(reached, ["S0", "S1"])


class StreetLabelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = StopTable(_stops(0.0, 50.0), _LABELS)

    def test_label_boundaries(self) -> None:
        self.assertEqual(self.table.label_for(0.0), "Howrah Station Rd")
        self.assertEqual(self.table.label_for(14.99), "Howrah Station Rd")
        self.assertEqual(self.table.label_for(15.0), "Rabindra Setu (Howrah Bridge)")
        self.assertEqual(self.table.label_for(44.0), "Jawaharlal Nehru Rd")
        self.assertEqual(self.table.label_for(99.9), "Salt Lake Sector V Main Rd")


class StopTableValidationTests(unittest.TestCase):
    def test_empty_stops(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable([], _LABELS)

    def test_unsorted_stops(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(0.0, 65.0, 35.0), _LABELS)

    def test_duplicate_progress(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(0.0, 35.0, 35.0), _LABELS)

    def test_progress_out_of_range(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(0.0, 101.0), _LABELS)
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(-1.0, 50.0), _LABELS)

    def test_duplicate_ids(self) -> None:
        stops = [
            Stop(id="A", name="A", progress=0.0, x=0.0, y=0.0),
            Stop(id="A", name="B", progress=10.0, x=0.0, y=0.0),
        ]
        with self.assertRaises(RouteConfigError):
            StopTable(stops, _LABELS)

    def test_labels_must_start_at_zero(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(0.0), [StreetLabel(5.0, "Late start")])

    def test_labels_must_ascend(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(
                _stops(0.0),
                [StreetLabel(0.0, "A"), StreetLabel(30.0, "B"), StreetLabel(20.0, "C")],
            )

    def test_negative_epsilon(self) -> None:
        with self.assertRaises(RouteConfigError):
            StopTable(_stops(0.0), _LABELS, next_stop_epsilon=-1.0)


if __name__ == "__main__":
    unittest.main()

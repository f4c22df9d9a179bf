#!/usr/bin/env python3
"""
Tests for stop-proximity, congestion-zone and open-road speed selection.
"""

from __future__ import annotations

import unittest

from sim.errors import RouteConfigError
from sim.speed_policy import (
    REASON_OPEN_ROAD,
    REASON_STOP,
    REASON_ZONE,
    SpeedZone,
    SpeedZonePolicy,
)
from sim.stops import Stop

_STOPS = [
    Stop(id="start", name="Howrah Station", progress=0.0, x=100.0, y=500.0),
    Stop(id="s1", name="Esplanade", progress=35.0, x=550.0, y=550.0),
    Stop(id="s2", name="Science City", progress=65.0, x=950.0, y=500.0),
    Stop(id="end", name="Salt Lake Sec-V", progress=100.0, x=1350.0, y=250.0),
]


class SpeedZonePolicyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = SpeedZonePolicy(
            zones=(SpeedZone(lower=30.0, upper=40.0, factor=1.5, congested=True),),
            proximity_epsilon=2.0,
            crawl_factor=0.8,
            open_road_factor=5.0,
        )

    def test_stop_proximity_dominates_zone(self) -> None:
        decision = self.policy.target_speed(34.0, _STOPS)
        self.assertEqual(decision.factor, 0.8)
        self.assertFalse(decision.congested)
        self.assertEqual(decision.reason, REASON_STOP)
        self.assertEqual(decision.stop.id, "s1")

    def test_zone_applies_outside_proximity_band(self) -> None:
        decision = self.policy.target_speed(31.0, _STOPS)
        self.assertEqual(decision.factor, 1.5)
        self.assertTrue(decision.congested)
        self.assertEqual(decision.reason, REASON_ZONE)

    def test_proximity_band_is_strict(self) -> None:
        # Exactly epsilon away is outside the band.
        decision = self.policy.target_speed(33.0, _STOPS)
        self.assertEqual(decision.reason, REASON_ZONE)

    def test_zone_is_half_open(self) -> None:
        self.assertEqual(self.policy.target_speed(30.0, _STOPS).reason, REASON_ZONE)
        self.assertEqual(self.policy.target_speed(40.0, _STOPS).reason, REASON_OPEN_ROAD)

    def test_open_road_default(self) -> None:
        decision = self.policy.target_speed(20.0, _STOPS)
        self.assertEqual(decision.factor, 5.0)
        self.assertFalse(decision.congested)
        self.assertIsNone(decision.zone)

    def test_crawl_near_route_terminals(self) -> None:
        self.assertEqual(self.policy.target_speed(1.0, _STOPS).factor, 0.8)
        self.assertEqual(self.policy.target_speed(98.5, _STOPS).factor, 0.8)

    def test_uncongested_zone(self) -> None:
        policy = SpeedZonePolicy(zones=(SpeedZone(50.0, 60.0, 3.0, congested=False),))
        decision = policy.target_speed(55.0, _STOPS)
        self.assertEqual(decision.factor, 3.0)
        self.assertFalse(decision.congested)

    def test_display_speed_rounds_half_up(self) -> None:
        self.assertEqual(self.policy.display_speed(5.0), 45)
        self.assertEqual(self.policy.display_speed(1.5), 14)
        self.assertEqual(self.policy.display_speed(0.8), 7)


class SpeedZonePolicyValidationTests(unittest.TestCase):
    def test_overlapping_zones(self) -> None:
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(zones=(SpeedZone(10.0, 30.0, 1.0), SpeedZone(20.0, 40.0, 1.0)))

    def test_unsorted_zones(self) -> None:
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(zones=(SpeedZone(50.0, 60.0, 1.0), SpeedZone(10.0, 20.0, 1.0)))

    def test_adjacent_zones_allowed(self) -> None:
        policy = SpeedZonePolicy(zones=(SpeedZone(10.0, 20.0, 1.0), SpeedZone(20.0, 30.0, 2.0)))
        self.assertEqual(policy.zone_at(20.0).factor, 2.0)

    def test_zone_bounds(self) -> None:
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(zones=(SpeedZone(90.0, 110.0, 1.0),))
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(zones=(SpeedZone(40.0, 40.0, 1.0),))

    def test_factors_must_be_positive(self) -> None:
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(crawl_factor=0.0)
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(open_road_factor=-1.0)
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(zones=(SpeedZone(10.0, 20.0, 0.0),))

    def test_negative_epsilon(self) -> None:
        with self.assertRaises(RouteConfigError):
            SpeedZonePolicy(proximity_epsilon=-0.5)

    def test_zones_list_is_frozen_to_tuple(self) -> None:
        policy = SpeedZonePolicy(zones=[SpeedZone(10.0, 20.0, 1.0)])
        self.assertIsInstance(policy.zones, tuple)


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Tests for the background simulation driver.
"""

from __future__ import annotations

import time
import unittest

from sim.route_config import build_simulator
from sim.routes import default_route_config
from sim.sim_bridge import SimBridge, route_overview


class _FakeTime:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def _bridge(**kwargs) -> SimBridge:
    config = default_route_config()
    return SimBridge(build_simulator(config), config=config, **kwargs)


class SimBridgeTickTests(unittest.TestCase):
    def test_initial_snapshot_is_start_position(self) -> None:
        bridge = _bridge()
        snap = bridge.get_snapshot()
        self.assertEqual(snap.progress, 0.0)
        self.assertEqual(snap.next_stop.name, "Esplanade")

    def test_tick_publishes_snapshot(self) -> None:
        bridge = _bridge()
        snap = bridge._tick(1.0)
        self.assertIsNotNone(snap)
        self.assertAlmostEqual(bridge.get_snapshot().progress, 0.8)

    def test_rejected_tick_keeps_previous_snapshot(self) -> None:
        bridge = _bridge()
        bridge._tick(1.0)
        before = bridge.get_snapshot()
        with self.assertLogs("sim_bridge", level="WARNING"):
            self.assertIsNone(bridge._tick(-1.0))
        self.assertEqual(bridge.rejected_ticks, 1)
        self.assertIs(bridge.get_snapshot(), before)

    def test_overflowing_tick_counted_as_rejected(self) -> None:
        config = default_route_config().model_copy(update={"start_progress": 10.0})
        bridge = SimBridge(build_simulator(config), config=config)
        with self.assertLogs("sim_bridge", level="WARNING"):
            self.assertIsNone(bridge._tick(1e308))
        self.assertEqual(bridge.rejected_ticks, 1)
        self.assertEqual(bridge.get_snapshot().progress, 10.0)

    def test_clock_ticks_use_measured_time(self) -> None:
        fake = _FakeTime()
        bridge = _bridge(time_source=fake)
        bridge._tick_from_clock()
        self.assertEqual(bridge.get_snapshot().progress, 0.0)
        fake.now += 2.0
        bridge._tick_from_clock()
        self.assertAlmostEqual(bridge.get_snapshot().progress, 1.6)

    def test_paused_time_is_not_replayed(self) -> None:
        fake = _FakeTime()
        bridge = _bridge(time_source=fake)
        bridge._tick_from_clock()
        bridge.set_paused(True)
        self.assertTrue(bridge.is_paused())
        fake.now += 60.0
        bridge.set_paused(False)
        bridge._tick_from_clock()
        self.assertEqual(bridge.get_snapshot().progress, 0.0)
        fake.now += 1.0
        bridge._tick_from_clock()
        self.assertAlmostEqual(bridge.get_snapshot().progress, 0.8)

    def test_reset(self) -> None:
        bridge = _bridge()
        bridge._tick(10.0)
        self.assertGreater(bridge.get_snapshot().progress, 0.0)
        bridge.reset()
        self.assertEqual(bridge.get_snapshot().progress, 0.0)
        self.assertEqual(bridge.get_snapshot().lap, 0)

    def test_tick_rate_must_be_positive(self) -> None:
        config = default_route_config()
        with self.assertRaises(ValueError):
            SimBridge(build_simulator(config), tick_rate_hz=0.0)


class SimBridgeThreadTests(unittest.TestCase):
    def test_start_and_stop(self) -> None:
        bridge = _bridge(tick_rate_hz=200.0)
        bridge.start()
        try:
            self.assertTrue(bridge.running)
            time.sleep(0.2)
        finally:
            bridge.stop()
        self.assertFalse(bridge.running)
        self.assertGreater(bridge.get_snapshot().progress, 0.0)
        self.assertEqual(bridge.rejected_ticks, 0)


class RouteOverviewTests(unittest.TestCase):
    def test_route_metadata(self) -> None:
        route = _bridge().get_route()
        self.assertEqual(route["title"], "Route #05 - Morning Pickup")
        self.assertEqual(route["departure"], "07:30 AM")
        self.assertEqual(route["arrival"], "08:45 AM")
        self.assertEqual(route["driver_name"], "Rajesh S.")
        self.assertEqual(route["vehicle_plate"], "WB-04-E-1234")
        self.assertEqual(route["map_size"], (1600.0, 900.0))
        self.assertEqual(len(route["stops"]), 4)
        self.assertEqual(route["polyline"][0], (100.0, 500.0))

    def test_zone_polyline_spans_zone(self) -> None:
        config = default_route_config()
        sim = build_simulator(config)
        route = route_overview(sim, config)
        (zone,) = route["zones"]
        self.assertEqual(zone["name"], "Esplanade Crossing")
        start = sim.geometry.point_at(sim.geometry.arc_length_at(30.0))
        end = sim.geometry.point_at(sim.geometry.arc_length_at(40.0))
        self.assertEqual(zone["polyline"][0], (start.x, start.y))
        self.assertEqual(zone["polyline"][-1], (end.x, end.y))

    def test_overview_without_config(self) -> None:
        route = route_overview(build_simulator(default_route_config()))
        self.assertEqual(route["name"], "route")
        self.assertEqual(route["title"], "")
        self.assertEqual(route["driver_name"], "")


if __name__ == "__main__":
    unittest.main()

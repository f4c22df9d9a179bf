#!/usr/bin/env python3
"""
test_api.py
===========
Endpoint tests for the read-only route API.

Uses FastAPI's ``TestClient`` against a bridge that is never started,
so every response reflects a deterministic snapshot.
"""

import unittest

from fastapi.testclient import TestClient

from api import create_app
from sim.route_config import build_simulator
from sim.routes import default_route_config
from sim.sim_bridge import SimBridge


class RouteApiTests(unittest.TestCase):
    def setUp(self) -> None:
        config = default_route_config()
        self.bridge = SimBridge(build_simulator(config), config=config)
        self.client = TestClient(create_app(self.bridge))

    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok", "running": False, "paused": False})

    def test_snapshot(self) -> None:
        self.bridge._tick(1.0)
        data = self.client.get("/snapshot").json()
        self.assertAlmostEqual(data["progress"], 0.8)
        self.assertEqual(data["next_stop"]["name"], "Esplanade")
        self.assertEqual(data["street_label"], "Howrah Station Rd")
        self.assertEqual(data["speed_unit"], "km/h")
        self.assertIsNone(data["alert"])
        self.assertEqual(data["reached_stop_ids"], ["start"])

    def test_route(self) -> None:
        data = self.client.get("/route").json()
        self.assertEqual(data["title"], "Route #05 - Morning Pickup")
        self.assertEqual(data["driver_name"], "Rajesh S.")
        self.assertEqual(data["vehicle_plate"], "WB-04-E-1234")
        self.assertEqual(data["map_size"], [1600.0, 900.0])
        self.assertEqual(data["zones"][0]["name"], "Esplanade Crossing")
        self.assertEqual(data["zones"][0]["delay_minutes"], 10)
        self.assertEqual(len(data["stops"]), 4)

    def test_paused_reported(self) -> None:
        self.bridge.set_paused(True)
        self.assertTrue(self.client.get("/health").json()["paused"])


if __name__ == "__main__":
    unittest.main()

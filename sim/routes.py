#!/usr/bin/env python3
"""
sim/routes.py
=============
Built-in route presets.

:func:`default_route_config` describes the Kolkata morning pickup:
Howrah Station → Howrah Bridge → Esplanade → Science City → Salt Lake
Sector V, on a 1600×900 map.  The Esplanade crossing is a fixed
congestion hot-spot.
"""

from __future__ import annotations

from sim.route_config import (
    RouteConfig,
    SpeedPolicyModel,
    SpeedZoneModel,
    StopModel,
    StreetLabelModel,
)

KOLKATA_PATH = (
    "M 100 500 L 350 500 L 450 500 L 550 550 "
    "Q 750 650 950 500 Q 1150 350 1350 250"
)


def default_route_config() -> RouteConfig:
    """Route #05, the morning pickup across the Hooghly."""
    return RouteConfig(
        name="route-05",
        title="Route #05 - Morning Pickup",
        origin_label="Howrah",
        destination_label="School",
        departure="07:30 AM",
        arrival="08:45 AM",
        driver_name="Rajesh S.",
        vehicle_plate="WB-04-E-1234",
        path=KOLKATA_PATH,
        stops=[
            StopModel(id="start", name="Howrah Station", progress=0.0, x=100.0, y=500.0),
            StopModel(id="s1", name="Esplanade", progress=35.0, x=550.0, y=550.0),
            StopModel(id="s2", name="Science City", progress=65.0, x=950.0, y=500.0),
            StopModel(id="end", name="Salt Lake Sec-V", progress=100.0, x=1350.0, y=250.0),
        ],
        labels=[
            StreetLabelModel(threshold=0.0, label="Howrah Station Rd"),
            StreetLabelModel(threshold=15.0, label="Rabindra Setu (Howrah Bridge)"),
            StreetLabelModel(threshold=25.0, label="Jawaharlal Nehru Rd"),
            StreetLabelModel(threshold=45.0, label="J.B.S Haldane Ave (EM Bypass)"),
            StreetLabelModel(threshold=75.0, label="Salt Lake Sector V Main Rd"),
        ],
        policy=SpeedPolicyModel(
            zones=[
                SpeedZoneModel(
                    lower=30.0,
                    upper=40.0,
                    factor=1.5,
                    name="Esplanade Crossing",
                    alert="Heavy traffic reported at Esplanade Crossing.",
                    delay_minutes=10,
                ),
            ],
        ),
    )

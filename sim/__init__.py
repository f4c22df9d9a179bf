"""
sim: route simulation core
==========================

Modules
-------
geometry
    :class:`PathGeometry` arc-length sampling of the route path.
speed_policy
    :class:`SpeedZonePolicy` stop-proximity and congestion speed rules.
stops
    :class:`StopTable` next-stop and street-label lookup.
clock
    :class:`SimulationClock` wrap-around progress clock.
simulator
    :class:`RouteSimulator` per-tick composition and
    :class:`SimulationSnapshot`.
route_config
    Pydantic route-file schema and :func:`build_simulator`.
routes
    Built-in route presets.
sim_bridge
    :class:`SimBridge` background-thread driver.
errors
    Exception types.
"""

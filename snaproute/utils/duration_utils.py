from ..models.route_segments import BUS, JEEP, LRT1, LRT2, MRT, P2P_BUS, STOP_SUFFIX

# Average in-vehicle speeds (km/h)
MODE_SPEEDS = {
    JEEP: 20.0,
    BUS: 30.0,
    P2P_BUS: 36.0,
    LRT1: 60.0,
    LRT2: 60.0,
    MRT: 45.0,
}

TRANSIT_WAIT_SEC = 300  # average wait for the next vehicle


def estimate_duration(mode: str, distance_meters: float) -> float:
    """Estimate in-vehicle time plus wait, in seconds, for a transit mode.

    Stop-type tags ("MRT-Stop") use the parent mode's speed. Walking and
    driving durations come from the routing service, not from here.
    """
    if mode and mode.endswith(STOP_SUFFIX):
        mode = mode[:-len(STOP_SUFFIX)]
    speed = MODE_SPEEDS.get(mode)
    if speed is None:
        return TRANSIT_WAIT_SEC
    travel = 0.0
    if distance_meters and distance_meters > 0:
        travel = (distance_meters / 1000) / speed * 3600
    return travel + TRANSIT_WAIT_SEC

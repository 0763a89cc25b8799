import math

from ..models.route_segments import BUS, JEEP, LRT1, LRT2, MRT, P2P_BUS

# Jeepney: minimum fare covers the first 4 km
JEEP_MINIMUM_FARE = 13
JEEP_FREE_KM = 4
JEEP_PER_KM = 1.8

# Ordinary city bus
BUS_BASE_FARE = 15
BUS_BASE_KM = 5
BUS_PER_KM = 2.65

P2P_FLAT_FARE = 150

# LRT1 / LRT2 boarding charge plus per-km rate
LRT_BASE_FARE = 16.25
LRT_PER_KM = 1.47

# MRT distance tiers: (max km, fare)
MRT_FARE_TIERS = ((3, 13), (6, 16), (10, 20), (14, 24))
MRT_MAX_FARE = 28

MODE_ALIASES = {'Jeepney': JEEP}


def _round_half_up(value: float, step: float = 1.0) -> float:
    return math.floor(value / step + 0.5) * step


def jeep_fare(distance_km: float) -> float:
    if distance_km <= JEEP_FREE_KM:
        return JEEP_MINIMUM_FARE
    extra = math.ceil((distance_km - JEEP_FREE_KM) * JEEP_PER_KM)
    return _round_half_up(JEEP_MINIMUM_FARE + extra)


def bus_fare(distance_km: float) -> float:
    if distance_km <= BUS_BASE_KM:
        return _round_half_up(BUS_BASE_FARE, 0.25)
    extra = math.ceil((distance_km - BUS_BASE_KM) * BUS_PER_KM)
    return _round_half_up(BUS_BASE_FARE + extra, 0.25)


def lrt_fare(distance_km: float) -> float:
    return _round_half_up(LRT_BASE_FARE + max(distance_km, 0.0) * LRT_PER_KM)


def mrt_fare(distance_km: float) -> float:
    for max_km, fare in MRT_FARE_TIERS:
        if distance_km <= max_km:
            return fare
    return MRT_MAX_FARE


FARE_RULES = {
    JEEP: jeep_fare,
    BUS: bus_fare,
    P2P_BUS: lambda distance_km: P2P_FLAT_FARE,
    LRT1: lrt_fare,
    LRT2: lrt_fare,
    MRT: mrt_fare,
}


def calculate_fare(mode: str, distance_meters: float) -> float:
    """
    Calculate fare based on mode and distance
    Args:
        mode: Transport mode tag (MRT, LRT1, LRT2, Bus, P2P-Bus, Jeep, Walk, Driving)
        distance_meters: Distance travelled on the vehicle in meters
    Returns:
        Fare amount in pesos. Walking, driving, unknown modes and
        non-positive distances are free.
    """
    if distance_meters is None or distance_meters <= 0:
        return 0
    rule = FARE_RULES.get(MODE_ALIASES.get(mode, mode))
    if rule is None:
        return 0
    return rule(distance_meters / 1000)

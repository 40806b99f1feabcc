from dataclasses import dataclass
from math import ceil
from typing import List

from booking_schemas import JetCategory

# Ground time added for each refuelling stop.
REFUEL_STOP_HOURS = 0.75


JET_CATEGORIES: List[JetCategory] = [
    JetCategory(
        name="Citation CJ3",
        category="Light Jet",
        capacity=7,
        speed=720,
        range=3000,
        price_per_hour=4500,
        image_url="https://images.example.com/jets/citation-cj3.jpg",
    ),
    JetCategory(
        name="Challenger 350",
        category="Super Midsize Jet",
        capacity=9,
        speed=850,
        range=5900,
        price_per_hour=7500,
        image_url="https://images.example.com/jets/challenger-350.jpg",
    ),
    JetCategory(
        name="Falcon 7X",
        category="Heavy Jet",
        capacity=14,
        speed=900,
        range=11000,
        price_per_hour=11000,
        image_url="https://images.example.com/jets/falcon-7x.jpg",
    ),
    JetCategory(
        name="Global 7500",
        category="Ultra Long Range",
        capacity=17,
        speed=950,
        range=14200,
        price_per_hour=15000,
        image_url="https://images.example.com/jets/global-7500.jpg",
    ),
]


def get_jet(name: str) -> JetCategory:
    for jet in JET_CATEGORIES:
        if jet.name == name:
            return jet
    raise LookupError(f"Unknown jet category: {name}")


def required_stops(distance_km: float, range_km: float) -> int:
    """Refuelling stops needed to cover ``distance_km`` with the given range."""
    if distance_km <= 0:
        return 0
    return max(0, ceil(distance_km / range_km) - 1)


def flight_time_hours(distance_km: float, speed_kmh: float, stop_count: int) -> float:
    return distance_km / speed_kmh + stop_count * REFUEL_STOP_HOURS


def base_price(distance_km: float, speed_kmh: float, price_per_hour: float, stop_count: int) -> float:
    """Hourly charter price for the whole route, in whole base-currency units."""
    hours = flight_time_hours(distance_km, speed_kmh, stop_count)
    return float(round(hours * price_per_hour))


@dataclass(frozen=True)
class FlightPlan:
    distance_km: int
    stops: int
    flight_time_hours: float
    base_price: float


def plan_itinerary(distance_km: int, jet: JetCategory) -> FlightPlan:
    stops = required_stops(distance_km, jet.range)
    return FlightPlan(
        distance_km=distance_km,
        stops=stops,
        flight_time_hours=flight_time_hours(distance_km, jet.speed, stops),
        base_price=base_price(distance_km, jet.speed, jet.price_per_hour, stops),
    )

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Tuple, TypeVar

from booking_schemas import Location
from i18n import translate
from pricing import display_range, display_total

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_AVAILABLE = "Not available"
INVALID_DATE = "Invalid date"


def format_location(location: Location) -> Tuple[str, str]:
    """Split "City (CODE)" into ("City", "CODE")."""
    if not location or not location.address:
        return "", ""
    city, _, rest = location.address.partition("(")
    return city.strip(), rest.replace(")", "").strip()


def format_datetime(date: str, time: str) -> str:
    if not date or not time:
        return NOT_AVAILABLE
    try:
        parsed = datetime.fromisoformat(f"{date}T{time}")
    except ValueError:
        logger.warning(f"Could not parse date/time {date!r} {time!r}")
        return INVALID_DATE

    hour = parsed.hour % 12 or 12
    return f"{parsed:%b} {parsed.day}, {parsed.year} {hour}:{parsed:%M} {parsed:%p}"


def not_found_view(locale: str = "en") -> Dict[str, Any]:
    return {
        "view": "not_found",
        "title": translate("notFound.title", locale=locale),
        "message": translate("notFound.message", locale=locale),
        "links": [{"href": "/", "label": translate("notFound.home", locale=locale)}],
    }


def render_with_fallback(render: Callable[[], T], fallback: Callable[[], T]) -> T:
    """
    Build a view, or the fallback view if building it raises.
    The failure is logged; the caller always gets something to display.
    """
    try:
        return render()
    except Exception:
        logger.exception("Uncaught error while rendering view")
        return fallback()


def booking_summary_view(wizard, locale: str = "en") -> Dict[str, Any]:
    """Display data for the current step of a BookingWizard."""
    itinerary = wizard.itinerary
    plan = wizard.flight_plan
    quote = wizard.price_quote
    origin_city, origin_code = format_location(itinerary.origin)
    destination_city, destination_code = format_location(itinerary.destination)

    step_keys = ["flightDetails", "passengers", "contact", "multiLeg"][: wizard.total_steps]
    view: Dict[str, Any] = {
        "title": translate("title", "booking", locale),
        "step": wizard.current_step,
        "total_steps": wizard.total_steps,
        "step_title": translate(f"steps.{step_keys[wizard.current_step - 1]}", "booking", locale),
        "route": translate("route", "flights", locale, origin=origin_city, destination=destination_city),
        "origin_code": origin_code,
        "destination_code": destination_code,
        "departure": format_datetime(itinerary.selected_date, itinerary.selected_time),
        "distance_km": plan.distance_km,
        "flight_time_hours": round(plan.flight_time_hours, 1),
        "refuel_stops": plan.stops,
        "price_range": display_range(quote),
        "total": display_total(quote),
        "currency": quote.currency.code,
        "services": [translate(f"services.{name}", "booking", locale) for name in wizard.services.selected()],
        "missing_fields": wizard.missing_fields(),
    }

    if itinerary.is_return and itinerary.return_date and itinerary.return_time:
        view["return"] = format_datetime(itinerary.return_date, itinerary.return_time)

    if wizard.current_step == 4:
        view["legs"] = [
            {"address": stop.address, "departure": format_datetime(stop.date, stop.time)}
            for stop in itinerary.stops
        ]

    if wizard.current_step >= 3:
        view["contact"] = wizard.contact.model_dump()

    return view

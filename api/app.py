import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from booking_schemas import CheckoutRequest, Itinerary, PartnerSubscriptionRequest, QuoteRequest, SelectedServices
from booking_views import not_found_view, render_with_fallback
from flight_planner import get_jet, plan_itinerary
from geo import MissingCoordinatesError, distance
from i18n import NAMESPACES, SUPPORTED_LOCALES, init_i18n, translate
from payments.checkout import CheckoutError, StripeCheckoutGateway
from payments.quotes import HttpQuoteDesk
from pricing import display_range, display_total, get_currency, total

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Charter Checkout")

# load translation bundles once, at process start
init_i18n()
config.validate()


def get_gateway():
    return StripeCheckoutGateway()


def get_quote_desk():
    return HttpQuoteDesk()


class PriceQuoteRequest(BaseModel):
    itinerary: Itinerary
    jet: str
    services: SelectedServices = Field(default_factory=SelectedServices)
    currency: str = "EUR"
    strict: bool = False


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        locale = request.query_params.get("lang", "en")
        return JSONResponse(status_code=404, content=not_found_view(locale))
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.post("/api/create-partner-subscription")
async def create_partner_subscription(body: PartnerSubscriptionRequest, gateway=Depends(get_gateway)):
    if not body.is_complete():
        return JSONResponse(status_code=400, content={"error": "Missing required parameters"})

    try:
        session_id = gateway.create_partner_subscription(body)
    except Exception as e:
        # provider details stay in the log
        logger.error(f"Error creating partner subscription: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to create subscription"})
    return {"sessionId": session_id}


@app.post("/api/create-checkout-session")
async def create_checkout_session(body: CheckoutRequest, gateway=Depends(get_gateway)):
    try:
        session_id = gateway.create_session(body)
    except Exception as e:
        logger.error(f"Error creating checkout session for {body.identifier}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to create checkout session"})
    return {"sessionId": session_id}


@app.post("/api/payment-request")
async def payment_request(body: QuoteRequest, quote_desk=Depends(get_quote_desk)):
    try:
        accepted = quote_desk.submit(body)
    except CheckoutError as e:
        return JSONResponse(status_code=502, content={"error": str(e)})
    return {"success": accepted}


@app.post("/api/price-quote")
async def price_quote(body: PriceQuoteRequest):
    try:
        jet = get_jet(body.jet)
        currency = get_currency(body.currency)
    except LookupError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    it = body.itinerary
    try:
        km = distance(it.origin, it.stops, it.destination, it.is_return, strict=body.strict)
    except MissingCoordinatesError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    plan = plan_itinerary(km, jet)
    quote = total(plan.base_price, body.services, currency)
    return {
        "distanceKm": plan.distance_km,
        "refuelStops": plan.stops,
        "flightTimeHours": round(plan.flight_time_hours, 1),
        "basePrice": plan.base_price,
        "total": quote.total,
        "min": quote.min,
        "max": quote.max,
        "currency": currency.code,
        "displayTotal": display_total(quote),
        "displayRange": display_range(quote),
        "breakdown": [line.model_dump() for line in quote.breakdown],
    }


@app.get("/api/translations/{locale}/{namespace}/{key}")
async def get_translation(locale: str, namespace: str, key: str):
    if locale not in SUPPORTED_LOCALES:
        locale = "en"
    if namespace not in NAMESPACES:
        raise StarletteHTTPException(status_code=404)
    value = render_with_fallback(
        lambda: translate(key, namespace, locale),
        lambda: key,
    )
    return {"locale": locale, "namespace": namespace, "key": key, "value": value}

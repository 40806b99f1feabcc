import logging

import stripe

import config
from booking_schemas import CheckoutRequest, CheckoutResult, PartnerSubscriptionRequest, QuoteRequest

logger = logging.getLogger(__name__)

stripe.api_key = config.STRIPE_SECRET_KEY

SUCCESS_PATH = "/booking-success"
CANCEL_PATH = "/booking-cancelled"
PARTNER_SUCCESS_PATH = "/partner-success"
PARTNER_CANCEL_PATH = "/partners"

# Tier that pays once instead of subscribing yearly.
LIFETIME_TIER_ID = "partner-lifetime"

GENERIC_PAYMENT_ERROR = "Payment failed. Please try again."


class CheckoutError(Exception):
    """A payment session or quote request could not be created."""


def _minor_units(amount: float) -> int:
    # Stripe expects unit_amount in cents
    return int(round(amount * 100))


class StripeCheckoutGateway:
    """
    Hosted Stripe Checkout sessions.
    Redirect targets are built from the public base URL; Stripe fills in {CHECKOUT_SESSION_ID}.
    """

    def __init__(self, public_url: str = config.PUBLIC_URL):
        self.public_url = public_url.rstrip("/")

    def create_session(self, request: CheckoutRequest) -> str:
        """Create a one-time payment session for a booking. Returns the session id."""
        metadata = {
            "offer_id": request.identifier,
            "offer_type": request.kind,
            "customer_phone": request.contact.phone,
            "services": ",".join(request.services.selected()),
        }
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=[{
                    "price_data": {
                        "currency": request.currency.lower(),
                        "product_data": {"name": request.title[:100]},
                        "unit_amount": _minor_units(request.price),
                    },
                    "quantity": 1,
                }],
                mode="payment",
                customer_email=request.contact.email or None,
                success_url=self.public_url + SUCCESS_PATH + "?session_id={CHECKOUT_SESSION_ID}",
                cancel_url=self.public_url + CANCEL_PATH,
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe session for {request.identifier} failed: {e}")
            raise CheckoutError("Could not start payment. Please try again.") from e

        logger.info(f"Created checkout session {session.id} for {request.identifier}")
        return session.id

    def create_partner_subscription(self, request: PartnerSubscriptionRequest) -> str:
        """
        Create a customer and a checkout session for a partnership tier.
        The lifetime tier is a one-time payment; every other tier renews yearly.
        """
        metadata = {"tier_id": request.tier_id, "tier_type": request.tier_type or "", **request.metadata}
        try:
            customer = stripe.Customer.create(
                email=request.email,
                name=request.name,
                metadata={"tier_id": request.tier_id, "tier_type": request.tier_type or ""},
            )

            price_data = {
                "currency": request.currency.lower(),
                "unit_amount": _minor_units(request.price),
            }
            if request.tier_id == LIFETIME_TIER_ID:
                mode = "payment"
                price_data["product_data"] = {
                    "name": "Lifetime Partnership",
                    "description": "One-time payment for lifetime partnership",
                    "metadata": metadata,
                }
            else:
                mode = "subscription"
                is_partner = request.tier_type == "partner"
                price_data["product_data"] = {
                    "name": f"{request.name} Partnership" if is_partner else f"Yacht Listing ({request.name})",
                    "description": "Annual partnership subscription" if is_partner else "Annual yacht listing subscription",
                    "metadata": metadata,
                }
                price_data["recurring"] = {"interval": "year"}

            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=[{"price_data": price_data, "quantity": 1}],
                mode=mode,
                customer=customer.id,
                success_url=self.public_url + PARTNER_SUCCESS_PATH + "?session_id={CHECKOUT_SESSION_ID}",
                cancel_url=self.public_url + PARTNER_CANCEL_PATH,
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error(f"Partner subscription for tier {request.tier_id} failed: {e}")
            raise CheckoutError("Failed to create subscription") from e

        logger.info(f"Created {mode} session {session.id} for tier {request.tier_id}")
        return session.id


class CheckoutDelegate:
    """
    Routes a finished booking either to hosted payment or to the quote desk.
    gateway must implement .create_session(request) -> session id
    quote_desk must implement .submit(quote_request) -> bool
    """

    def __init__(self, gateway, quote_desk):
        self.gateway = gateway
        self.quote_desk = quote_desk

    @staticmethod
    def uses_hosted_checkout(request: CheckoutRequest) -> bool:
        if request.kind == "fixed_offer":
            return not request.identifier.startswith("custom-")
        return request.kind == "empty_leg"

    def submit(self, request: CheckoutRequest) -> CheckoutResult:
        try:
            if self.uses_hosted_checkout(request):
                session_id = self.gateway.create_session(request)
                return CheckoutResult(status="success", session_id=session_id)

            quote = QuoteRequest(
                offer_id=request.identifier,
                offer_type=request.kind,
                contact_email=request.contact.email,
                form_data={
                    **request.contact.model_dump(by_alias=True),
                    "additionalServices": request.services.model_dump(by_alias=True),
                    "title": request.title,
                    "price": request.price,
                    "currency": request.currency,
                },
            )
            if not self.quote_desk.submit(quote):
                return CheckoutResult(status="error", error=GENERIC_PAYMENT_ERROR)
            return CheckoutResult(status="success")
        except CheckoutError as e:
            return CheckoutResult(status="error", error=str(e))
        except Exception:
            logger.exception(f"Checkout for {request.identifier} failed")
            return CheckoutResult(status="error", error=GENERIC_PAYMENT_ERROR)

import uuid

from booking_schemas import CheckoutRequest, PartnerSubscriptionRequest, QuoteRequest
from payments.checkout import CheckoutError, LIFETIME_TIER_ID


class MockPaymentGateway:
    """
    Mock hosted-checkout gateway: deterministic session ids for demo / testing.
    Records every request it receives. Set fail=True to simulate a provider outage.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sessions = []

    def create_session(self, request: CheckoutRequest) -> str:
        if self.fail:
            raise CheckoutError("Could not start payment. Please try again.")
        session_id = f"cs_test_{request.identifier}"
        self.sessions.append({"id": session_id, "mode": "payment", "request": request})
        return session_id

    def create_partner_subscription(self, request: PartnerSubscriptionRequest) -> str:
        if self.fail:
            raise CheckoutError("Failed to create subscription")
        mode = "payment" if request.tier_id == LIFETIME_TIER_ID else "subscription"
        session_id = f"cs_test_{uuid.uuid4().hex[:12]}"
        self.sessions.append({"id": session_id, "mode": mode, "request": request})
        return session_id


class MockQuoteDesk:
    """Mock quote desk: accepts every request unless told to reject or fail."""

    def __init__(self, accept: bool = True, fail: bool = False):
        self.accept = accept
        self.fail = fail
        self.requests = []

    def submit(self, quote: QuoteRequest) -> bool:
        if self.fail:
            raise CheckoutError("Failed to send request. Please try again.")
        self.requests.append(quote)
        return self.accept

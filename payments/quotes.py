"""Quote desk client: hands non-payment booking requests to staff for manual pricing."""

import logging

import requests

import config
from booking_schemas import QuoteRequest
from payments.checkout import CheckoutError

logger = logging.getLogger(__name__)


class HttpQuoteDesk:
    """POSTs quote requests as JSON to the staff quote endpoint."""

    def __init__(self, url: str = config.QUOTE_REQUEST_URL, timeout: float = config.QUOTE_REQUEST_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def submit(self, quote: QuoteRequest) -> bool:
        if not self.url:
            raise CheckoutError("Quote requests are not configured")

        try:
            resp = requests.post(self.url, json=quote.model_dump(by_alias=True), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Quote request for {quote.offer_id} failed: {e}")
            raise CheckoutError("Failed to send request. Please try again.") from e

        logger.info(f"Quote request sent for {quote.offer_id} ({quote.offer_type})")
        try:
            data = resp.json()
        except ValueError:
            # an empty or non-JSON 2xx body still counts as accepted
            data = {}
        if not isinstance(data, dict):
            data = {}
        if data.get("error"):
            logger.error(f"Quote request for {quote.offer_id} rejected: {data['error']}")
            raise CheckoutError(str(data["error"]))
        return bool(data.get("success", True))

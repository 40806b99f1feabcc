"""
Run this script to see a full mocked booking flow:
 - price a Paris -> London charter on a light jet
 - walk the booking wizard (services, currency, contact info)
 - request a quote, which opens the 2-step checkout
 - submit through mock providers and print the result
"""

import logging

from booking_schemas import BookingDetails, Itinerary, Location
from booking_tools import MockPaymentGateway, MockQuoteDesk
from booking_views import booking_summary_view
from booking_wizard import BookingWizard
from flight_planner import get_jet
from i18n import init_i18n
from payments.checkout import CheckoutDelegate


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    init_i18n()

    itinerary = Itinerary(
        origin=Location(address="Paris (LBG)", lat=48.8566, lng=2.3522),
        destination=Location(address="London (LTN)", lat=51.5074, lng=-0.1278),
        selected_date="2026-06-20",
        selected_time="09:30",
    )

    wizard = BookingWizard(
        itinerary,
        get_jet("Citation CJ3"),
        BookingDetails(passengers=4, luggage=6, pets=1),
        on_cancel=lambda: print("Booking cancelled"),
    )

    print("=== Step 1: flight details ===")
    print(booking_summary_view(wizard))
    wizard.next()

    print("\n=== Step 2: services ===")
    wizard.toggle_service("catering")
    wizard.select_currency("GBP")
    print(booking_summary_view(wizard))
    wizard.next()

    print("\n=== Step 3: contact ===")
    print("advanced with empty contact:", wizard.next())
    wizard.update_contact(name="Alex Martin", email="alex@example.com", phone="+44 20 7946 0000")
    print(booking_summary_view(wizard, locale="de"))

    delegate = CheckoutDelegate(MockPaymentGateway(), MockQuoteDesk())
    checkout = wizard.request_quote(delegate)
    print(f"\n=== Checkout: {checkout.title} ({checkout.price} {checkout.currency}) ===")
    checkout.next()   # contact info is prefilled
    checkout.next()   # submit

    print("Checkout status:", checkout.status, checkout.error or "")
    for quote in delegate.quote_desk.requests:
        print(f"- quote request {quote.offer_id}: {quote.form_data}")


if __name__ == "__main__":
    main()

import pytest

from booking_schemas import BookingDetails, CheckoutResult, Itinerary
from booking_tools import MockPaymentGateway, MockQuoteDesk
from booking_wizard import MISSING_FIELDS_MESSAGE, BookingWizard, CheckoutWizard
from flight_planner import get_jet
from payments.checkout import CheckoutDelegate
from pricing import display_total


def make_checkout(delegate, cancel_calls, identifier="offer-42", kind="fixed_offer", **kwargs):
    return CheckoutWizard(
        identifier=identifier,
        kind=kind,
        title="Nice to Ibiza",
        price=18500,
        currency="EUR",
        delegate=delegate,
        on_cancel=lambda: cancel_calls.append(True),
        **kwargs,
    )


def fill_contact(wizard):
    wizard.update_contact(name="Alex Martin", email="alex@example.com", phone="+44 20 7946 0000")


class TestCheckoutWizard:
    def test_empty_contact_blocks_first_step(self, delegate, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        assert checkout.missing_fields() == ["name", "email", "phone"]
        assert checkout.next() is False
        assert checkout.current_step == 1

    def test_filled_contact_advances(self, delegate, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        fill_contact(checkout)
        assert checkout.next() is True
        assert checkout.current_step == 2

    def test_whitespace_does_not_count_as_filled(self, delegate, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        checkout.update_contact(name="  ", email="a@b.c", phone="1")
        assert checkout.missing_fields() == ["name"]

    def test_back_at_first_step_cancels_once(self, delegate, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        assert checkout.back() is False
        assert cancel_calls == [True]
        assert checkout.current_step == 1

    def test_back_from_confirmation(self, delegate, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        fill_contact(checkout)
        checkout.next()
        assert checkout.back() is True
        assert checkout.current_step == 1
        assert cancel_calls == []

    def test_fixed_offer_submits_to_hosted_checkout(self, delegate, gateway, cancel_calls):
        succeeded = []
        checkout = make_checkout(delegate, cancel_calls, on_success=lambda: succeeded.append(True))
        fill_contact(checkout)
        checkout.next()
        checkout.next()
        assert checkout.status == "success"
        assert checkout.session_id == "cs_test_offer-42"
        assert checkout.current_step == 2
        assert succeeded == [True]
        assert gateway.sessions[0]["request"].contact.email == "alex@example.com"

    def test_custom_offer_goes_to_quote_desk(self, delegate, quote_desk, gateway, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls, identifier="custom-1700000000000")
        fill_contact(checkout)
        checkout.next()
        assert checkout.submit() == "success"
        assert gateway.sessions == []
        assert quote_desk.requests[0].contact_email == "alex@example.com"

    def test_provider_failure_is_reported_and_form_stays_editable(self, quote_desk, cancel_calls):
        delegate = CheckoutDelegate(MockPaymentGateway(fail=True), quote_desk)
        checkout = make_checkout(delegate, cancel_calls)
        fill_contact(checkout)
        checkout.next()
        assert checkout.submit() == "error"
        assert checkout.error == "Could not start payment. Please try again."
        assert checkout.loading is False

        # retry after the provider recovers
        delegate.gateway.fail = False
        assert checkout.submit() == "success"
        assert checkout.error is None

    def test_success_is_final(self, delegate, quote_desk, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls, identifier="custom-1")
        fill_contact(checkout)
        checkout.next()
        checkout.next()
        checkout.next()
        assert checkout.submit() == "success"
        assert len(quote_desk.requests) == 1
        assert checkout.current_step == 2

    def test_submit_rechecks_required_fields(self, delegate, gateway, cancel_calls):
        checkout = make_checkout(delegate, cancel_calls)
        assert checkout.submit() == "editing"
        assert checkout.error == MISSING_FIELDS_MESSAGE
        assert gateway.sessions == []

    def test_loading_is_set_during_submission(self, cancel_calls):
        seen = []

        class RecordingDelegate:
            def submit(self, request):
                seen.append(checkout.loading)
                return CheckoutResult(status="success")

        checkout = make_checkout(RecordingDelegate(), cancel_calls)
        fill_contact(checkout)
        checkout.submit()
        assert seen == [True]
        assert checkout.loading is False


class TestBookingWizard:
    def test_three_steps_without_stops(self, wizard):
        assert wizard.total_steps == 3

    def test_four_steps_with_stops(self, itinerary, geneva, cancel_calls):
        with_stop = itinerary.model_copy(update={"stops": [geneva]})
        wizard = BookingWizard(with_stop, get_jet("Falcon 7X"), BookingDetails(), on_cancel=lambda: None)
        assert wizard.total_steps == 4

    def test_contact_is_required_only_on_step_three(self, wizard):
        assert wizard.next() is True
        assert wizard.next() is True
        assert wizard.current_step == 3
        assert wizard.next() is False
        fill_contact(wizard)
        assert wizard.next() is False    # already at the last step
        assert wizard.current_step == 3

    def test_multi_leg_step_reached_after_contact(self, itinerary, geneva):
        wizard = BookingWizard(
            itinerary.model_copy(update={"stops": [geneva]}), get_jet("Falcon 7X"), BookingDetails(), lambda: None
        )
        wizard.next()
        wizard.next()
        fill_contact(wizard)
        assert wizard.next() is True
        assert wizard.current_step == 4 == wizard.total_steps

    def test_removing_stops_keeps_step_in_range(self, itinerary, geneva):
        wizard = BookingWizard(
            itinerary.model_copy(update={"stops": [geneva]}), get_jet("Falcon 7X"), BookingDetails(), lambda: None
        )
        wizard.next()
        wizard.next()
        fill_contact(wizard)
        wizard.next()
        assert wizard.current_step == 4

        wizard.itinerary = itinerary
        assert wizard.total_steps == 3
        assert wizard.current_step == 3

    def test_back_at_first_step_cancels(self, wizard, cancel_calls):
        wizard.back()
        assert cancel_calls == [True]
        assert wizard.current_step == 1

    def test_price_follows_services_and_currency(self, wizard):
        base = wizard.flight_plan.base_price
        assert wizard.price_quote.total == base
        wizard.toggle_service("catering")
        assert wizard.price_quote.total == base + 350
        wizard.toggle_service("catering")
        assert wizard.price_quote.total == base
        wizard.select_currency("GBP")
        assert display_total(wizard.price_quote).startswith("£")

    def test_unknown_service_is_rejected(self, wizard):
        with pytest.raises(ValueError):
            wizard.toggle_service("helicopter")

    def test_distance_and_plan_are_derived(self, wizard):
        assert abs(wizard.distance_km - 344) <= 2
        assert wizard.flight_plan.stops == 0
        round_trip = wizard.itinerary.model_copy(update={"is_return": True})
        wizard.itinerary = round_trip
        assert abs(wizard.distance_km - 688) <= 4

    def test_request_quote_only_from_final_step(self, wizard, delegate):
        with pytest.raises(ValueError):
            wizard.request_quote(delegate)

    def test_request_quote_builds_custom_checkout(self, wizard, delegate, quote_desk):
        wizard.toggle_service("concierge")
        wizard.select_currency("USD")
        wizard.next()
        wizard.next()
        fill_contact(wizard)

        checkout = wizard.request_quote(delegate)
        assert checkout.identifier.startswith("custom-")
        assert checkout.kind == "fixed_offer"
        assert checkout.title == "Paris to London"
        assert checkout.currency == "USD"
        assert checkout.price == pytest.approx(wizard.price_quote.total * 1.08)
        assert checkout.services.concierge is True

        checkout.next()
        checkout.next()
        assert checkout.status == "success"
        assert quote_desk.requests[0].form_data["additionalServices"]["concierge"] is True

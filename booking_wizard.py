import logging
import time
from typing import Callable, List, Literal, Optional

from booking_schemas import (
    BookingDetails,
    CheckoutKind,
    CheckoutRequest,
    ContactInfo,
    Currency,
    Itinerary,
    JetCategory,
    PriceQuote,
    SelectedServices,
)
from booking_views import format_location
from flight_planner import FlightPlan, plan_itinerary
from geo import distance
from pricing import CURRENCIES, convert, get_currency, total

logger = logging.getLogger(__name__)

WizardStatus = Literal["editing", "success", "error"]

CONTACT_FIELDS = ("name", "email", "phone")
MISSING_FIELDS_MESSAGE = "Please fill in all required fields"


class Wizard:
    """
    Ordered steps 1..total_steps with presence-only validation.
    Subclasses define total_steps and required_fields(step).
    back() at step 1 leaves the wizard through on_cancel.
    """

    def __init__(self, on_cancel: Callable[[], None], contact: Optional[ContactInfo] = None):
        self.on_cancel = on_cancel
        self.contact = contact or ContactInfo()
        self.current_step = 1
        self.status: WizardStatus = "editing"
        self.error: Optional[str] = None
        self.loading = False

    @property
    def total_steps(self) -> int:
        raise NotImplementedError

    def required_fields(self, step: int) -> tuple:
        return ()

    def missing_fields(self) -> List[str]:
        return [
            name for name in self.required_fields(self.current_step)
            if not str(getattr(self.contact, name, "")).strip()
        ]

    def can_advance(self) -> bool:
        return not self.missing_fields()

    @property
    def is_final_step(self) -> bool:
        return self.current_step == self.total_steps

    def next(self) -> bool:
        """Advance one step. Returns False when blocked by validation or already at the end."""
        if not self.can_advance() or self.current_step >= self.total_steps:
            return False
        self.current_step += 1
        return True

    def back(self) -> bool:
        """Go back one step, or cancel the wizard from step 1. Returns whether the step changed."""
        if self.current_step > 1:
            self.current_step -= 1
            return True
        self.on_cancel()
        return False

    def update_contact(self, **fields) -> None:
        self.contact = self.contact.model_copy(update=fields)


class CheckoutWizard(Wizard):
    """Two steps: contact information, then confirmation and submission."""

    def __init__(
        self,
        identifier: str,
        kind: CheckoutKind,
        title: str,
        price: float,
        currency: str,
        delegate,
        on_cancel: Callable[[], None],
        on_success: Optional[Callable[[], None]] = None,
        contact: Optional[ContactInfo] = None,
        services: Optional[SelectedServices] = None,
    ):
        super().__init__(on_cancel, contact)
        self.identifier = identifier
        self.kind = kind
        self.title = title
        self.price = price
        self.currency = currency
        self.delegate = delegate
        self.on_success = on_success
        self.services = services or SelectedServices()
        self.session_id: Optional[str] = None

    @property
    def total_steps(self) -> int:
        return 2

    def required_fields(self, step: int) -> tuple:
        return CONTACT_FIELDS if step == 1 else ()

    def next(self) -> bool:
        if self.status == "success":
            return False
        if self.is_final_step:
            self.submit()
            return False
        return super().next()

    def build_request(self) -> CheckoutRequest:
        return CheckoutRequest(
            identifier=self.identifier,
            kind=self.kind,
            price=self.price,
            currency=self.currency,
            title=self.title,
            contact=self.contact,
            services=self.services,
        )

    def submit(self) -> WizardStatus:
        """
        Hand the finished booking to the checkout delegate.
        Once it has succeeded the wizard is done and further calls do nothing.
        On error the message is kept and the form stays editable; nothing is retried.
        """
        if self.status == "success":
            return self.status
        self.error = None
        if any(not str(getattr(self.contact, f)).strip() for f in CONTACT_FIELDS):
            self.error = MISSING_FIELDS_MESSAGE
            return self.status

        self.loading = True
        try:
            result = self.delegate.submit(self.build_request())
        finally:
            self.loading = False

        if result.status == "success":
            self.status = "success"
            self.session_id = result.session_id
            if self.on_success:
                self.on_success()
        else:
            self.status = "error"
            self.error = result.error
        return self.status


class BookingWizard(Wizard):
    """
    Booking summary flow:
      1 itinerary review, 2 passengers & services, 3 contact info,
      4 multi-leg summary (only when the itinerary has stops).
    Distance, flight plan and price are derived from current state on every access.
    """

    CONTACT_STEP = 3

    def __init__(
        self,
        itinerary: Itinerary,
        jet: JetCategory,
        booking_details: BookingDetails,
        on_cancel: Callable[[], None],
        currency: Optional[Currency] = None,
    ):
        super().__init__(on_cancel)
        self._itinerary = itinerary
        self.jet = jet
        self.booking_details = booking_details
        self.currency = currency or CURRENCIES[0]
        self.services = SelectedServices()

    @property
    def total_steps(self) -> int:
        return 4 if self.itinerary.stops else 3

    @property
    def itinerary(self) -> Itinerary:
        return self._itinerary

    @itinerary.setter
    def itinerary(self, itinerary: Itinerary) -> None:
        # dropping the stops removes the multi-leg step
        self._itinerary = itinerary
        self.current_step = min(self.current_step, self.total_steps)

    def required_fields(self, step: int) -> tuple:
        return CONTACT_FIELDS if step == self.CONTACT_STEP else ()

    def toggle_service(self, service: str) -> None:
        self.services = self.services.toggled(service)

    def select_currency(self, code: str) -> None:
        self.currency = get_currency(code)

    @property
    def distance_km(self) -> int:
        it = self.itinerary
        return distance(it.origin, it.stops, it.destination, it.is_return)

    @property
    def flight_plan(self) -> FlightPlan:
        return plan_itinerary(self.distance_km, self.jet)

    @property
    def price_quote(self) -> PriceQuote:
        return total(self.flight_plan.base_price, self.services, self.currency)

    def request_quote(self, delegate, on_success: Optional[Callable[[], None]] = None) -> CheckoutWizard:
        """Open checkout for this itinerary as a custom fixed offer. Only allowed on the final step."""
        if not self.is_final_step:
            raise ValueError("Quote can only be requested from the final step")

        origin_city, _ = format_location(self.itinerary.origin)
        destination_city, _ = format_location(self.itinerary.destination)
        identifier = f"custom-{int(time.time() * 1000)}"
        logger.info(f"Opening checkout for {identifier} ({origin_city} to {destination_city})")

        return CheckoutWizard(
            identifier=identifier,
            kind="fixed_offer",
            title=f"{origin_city} to {destination_city}",
            price=round(convert(self.price_quote.total, self.currency), 2),
            currency=self.currency.code,
            delegate=delegate,
            on_cancel=self.on_cancel,
            on_success=on_success,
            contact=self.contact,
            services=self.services,
        )


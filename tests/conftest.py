import pytest

from booking_schemas import BookingDetails, Itinerary, Location, Stop
from booking_tools import MockPaymentGateway, MockQuoteDesk
from booking_wizard import BookingWizard
from flight_planner import get_jet
from i18n import init_i18n
from payments.checkout import CheckoutDelegate


@pytest.fixture(autouse=True, scope="session")
def translations():
    return init_i18n()


@pytest.fixture
def paris():
    return Location(address="Paris (LBG)", lat=48.8566, lng=2.3522)


@pytest.fixture
def london():
    return Location(address="London (LTN)", lat=51.5074, lng=-0.1278)


@pytest.fixture
def geneva():
    return Stop(address="Geneva (GVA)", lat=46.2044, lng=6.1432, date="2026-06-21", time="11:00")


@pytest.fixture
def itinerary(paris, london):
    return Itinerary(origin=paris, destination=london, selected_date="2026-06-20", selected_time="09:30")


@pytest.fixture
def cancel_calls():
    return []


@pytest.fixture
def wizard(itinerary, cancel_calls):
    return BookingWizard(
        itinerary,
        get_jet("Citation CJ3"),
        BookingDetails(passengers=2),
        on_cancel=lambda: cancel_calls.append(True),
    )


@pytest.fixture
def gateway():
    return MockPaymentGateway()


@pytest.fixture
def quote_desk():
    return MockQuoteDesk()


@pytest.fixture
def delegate(gateway, quote_desk):
    return CheckoutDelegate(gateway, quote_desk)

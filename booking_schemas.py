from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str                 # "City (CODE)"
    lat: Optional[float] = None
    lng: Optional[float] = None


class Stop(Location):
    date: str = ""               # YYYY-MM-DD
    time: str = ""               # HH:MM


class JetCategory(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    category: str
    capacity: int
    speed: float                 # km/h
    range: float                 # km
    price_per_hour: float = Field(alias="pricePerHour")   # base currency
    image_url: str = Field(default="", alias="imageUrl")


class BookingDetails(BaseModel):
    passengers: int = 1
    luggage: int = 0
    pets: int = 0


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    rate: float                  # multiplier against EUR


class SelectedServices(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    airport_transfer: bool = Field(default=False, alias="airportTransfer")
    catering: bool = False
    concierge: bool = False
    hotel_booking: bool = Field(default=False, alias="hotelBooking")

    def selected(self) -> List[str]:
        return [name for name, flag in self if flag]

    def toggled(self, service: str) -> "SelectedServices":
        if service not in type(self).model_fields:
            raise ValueError(f"Unknown service: {service}")
        return self.model_copy(update={service: not getattr(self, service)})


class ContactInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: str = Field(default="", alias="specialRequests")


class Itinerary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: Location
    destination: Location
    stops: List[Stop] = Field(default_factory=list)
    selected_date: str = Field(default="", alias="selectedDate")
    selected_time: str = Field(default="", alias="selectedTime")
    return_date: Optional[str] = Field(default=None, alias="returnDate")
    return_time: Optional[str] = Field(default=None, alias="returnTime")
    is_return: bool = Field(default=False, alias="isReturn")


class BreakdownLine(BaseModel):
    label: str
    amount: float                # base currency


class PriceQuote(BaseModel):
    base_price: float
    service_cost: float
    total: float                 # base currency
    min: int
    max: int
    breakdown: List[BreakdownLine] = Field(default_factory=list)
    currency: Currency

    @property
    def converted_total(self) -> float:
        return self.total * self.currency.rate


CheckoutKind = Literal["fixed_offer", "empty_leg", "visa", "custom"]


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    identifier: str = Field(alias="offerId")
    kind: CheckoutKind = Field(alias="offerType")
    price: float                 # already in `currency`
    currency: str
    title: str
    contact: ContactInfo = Field(default_factory=ContactInfo)
    services: SelectedServices = Field(default_factory=SelectedServices)


class QuoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    offer_id: str = Field(alias="offerId")
    offer_type: str = Field(alias="offerType")
    contact_email: str = Field(alias="contactEmail")
    form_data: Dict[str, Any] = Field(default_factory=dict, alias="formData")


class PartnerSubscriptionRequest(BaseModel):
    # every field optional so missing ones can be reported as a 400, not a 422
    model_config = ConfigDict(populate_by_name=True)

    tier_id: Optional[str] = Field(default=None, alias="tierId")
    tier_type: Optional[str] = Field(default=None, alias="tierType")
    price: Optional[float] = None
    currency: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    def is_complete(self) -> bool:
        return all([self.tier_id, self.price, self.currency, self.name, self.email])


class CheckoutResult(BaseModel):
    status: Literal["success", "error"]
    session_id: Optional[str] = None
    error: Optional[str] = None

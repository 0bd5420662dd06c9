# voyatek/models/entities.py
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Immutable record whose attribute names map to fixed snake_case wire names.

    Fields whose wire name differs from the attribute carry an alias; unknown
    wire fields are ignored on decode and absent optionals are omitted on encode.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TravelStyle(str, Enum):
    SOLO = "Solo"
    COUPLE = "Couple"
    FAMILY = "Family"
    GROUP = "Group"


class Flight(WireModel):
    id: str
    airline: str
    flight_number: str
    departure_time: str
    departure_date: str
    departure_airport: str
    arrival_time: str
    arrival_date: str
    arrival_airport: str
    duration: str
    is_direct: bool
    price: str  # pre-formatted, e.g. "$450.00"


class Hotel(WireModel):
    id: str
    name: str
    address: str
    rating: float = Field(ge=0, le=10)
    review_count: int = Field(ge=0)
    room_type: str
    check_in_date: str
    check_out_date: str
    image_url: Optional[str] = None
    price: str


class Activity(WireModel):
    id: str
    name: str
    description: str
    location: str
    rating: float
    review_count: int = Field(ge=0)
    duration: str
    scheduled_time: str
    scheduled_date: str
    day_number: int = Field(ge=1)
    activity_number: int = Field(ge=1)
    image_url: Optional[str] = None
    price: str


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date-time string, returning None when it doesn't parse.

    Aware values are converted to naive UTC so that mixed inputs compare.
    """
    if not value or "T" not in value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{_ORDINAL_SUFFIXES.get(day % 10, 'th')}"


class Trip(WireModel):
    id: Optional[str] = None
    destination: str
    start_date: str
    end_date: str
    title: Optional[str] = None
    travel_style: Optional[str] = None
    description: Optional[str] = Field(default=None, alias="trip_description")
    image_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    flights: Optional[List[Flight]] = None
    hotels: Optional[List[Hotel]] = None
    activities: Optional[List[Activity]] = None

    @property
    def duration(self) -> Optional[int]:
        """Inclusive day count between start and end, None if either fails to parse."""
        start = parse_iso_datetime(self.start_date)
        end = parse_iso_datetime(self.end_date)
        if start is None or end is None:
            return None
        return (end - start).days + 1

    @property
    def formatted_start_date(self) -> str:
        start = parse_iso_datetime(self.start_date)
        if start is None:
            return self.start_date
        return f"{_ordinal(start.day)} {start.strftime('%B %Y')}"

    @property
    def date_range_label(self) -> str:
        start = parse_iso_datetime(self.start_date)
        end = parse_iso_datetime(self.end_date)
        if start is None or end is None:
            return f"{self.start_date} → {self.end_date}"
        return f"{start.day} {start.strftime('%B %Y')} → {end.day} {end.strftime('%B %Y')}"

    @property
    def display_title(self) -> str:
        return self.title or self.destination


class User(WireModel):
    id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserPatch(WireModel):
    """Partial user update; only the fields that are set go on the wire."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.to_wire()


class Country(WireModel):
    name: str
    flag: str
    code: str
    dial_code: str

"""
Draft builders for the create-trip and user forms.

They apply the same checks the screens run before submitting and produce the
records the view-state holders send to the backend.
"""
from datetime import datetime, timezone
from typing import Optional, Union

from voyatek.models import TravelStyle, Trip, User


class FormValidationError(ValueError):
    """Raised when form input cannot be turned into a record."""


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def to_internet_datetime(value: datetime) -> str:
    """RFC 3339 string in UTC, e.g. 2024-01-01T09:30:00Z. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_trip_draft(
    destination: str,
    start: Optional[datetime],
    end: Optional[datetime],
    title: Optional[str] = None,
    travel_style: Union[TravelStyle, str] = TravelStyle.SOLO,
    description: Optional[str] = None,
) -> Trip:
    destination = _clean(destination)
    if not destination:
        raise FormValidationError("Please select a destination")
    if start is None or end is None:
        raise FormValidationError("Please select start and end dates")
    start_text = to_internet_datetime(start)
    end_text = to_internet_datetime(end)
    if start_text > end_text:
        raise FormValidationError("End date must not be before start date")
    try:
        style = TravelStyle(travel_style)
    except ValueError:
        raise FormValidationError(f"Unknown travel style: {travel_style}")

    return Trip(
        destination=destination,
        start_date=start_text,
        end_date=end_text,
        title=_clean(title),
        travel_style=style.value,
        description=_clean(description),
    )


def build_user_draft(
    name: str,
    email: str,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> User:
    name = _clean(name)
    email = _clean(email)
    if not name or not email or "@" not in email:
        raise FormValidationError("Please fill in all required fields (Name and Email)")
    return User(name=name, email=email, phone=_clean(phone), address=_clean(address))

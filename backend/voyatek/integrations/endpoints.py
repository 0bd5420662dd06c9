"""
Endpoint resolution for the trips and users REST resources.
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote, urlsplit

from voyatek.config import settings
from voyatek.integrations.errors import InvalidURL


class Resource(str, Enum):
    TRIPS = "trips"
    TRIP = "trip"
    USERS = "users"
    USER = "user"


_PATHS = {
    Resource.TRIPS: "/trips",
    Resource.TRIP: "/trips/{id}",
    Resource.USERS: "/users",
    Resource.USER: "/users/{id}",
}

_ITEM_RESOURCES = {Resource.TRIP, Resource.USER}


def endpoint_path(resource: Resource, item_id: Optional[str] = None) -> str:
    """Path for a resource; item ids are percent-encoded as one segment."""
    template = _PATHS[resource]
    if resource in _ITEM_RESOURCES:
        if item_id is None or not str(item_id):
            raise InvalidURL(f"{resource.value} endpoint requires an id")
        return template.format(id=quote(str(item_id), safe=""))
    return template


def resolve_url(resource: Resource, item_id: Optional[str] = None, base_url: Optional[str] = None) -> str:
    """
    Compose base URL + resource path into an absolute request URL.

    Raises InvalidURL when the result is not an absolute http(s) URL.
    """
    base = (base_url if base_url is not None else settings.api_base_url).rstrip("/")
    url = base + endpoint_path(resource, item_id)
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURL(str(e)) from e
    if parts.scheme not in ("http", "https") or not parts.hostname or any(c.isspace() for c in url):
        raise InvalidURL(url)
    return url


def trips_url(base_url: Optional[str] = None) -> str:
    return resolve_url(Resource.TRIPS, base_url=base_url)


def trip_url(trip_id: str, base_url: Optional[str] = None) -> str:
    return resolve_url(Resource.TRIP, trip_id, base_url=base_url)


def users_url(base_url: Optional[str] = None) -> str:
    return resolve_url(Resource.USERS, base_url=base_url)


def user_url(user_id: str, base_url: Optional[str] = None) -> str:
    return resolve_url(Resource.USER, user_id, base_url=base_url)

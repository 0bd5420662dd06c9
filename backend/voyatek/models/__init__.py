"""
Domain records shared by the API client, the view-state holders and the mock backend.
"""

from .entities import (
    Activity,
    Country,
    Flight,
    Hotel,
    TravelStyle,
    Trip,
    User,
    UserPatch,
    WireModel,
    parse_iso_datetime,
)

__all__ = [
    'Activity',
    'Country',
    'Flight',
    'Hotel',
    'TravelStyle',
    'Trip',
    'User',
    'UserPatch',
    'WireModel',
    'parse_iso_datetime',
]

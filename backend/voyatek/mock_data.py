"""
Demo trips and users (wire format) used to seed the mock backend and tests.
"""
import copy
from typing import Any, Dict, List

_TRIPS: List[Dict[str, Any]] = [
    {
        "id": "trip-1",
        "destination": "Bahamas",
        "start_date": "2024-04-19T00:00:00",
        "end_date": "2024-04-23T00:00:00",
        "title": "Bahamas Family Trip",
        "travel_style": "Family",
        "trip_description": "Beach week with the kids",
        "created_at": "2024-03-01T10:00:00Z",
        "updated_at": "2024-03-01T10:00:00Z",
        "flights": [
            {
                "id": "flight-1",
                "airline": "American Airlines",
                "flight_number": "AA-829",
                "departure_time": "08:35",
                "departure_date": "Sun, 20 Aug",
                "departure_airport": "LOS",
                "arrival_time": "09:55",
                "arrival_date": "Sun, 20 Aug",
                "arrival_airport": "SIN",
                "duration": "1h 45m",
                "is_direct": True,
                "price": "₦ 123,450.00",
            }
        ],
        "hotels": [
            {
                "id": "hotel-1",
                "name": "Riviera Resort, Lekki",
                "address": "18, Kenneth Agbakuru Street, Off Access Bank Admiralty Way, Lekki Phase1",
                "rating": 8.5,
                "review_count": 436,
                "room_type": "King size room",
                "check_in_date": "20-04-2024",
                "check_out_date": "29-04-2024",
                "image_url": None,
                "price": "₦ 123,450.00",
            }
        ],
        "activities": [
            {
                "id": "activity-1",
                "name": "The Museum of Modern Art",
                "description": "Works from Van Gogh to Warhol & beyond plus a sculpture garden, 2 cafes & The modern restaurant",
                "location": "Melbourne, Australia",
                "rating": 8.5,
                "review_count": 436,
                "duration": "1 hour",
                "scheduled_time": "10:30 AM",
                "scheduled_date": "Mar 19",
                "day_number": 1,
                "activity_number": 1,
                "price": "₦ 123,450.00",
            }
        ],
    },
    {
        "id": "trip-2",
        "destination": "Lagos, Nigeria",
        "start_date": "2024-06-01T00:00:00",
        "end_date": "2024-06-05T00:00:00",
        "title": "Lagos Weekend",
        "travel_style": "Solo",
        "created_at": "2024-03-02T10:00:00Z",
        "updated_at": "2024-03-02T10:00:00Z",
    },
]

_USERS: List[Dict[str, Any]] = [
    {
        "id": "user-1",
        "name": "Ada Obi",
        "email": "ada@example.com",
        "phone": "+234 801 234 5678",
        "address": "12 Marina Road, Lagos",
        "created_at": "2024-02-10T08:00:00Z",
        "updated_at": "2024-02-10T08:00:00Z",
    },
    {
        "id": "user-2",
        "name": "Kwame Mensah",
        "email": "kwame@example.com",
        "created_at": "2024-02-11T08:00:00Z",
        "updated_at": "2024-02-11T08:00:00Z",
    },
]


def demo_trips() -> List[Dict[str, Any]]:
    return copy.deepcopy(_TRIPS)


def demo_users() -> List[Dict[str, Any]]:
    return copy.deepcopy(_USERS)

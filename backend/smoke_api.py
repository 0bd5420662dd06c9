#!/usr/bin/env python3
"""
Smoke script for a running Voyatek backend (e.g. `python run_server.py`).

Walks the trips and users endpoints once and reports what came back.
"""

import json
import os
import sys

import requests

# API base URL
BASE_URL = os.getenv("VOYATEK_API_BASE_URL", "http://localhost:8000")


def _count(payload):
    """Collection size regardless of the response shape."""
    if isinstance(payload, list):
        return len(payload)
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return len(payload["data"])
    return 1 if payload else 0


def check_health():
    print("Testing health endpoint...")
    response = requests.get(f"{BASE_URL}/health", timeout=30)
    print(f"Status: {response.status_code}")
    print(f"Response: {response.json()}")
    print()


def check_trips():
    print("Testing trips endpoints...")
    response = requests.get(f"{BASE_URL}/trips", timeout=30)
    print(f"GET /trips -> {response.status_code}, {_count(response.json() if response.content else None)} trip(s)")

    new_trip = {
        "destination": "Zanzibar",
        "start_date": "2025-11-10T00:00:00Z",
        "end_date": "2025-11-16T00:00:00Z",
        "title": "Smoke test trip",
        "travel_style": "Couple",
    }
    response = requests.post(f"{BASE_URL}/trips", json=new_trip, headers={"Content-Type": "application/json"}, timeout=30)
    print(f"POST /trips -> {response.status_code}")
    created = response.json() if response.content else new_trip
    print(json.dumps(created, indent=2, ensure_ascii=False))

    trip_id = created.get("id")
    if trip_id:
        response = requests.delete(f"{BASE_URL}/trips/{trip_id}", timeout=30)
        print(f"DELETE /trips/{trip_id} -> {response.status_code}")
    print()


def check_users():
    print("Testing users endpoints...")
    response = requests.get(f"{BASE_URL}/users", timeout=30)
    print(f"GET /users -> {response.status_code}, {_count(response.json() if response.content else None)} user(s)")

    response = requests.post(
        f"{BASE_URL}/users",
        json={"name": "Smoke Test", "email": "smoke@example.com"},
        timeout=30,
    )
    print(f"POST /users -> {response.status_code}")
    created = response.json() if response.content else {}
    user_id = created.get("id")
    if user_id:
        response = requests.patch(f"{BASE_URL}/users/{user_id}", json={"phone": "+1 555 0100"}, timeout=30)
        print(f"PATCH /users/{user_id} -> {response.status_code}: {response.json().get('phone')}")
        response = requests.delete(f"{BASE_URL}/users/{user_id}", timeout=30)
        print(f"DELETE /users/{user_id} -> {response.status_code}")
    print()


if __name__ == "__main__":
    print("Voyatek API smoke run")
    print("=" * 50)

    try:
        check_health()
        check_trips()
        check_users()
        print("All checks completed")
    except requests.exceptions.ConnectionError:
        print(f"Could not connect to {BASE_URL}")
        print("Make sure the server is running: python run_server.py")
        sys.exit(1)

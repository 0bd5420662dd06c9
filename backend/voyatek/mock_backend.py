"""
In-memory stand-in for the Voyatek REST backend.

Serves /trips and /users the way the hosted mock service does, including its
inconsistent collection shapes (bare array, "data" envelope or single object),
so the client can be exercised locally.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from voyatek.config import RESPONSE_SHAPES, settings
from voyatek.mock_data import demo_trips, demo_users
from voyatek.models import Trip, User, UserPatch

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


class MockStore:
    """Insertion-ordered records per resource, keyed by id."""

    def __init__(self, seed: bool = True):
        self.trips: Dict[str, Dict[str, Any]] = {}
        self.users: Dict[str, Dict[str, Any]] = {}
        if seed:
            self.trips = {t["id"]: t for t in demo_trips()}
            self.users = {u["id"]: u for u in demo_users()}

    @staticmethod
    def get(records: Dict[str, Dict[str, Any]], record_id: str, kind: str) -> Dict[str, Any]:
        record = records.get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{kind} {record_id} not found")
        return record

    @staticmethod
    def insert(records: Dict[str, Dict[str, Any]], payload: Dict[str, Any]) -> Dict[str, Any]:
        now = _now()
        record = {**payload, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        records[record["id"]] = record
        return record

    @staticmethod
    def replace(records: Dict[str, Dict[str, Any]], record_id: str, payload: Dict[str, Any], kind: str) -> Dict[str, Any]:
        existing = MockStore.get(records, record_id, kind)
        record = {**payload, "id": record_id, "created_at": existing.get("created_at"), "updated_at": _now()}
        records[record_id] = record
        return record


def _collection_response(records: List[Dict[str, Any]], shape: str) -> Response:
    if shape == "envelope":
        return JSONResponse(content={"data": records})
    if shape == "single":
        if not records:
            return Response(status_code=200)
        return JSONResponse(content=records[0])
    return JSONResponse(content=records)


def create_app(response_shape: Optional[str] = None, seed: bool = True) -> FastAPI:
    shape = response_shape or settings.response_shape
    if shape not in RESPONSE_SHAPES:
        raise ValueError(f"response_shape must be one of {RESPONSE_SHAPES}, got {shape!r}")

    app = FastAPI(
        title="Voyatek Mock Backend",
        description="In-memory trips and users API for local development",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    store = MockStore(seed=seed)
    app.state.store = store
    app.state.response_shape = shape

    @app.get("/")
    def root():
        return {
            "message": "Voyatek Mock Backend",
            "version": "1.0.0",
            "response_shape": shape,
            "endpoints": {"trips": "/trips", "users": "/users", "health": "/health"},
        }

    @app.get("/health")
    def health():
        return {"status": "healthy", "service": "Voyatek Mock Backend"}

    # Trips

    @app.get("/trips")
    def list_trips():
        return _collection_response(list(store.trips.values()), shape)

    @app.post("/trips", status_code=201)
    def create_trip(trip: Trip):
        record = store.insert(store.trips, trip.to_wire())
        logger.info(f"Created trip {record['id']} to {record['destination']}")
        return JSONResponse(status_code=201, content=record)

    @app.get("/trips/{trip_id}")
    def get_trip(trip_id: str):
        return store.get(store.trips, trip_id, "Trip")

    @app.put("/trips/{trip_id}")
    def update_trip(trip_id: str, trip: Trip):
        return store.replace(store.trips, trip_id, trip.to_wire(), "Trip")

    @app.delete("/trips/{trip_id}", status_code=204)
    def delete_trip(trip_id: str):
        store.get(store.trips, trip_id, "Trip")
        del store.trips[trip_id]
        return Response(status_code=204)

    # Users

    @app.get("/users")
    def list_users():
        return _collection_response(list(store.users.values()), shape)

    @app.post("/users", status_code=201)
    def create_user(user: User):
        record = store.insert(store.users, user.to_wire())
        logger.info(f"Created user {record['id']}")
        return JSONResponse(status_code=201, content=record)

    @app.get("/users/{user_id}")
    def get_user(user_id: str):
        return store.get(store.users, user_id, "User")

    @app.put("/users/{user_id}")
    def update_user(user_id: str, user: User):
        return store.replace(store.users, user_id, user.to_wire(), "User")

    @app.patch("/users/{user_id}")
    def patch_user(user_id: str, updates: UserPatch):
        existing = store.get(store.users, user_id, "User")
        existing.update(updates.to_wire())
        existing["updated_at"] = _now()
        return existing

    @app.delete("/users/{user_id}", status_code=204)
    def delete_user(user_id: str):
        store.get(store.users, user_id, "User")
        del store.users[user_id]
        return Response(status_code=204)

    return app


app = create_app()

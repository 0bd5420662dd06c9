"""
Voyatek API client - trips and users over the REST backend.

Every call resolves its endpoint, goes through the transport once and decodes
the body with the shape-tolerant normalizer. Failures always surface as
APIError subclasses.
"""
import logging
from typing import Any, List, Optional, Type

from voyatek.integrations import endpoints
from voyatek.integrations.errors import APIError, UnknownError
from voyatek.integrations.normalizer import ModelT, decode_created, decode_list, decode_one
from voyatek.integrations.transport import Transport, get_default_transport
from voyatek.models import Trip, User, UserPatch

logger = logging.getLogger(__name__)


class APIClient:
    """Client exposing the trip and user operations of the backend."""

    def __init__(self, transport: Optional[Transport] = None, base_url: Optional[str] = None):
        self._transport = transport
        self.base_url = base_url

    @property
    def transport(self) -> Transport:
        """The injected transport, else whatever the process-wide default currently is."""
        return self._transport or get_default_transport()

    async def _call(self, method: str, url: str, json_body: Any = None) -> bytes:
        try:
            return await self.transport.request(method, url, json_body)
        except APIError:
            raise
        except Exception as e:
            logger.error(f"Unexpected transport failure for {method} {url}: {e}")
            raise UnknownError(str(e)) from e

    async def _list(self, url: str, model: Type[ModelT]) -> List[ModelT]:
        body = await self._call("GET", url)
        return decode_list(body, model)

    async def _one(self, method: str, url: str, model: Type[ModelT], json_body: Any = None) -> ModelT:
        body = await self._call(method, url, json_body)
        return decode_one(body, model)

    # Trips

    async def fetch_trips(self) -> List[Trip]:
        trips = await self._list(endpoints.trips_url(self.base_url), Trip)
        logger.info(f"Fetched {len(trips)} trips")
        return trips

    async def fetch_trip(self, trip_id: str) -> Trip:
        return await self._one("GET", endpoints.trip_url(trip_id, self.base_url), Trip)

    async def create_trip(self, trip: Trip) -> Trip:
        body = await self._call("POST", endpoints.trips_url(self.base_url), trip.to_wire())
        created = decode_created(body, Trip, trip)
        logger.info(f"Created trip {created.id or '(no id returned)'} to {created.destination}")
        return created

    async def update_trip(self, trip_id: str, trip: Trip) -> Trip:
        return await self._one("PUT", endpoints.trip_url(trip_id, self.base_url), Trip, trip.to_wire())

    async def delete_trip(self, trip_id: str) -> None:
        await self._call("DELETE", endpoints.trip_url(trip_id, self.base_url))
        logger.info(f"Deleted trip {trip_id}")

    # Users

    async def fetch_users(self) -> List[User]:
        users = await self._list(endpoints.users_url(self.base_url), User)
        logger.info(f"Fetched {len(users)} users")
        return users

    async def fetch_user(self, user_id: str) -> User:
        return await self._one("GET", endpoints.user_url(user_id, self.base_url), User)

    async def create_user(self, user: User) -> User:
        body = await self._call("POST", endpoints.users_url(self.base_url), user.to_wire())
        created = decode_created(body, User, user)
        logger.info(f"Created user {created.id or '(no id returned)'}")
        return created

    async def update_user(self, user_id: str, user: User) -> User:
        return await self._one("PUT", endpoints.user_url(user_id, self.base_url), User, user.to_wire())

    async def patch_user(self, user_id: str, updates: UserPatch) -> User:
        """Send only the fields set on `updates`; the backend answers with the full user."""
        return await self._one("PATCH", endpoints.user_url(user_id, self.base_url), User, updates.to_wire())

    async def delete_user(self, user_id: str) -> None:
        await self._call("DELETE", endpoints.user_url(user_id, self.base_url))
        logger.info(f"Deleted user {user_id}")


_api_client: Optional[APIClient] = None


def get_api_client() -> APIClient:
    """Process-wide client over the default transport."""
    global _api_client
    if _api_client is None:
        _api_client = APIClient()
    return _api_client

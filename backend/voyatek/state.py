"""
Per-screen view state for the trips and users lists.

A holder owns its list, loading status and last error, issues exactly one
request per action and notifies subscribers after each change. In-flight
requests are never cancelled: a completion still updates the holder even if
no screen observes it anymore, since the holder owns its state.
"""
import logging
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from voyatek.integrations.api_client import APIClient
from voyatek.integrations.errors import APIError
from voyatek.integrations.transport import Transport
from voyatek.models import Trip, User, UserPatch

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Trip, User)
Listener = Callable[["ListState"], None]


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ListState(Generic[RecordT]):
    """Observable list state shared by the trips and users screens."""

    resource_name = "records"

    def __init__(
        self,
        transport: Optional[Transport] = None,
        base_url: Optional[str] = None,
        api: Optional[APIClient] = None,
    ):
        self.api = api or APIClient(transport=transport, base_url=base_url)
        self.items: List[RecordT] = []
        self.status = LoadStatus.IDLE
        self.error: Optional[APIError] = None
        self.selected: Optional[RecordT] = None
        self._listeners: List[Listener] = []

    # Observation

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def show_error(self) -> bool:
        return self.error is not None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.description if self.error else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _start(self) -> None:
        self.status = LoadStatus.LOADING
        self.error = None
        self._notify()

    def _succeed(self) -> None:
        self.status = LoadStatus.LOADED
        self.error = None
        self._notify()

    def _fail(self, action: str, error: APIError) -> None:
        self.status = LoadStatus.FAILED
        self.error = error
        logger.error(f"Error {action} {self.resource_name}: {error.description}")
        self._notify()

    # Resource hooks

    async def _fetch_all(self) -> List[RecordT]:
        raise NotImplementedError

    async def _fetch_one(self, record_id: str) -> RecordT:
        raise NotImplementedError

    async def _create(self, record: RecordT) -> RecordT:
        raise NotImplementedError

    async def _update(self, record_id: str, record: RecordT) -> RecordT:
        raise NotImplementedError

    async def _delete(self, record_id: str) -> None:
        raise NotImplementedError

    # Actions

    async def fetch_all(self) -> List[RecordT]:
        """Load the collection; on failure the previous list stays visible."""
        self._start()
        try:
            records = await self._fetch_all()
        except APIError as e:
            self._fail("fetching", e)
            return self.items
        self.items = list(records)
        self._succeed()
        return self.items

    async def refresh(self) -> List[RecordT]:
        """Pull-to-refresh; overlapping calls are not deduplicated."""
        return await self.fetch_all()

    async def retry(self) -> List[RecordT]:
        return await self.fetch_all()

    async def fetch_one(self, record_id: str) -> Optional[RecordT]:
        self._start()
        try:
            record = await self._fetch_one(record_id)
        except APIError as e:
            self._fail("fetching", e)
            return None
        self.selected = record
        self._succeed()
        return record

    async def create(self, record: RecordT) -> Optional[RecordT]:
        """Create and put the returned record at the front of the list."""
        self._start()
        try:
            created = await self._create(record)
        except APIError as e:
            self._fail("creating", e)
            return None
        self.items.insert(0, created)
        self._succeed()
        return created

    async def update(self, record_id: str, record: RecordT) -> Optional[RecordT]:
        """Replace the record in full; only the first entry with that id is swapped."""
        self._start()
        try:
            updated = await self._update(record_id, record)
        except APIError as e:
            self._fail("updating", e)
            return None
        self._replace_first(record_id, updated)
        self._succeed()
        return updated

    async def delete(self, record_id: str) -> bool:
        """Delete and drop every entry with that id; unknown ids leave the list as is."""
        self._start()
        try:
            await self._delete(record_id)
        except APIError as e:
            self._fail("deleting", e)
            return False
        self.items = [item for item in self.items if item.id != record_id]
        if self.selected is not None and self.selected.id == record_id:
            self.selected = None
        self._succeed()
        return True

    def select(self, record: Optional[RecordT]) -> None:
        self.selected = record
        self._notify()

    def clear_selection(self) -> None:
        self.select(None)

    def _replace_first(self, record_id: str, record: RecordT) -> None:
        for index, item in enumerate(self.items):
            if item.id == record_id:
                self.items[index] = record
                break
        if self.selected is not None and self.selected.id == record_id:
            self.selected = record


class TripsState(ListState[Trip]):
    resource_name = "trips"

    async def _fetch_all(self) -> List[Trip]:
        return await self.api.fetch_trips()

    async def _fetch_one(self, record_id: str) -> Trip:
        return await self.api.fetch_trip(record_id)

    async def _create(self, record: Trip) -> Trip:
        return await self.api.create_trip(record)

    async def _update(self, record_id: str, record: Trip) -> Trip:
        return await self.api.update_trip(record_id, record)

    async def _delete(self, record_id: str) -> None:
        await self.api.delete_trip(record_id)


class UsersState(ListState[User]):
    resource_name = "users"

    async def _fetch_all(self) -> List[User]:
        return await self.api.fetch_users()

    async def _fetch_one(self, record_id: str) -> User:
        return await self.api.fetch_user(record_id)

    async def _create(self, record: User) -> User:
        return await self.api.create_user(record)

    async def _update(self, record_id: str, record: User) -> User:
        return await self.api.update_user(record_id, record)

    async def _delete(self, record_id: str) -> None:
        await self.api.delete_user(record_id)

    async def patch(self, user_id: str, updates: UserPatch) -> Optional[User]:
        """Partial update; the returned full user replaces the first match."""
        self._start()
        try:
            updated = await self.api.patch_user(user_id, updates)
        except APIError as e:
            self._fail("patching", e)
            return None
        self._replace_first(user_id, updated)
        self._succeed()
        return updated

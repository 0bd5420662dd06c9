"""
Tests for the API client wiring: methods, URLs, payloads and decoding.
"""
import unittest

from fakes import BASE_URL, FakeTransport, trip_wire, user_wire, wire
from voyatek.integrations.api_client import APIClient
from voyatek.integrations.errors import DecodingError, HTTPError, InvalidURL, NetworkError, UnknownError
from voyatek.models import Trip, User, UserPatch


class TripEndpointsTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_trips_accepts_each_collection_shape(self):
        records = [trip_wire("1"), trip_wire("2", "Accra")]
        for body, expected in [
            (wire(records), ["1", "2"]),
            (wire({"data": records}), ["1", "2"]),
            (wire(records[1]), ["2"]),
            (b"", []),
        ]:
            with self.subTest(body=body):
                transport = FakeTransport(body)
                trips = await APIClient(transport, BASE_URL).fetch_trips()
                self.assertEqual([t.id for t in trips], expected)
                self.assertEqual(transport.calls, [("GET", f"{BASE_URL}/trips", None)])

    async def test_fetch_trip_by_id(self):
        transport = FakeTransport(wire(trip_wire("t 1")))
        trip = await APIClient(transport, BASE_URL).fetch_trip("t 1")
        self.assertEqual(trip.id, "t 1")
        self.assertEqual(transport.calls[0][:2], ("GET", f"{BASE_URL}/trips/t%201"))

    async def test_create_trip_posts_wire_payload(self):
        transport = FakeTransport(wire(trip_wire("new", created_at="2024-01-01T00:00:00Z")))
        draft = Trip(destination="Lagos", start_date="2024-01-01T00:00:00", end_date="2024-01-03T00:00:00",
                     travel_style="Solo", description="Conference")
        created = await APIClient(transport, BASE_URL).create_trip(draft)
        self.assertEqual(created.id, "new")
        method, url, body = transport.calls[0]
        self.assertEqual((method, url), ("POST", f"{BASE_URL}/trips"))
        self.assertEqual(body["trip_description"], "Conference")
        self.assertNotIn("id", body)

    async def test_create_with_empty_reply_returns_submitted_trip(self):
        draft = Trip(destination="Lagos", start_date="2024-01-01T00:00:00", end_date="2024-01-03T00:00:00")
        created = await APIClient(FakeTransport(b""), BASE_URL).create_trip(draft)
        self.assertIs(created, draft)

    async def test_update_and_delete_trip(self):
        transport = FakeTransport(wire(trip_wire("9", "Nairobi")), b"")
        client = APIClient(transport, BASE_URL)
        updated = await client.update_trip("9", Trip(destination="Nairobi", start_date="a", end_date="b"))
        self.assertEqual(updated.destination, "Nairobi")
        self.assertIsNone(await client.delete_trip("9"))
        self.assertEqual([c[:2] for c in transport.calls], [
            ("PUT", f"{BASE_URL}/trips/9"),
            ("DELETE", f"{BASE_URL}/trips/9"),
        ])
        self.assertIsNone(transport.calls[1][2])

    async def test_update_with_empty_reply_is_a_decoding_error(self):
        with self.assertRaises(DecodingError):
            await APIClient(FakeTransport(b""), BASE_URL).update_trip(
                "9", Trip(destination="Nairobi", start_date="a", end_date="b"))


class UserEndpointsTests(unittest.IsolatedAsyncioTestCase):
    async def test_user_crud_requests(self):
        transport = FakeTransport(
            wire([user_wire("1")]),
            wire(user_wire("1")),
            wire(user_wire("2", "Grace")),
            wire(user_wire("2", "Grace", phone="+1")),
            wire(user_wire("2", "Grace", phone="+2")),
            b"",
        )
        client = APIClient(transport, BASE_URL)
        await client.fetch_users()
        await client.fetch_user("1")
        await client.create_user(User(name="Grace", email="grace@example.com"))
        await client.update_user("2", User(name="Grace", email="grace@example.com", phone="+1"))
        patched = await client.patch_user("2", UserPatch(phone="+2"))
        await client.delete_user("2")

        self.assertEqual(patched.phone, "+2")
        self.assertEqual(transport.calls, [
            ("GET", f"{BASE_URL}/users", None),
            ("GET", f"{BASE_URL}/users/1", None),
            ("POST", f"{BASE_URL}/users", {"name": "Grace", "email": "grace@example.com"}),
            ("PUT", f"{BASE_URL}/users/2", {"name": "Grace", "email": "grace@example.com", "phone": "+1"}),
            ("PATCH", f"{BASE_URL}/users/2", {"phone": "+2"}),
            ("DELETE", f"{BASE_URL}/users/2", None),
        ])


class ErrorPropagationTests(unittest.IsolatedAsyncioTestCase):
    async def test_api_errors_pass_through_unchanged(self):
        for error in [HTTPError(404), NetworkError("timed out")]:
            with self.subTest(error=error):
                with self.assertRaises(type(error)) as ctx:
                    await APIClient(FakeTransport(error), BASE_URL).fetch_users()
                self.assertIs(ctx.exception, error)

    async def test_unexpected_exceptions_become_unknown_errors(self):
        with self.assertRaises(UnknownError) as ctx:
            await APIClient(FakeTransport(RuntimeError("boom")), BASE_URL).fetch_trips()
        self.assertEqual(ctx.exception.description, "An unknown error occurred")

    async def test_decoding_errors_surface(self):
        with self.assertRaises(DecodingError):
            await APIClient(FakeTransport(b"<html>"), BASE_URL).fetch_users()

    async def test_invalid_url_is_raised_before_any_request(self):
        transport = FakeTransport()
        with self.assertRaises(InvalidURL):
            await APIClient(transport, "not a url").fetch_trips()
        self.assertEqual(transport.calls, [])


if __name__ == "__main__":
    unittest.main()

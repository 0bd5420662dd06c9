"""
Tests for the aiohttp transport against an in-process aiohttp.web server.
"""
import asyncio
import json
import unittest

import aiohttp
from aiohttp import web
from aiohttp.test_utils import TestServer

from voyatek.integrations.errors import HTTPError, InvalidResponse, NetworkError
from voyatek.integrations.api_client import APIClient, get_api_client
from voyatek.integrations.transport import AiohttpTransport, close_default_transport, get_default_transport
from voyatek.state import LoadStatus, UsersState


async def _echo(request: web.Request) -> web.Response:
    raw = await request.read()
    return web.json_response({
        "method": request.method,
        "content_type": request.headers.get("Content-Type"),
        "accept": request.headers.get("Accept"),
        "body": json.loads(raw) if raw else None,
    })


async def _status(request: web.Request) -> web.Response:
    return web.Response(status=int(request.match_info["code"]), text="nope")


async def _empty(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.json_response([])


async def _users(request: web.Request) -> web.Response:
    return web.json_response([{"id": "u1", "name": "Ada", "email": "ada@example.com"}])


class _BrokenResponse:
    def __init__(self, error: Exception):
        self.error = error

    async def __aenter__(self):
        raise self.error

    async def __aexit__(self, exc_type, exc, tb):
        return False


class _BrokenSession:
    """Session whose requests fail while reading the reply."""
    closed = False

    def __init__(self, error: Exception):
        self.error = error

    def request(self, *args, **kwargs):
        return _BrokenResponse(self.error)

    async def close(self):
        self.closed = True


class AiohttpTransportTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        app = web.Application()
        app.router.add_route("*", "/echo", _echo)
        app.router.add_route("*", "/status/{code}", _status)
        app.router.add_route("*", "/empty", _empty)
        app.router.add_route("GET", "/slow", _slow)
        self.server = TestServer(app)
        await self.server.start_server()
        self.transport = AiohttpTransport(connect_timeout=5, total_timeout=10)

    async def asyncTearDown(self):
        await self.transport.close()
        await self.server.close()

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))

    async def test_json_body_is_sent_with_content_type(self):
        for method in ["POST", "PUT", "PATCH"]:
            with self.subTest(method=method):
                body = await self.transport.request(method, self.url("/echo"), {"name": "Ada"})
                echoed = json.loads(body)
                self.assertEqual(echoed["method"], method)
                self.assertEqual(echoed["content_type"], "application/json")
                self.assertEqual(echoed["body"], {"name": "Ada"})

    async def test_requests_without_body_send_no_content_type(self):
        echoed = json.loads(await self.transport.request("GET", self.url("/echo")))
        self.assertEqual(echoed["method"], "GET")
        self.assertIsNone(echoed["body"])
        self.assertIsNone(echoed["content_type"])
        self.assertEqual(echoed["accept"], "application/json")

    async def test_empty_body_is_returned_as_empty_bytes(self):
        self.assertEqual(await self.transport.request("DELETE", self.url("/empty")), b"")

    async def test_non_2xx_raises_http_error_with_exact_status(self):
        for code in [300, 304, 400, 401, 404, 409, 422, 500, 503]:
            with self.subTest(code=code):
                with self.assertRaises(HTTPError) as ctx:
                    await self.transport.request("GET", self.url(f"/status/{code}"))
                self.assertEqual(ctx.exception.status_code, code)
                self.assertEqual(ctx.exception.description, f"HTTP Error: {code}")

    async def test_any_2xx_is_success(self):
        for code in [200, 201, 202]:
            with self.subTest(code=code):
                self.assertEqual(await self.transport.request("GET", self.url(f"/status/{code}")), b"nope")

    async def test_session_is_reused_until_closed(self):
        await self.transport.request("GET", self.url("/echo"))
        session = self.transport.session
        await self.transport.request("GET", self.url("/echo"))
        self.assertIs(self.transport.session, session)
        await self.transport.close()
        self.assertIsNone(self.transport.session)
        await self.transport.request("GET", self.url("/echo"))
        self.assertIsNot(self.transport.session, session)

    async def test_unreachable_host_raises_network_error(self):
        url = self.url("/echo")
        await self.server.close()
        with self.assertRaises(NetworkError) as ctx:
            await self.transport.request("GET", url)
        self.assertTrue(ctx.exception.description.startswith("Network error:"))

    async def test_slow_reply_times_out_as_network_error(self):
        transport = AiohttpTransport(connect_timeout=5, total_timeout=0.05)
        try:
            with self.assertRaises(NetworkError) as ctx:
                await transport.request("GET", self.url("/slow"))
        finally:
            await transport.close()
        self.assertEqual(ctx.exception.description, "Network error: The request timed out")

    async def test_unreadable_reply_raises_invalid_response(self):
        self.transport._session_loop = asyncio.get_running_loop()
        self.transport.session = _BrokenSession(aiohttp.ClientPayloadError("Response payload is not completed"))
        with self.assertRaises(InvalidResponse):
            await self.transport.request("GET", self.url("/echo"))


class DefaultTransportTests(unittest.TestCase):
    """The shared transport used when a holder or client is built without one."""

    def setUp(self):
        asyncio.run(close_default_transport())

    def tearDown(self):
        asyncio.run(close_default_transport())

    async def _load_users_once(self):
        app = web.Application()
        app.router.add_route("GET", "/api/users", _users)
        server = TestServer(app)
        await server.start_server()
        try:
            holder = UsersState(base_url=str(server.make_url("/api")))
            await holder.fetch_all()
            return holder.status, holder.error_message, [u.id for u in holder.items]
        finally:
            await server.close()

    def test_default_wired_holder_works_across_event_loops(self):
        first = asyncio.run(self._load_users_once())
        second = asyncio.run(self._load_users_once())
        self.assertEqual(first, (LoadStatus.LOADED, None, ["u1"]))
        self.assertEqual(second, (LoadStatus.LOADED, None, ["u1"]))

    def test_shared_client_uses_the_default_transport(self):
        client = get_api_client()
        self.assertIs(get_api_client(), client)
        self.assertIs(client.transport, get_default_transport())
        self.assertIsInstance(UsersState().api, APIClient)
        self.assertIs(UsersState().api.transport, get_default_transport())

    def test_closing_the_default_transport_starts_a_fresh_one(self):
        transport = get_default_transport()
        asyncio.run(close_default_transport())
        self.assertIsNot(get_default_transport(), transport)


if __name__ == "__main__":
    unittest.main()

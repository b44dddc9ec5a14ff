"""
Shared helpers: an in-process fake of the app API.

Network tests start an `aiohttp.web` application on localhost, point the
client's base_url at it and drive everything with `asyncio.run`.
"""

import asyncio
import datetime
from collections import namedtuple

from aiohttp import web
from aiohttp.test_utils import TestServer

from pxvapi import ClientConfig, PixivClient


FIXED_NOW = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)

Call = namedtuple("Call", ["method", "path", "raw_path", "query", "headers", "form"])


def run(coro):
    return asyncio.run(coro)


class FakeApi:
    """
    Routes are keyed by (method, path). A route answers with a JSON body,
    a callable building one from the request, raw text or raw bytes
    (`data`). `delay` holds the answer back that many seconds.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.server = None

    def add(self, method, path, body=None, *, status=200, text=None,
            data=None, delay=0):
        self.routes[(method, path)] = (status, body, text, data, delay)

    def url(self, path=""):
        root = str(self.server.make_url("/")).rstrip("/")
        return root + path

    async def _handle(self, request):
        form = None
        if request.method == "POST":
            form = list((await request.post()).items())
        self.calls.append(Call(
            request.method, request.path, request.raw_path,
            dict(request.query), request.headers.copy(), form
        ))
        route = self.routes.get((request.method, request.path))
        if route is None:
            return web.json_response(
                {"error": {"message": "no such route"}}, status=404
            )
        status, body, text, data, delay = route
        if delay:
            await asyncio.sleep(delay)
        if data is not None:
            return web.Response(
                status=status, body=data, content_type="image/jpeg"
            )
        if text is not None:
            return web.Response(
                status=status, text=text, content_type="application/json"
            )
        if callable(body):
            body = body(request)
        return web.json_response(body, status=status)

    async def __aenter__(self):
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._handle)
        self.server = TestServer(app)
        await self.server.start_server()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.server.close()


def make_client(api, *, access_token=None, client_hash="z", **kwargs):
    config = ClientConfig(base_url=api.url(), auth_url=api.url("/auth/token"))
    client = PixivClient(
        "x", "y", client_hash, config=config, clock=lambda: FIXED_NOW,
        **kwargs
    )
    if access_token:
        client.session.update(access_token, "refresh-" + access_token)
    return client

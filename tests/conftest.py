"""
Shared fixtures: an in-process fake of the node-sonos-http-api control surface.

The fake keeps a zone table, applies ungroup/join the way the real API does
and records every call, so tests can assert on the exact call sequence.
"""

from __future__ import annotations

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from sonos_group.settings import Settings, Timing


class FakeSonosApi:
    """Zone table plus call log behind an aiohttp application."""

    def __init__(self, zones: dict[str, list[str]]) -> None:
        # coordinator -> members (coordinator excluded)
        self.zones = {coordinator: list(members) for coordinator, members in zones.items()}
        self.calls: list[tuple] = []
        self.failing: set[tuple[str, str]] = set()
        self.zones_payload = None
        self.raw_replies: dict[tuple[str, str], bytes] = {}
        self.zones_status = 200

    def fail(self, room: str, action: str) -> None:
        self.failing.add((room, action))

    def calls_for(self, action: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == action]

    def _coordinator_of(self, room: str) -> str | None:
        for coordinator, members in self.zones.items():
            if room == coordinator or room in members:
                return coordinator
        return None

    def _detach(self, room: str) -> None:
        coordinator = self._coordinator_of(room)
        if coordinator is None:
            return
        if coordinator == room:
            members, self.zones[room] = self.zones[room], []
            for member in members:
                self.zones[member] = []
        else:
            self.zones[coordinator].remove(room)
            self.zones[room] = []

    def _error(self, room: str, action: str) -> web.Response | None:
        if (room, action) in self.failing:
            return web.json_response({"status": "error", "error": f"{action} failed"}, status=500)
        return None

    async def handle_zones(self, request: web.Request) -> web.Response:
        self.calls.append(("zones",))
        if self.zones_status != 200:
            return web.Response(status=self.zones_status, text="unavailable")
        if isinstance(self.zones_payload, bytes):
            return web.Response(body=self.zones_payload, content_type="application/json", charset="utf-8")
        if self.zones_payload is not None:
            return web.Response(text=self.zones_payload, content_type="application/json")
        body = [
            {
                "uuid": f"RINCON_{coordinator}",
                "coordinator": {"roomName": coordinator, "state": {}},
                "members": [{"roomName": coordinator}] + [{"roomName": m} for m in members],
            }
            for coordinator, members in self.zones.items()
        ]
        return web.json_response(body)

    async def handle_ungroup(self, request: web.Request) -> web.Response:
        room = request.match_info["room"]
        self.calls.append(("ungroup", room))
        error = self._error(room, "ungroup")
        if error:
            return error
        self._detach(room)
        return web.json_response({"status": "success"})

    async def handle_join(self, request: web.Request) -> web.Response:
        room = request.match_info["room"]
        target = request.match_info["target"]
        self.calls.append(("join", room, target))
        error = self._error(room, "join")
        if error:
            return error
        # Yield so overlapping joins would interleave in the log
        await asyncio.sleep(0)
        self._detach(room)
        self.zones.pop(room, None)
        self.zones[self._coordinator_of(target)].append(room)
        return web.json_response({"status": "success"})

    async def handle_simple(self, request: web.Request) -> web.Response:
        room = request.match_info["room"]
        action = request.match_info["action"]
        self.calls.append((action, room))
        error = self._error(room, action)
        if error:
            return error
        if (room, action) in self.raw_replies:
            return web.Response(body=self.raw_replies[(room, action)], content_type="text/plain", charset="utf-8")
        return web.json_response({"status": "success"})

    async def handle_queue(self, request: web.Request) -> web.Response:
        room = request.match_info["room"]
        self.calls.append(("queue", room, request.match_info["uri"]))
        error = self._error(room, "queue")
        if error:
            return error
        return web.json_response({"status": "success"})

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/zones", self.handle_zones)
        app.router.add_get("/{room}/ungroup", self.handle_ungroup)
        app.router.add_get("/{room}/join/{target}", self.handle_join)
        app.router.add_get("/{room}/queue/{uri}", self.handle_queue)
        app.router.add_get("/{room}/{action}", self.handle_simple)
        return app


@pytest.fixture
def fleet() -> dict[str, list[str]]:
    """Default fleet: one group of three plus a lone speaker."""
    return {"Vardagsrum": ["Sovrum", "Hall"], "Kök": []}


@pytest.fixture
async def fake_api(fleet: dict[str, list[str]]):
    api = FakeSonosApi(fleet)
    server = TestServer(api.make_app())
    await server.start_server()
    api.base_url = str(server.make_url("/"))
    yield api
    await server.close()


@pytest.fixture
async def session():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record every settle delay instead of waiting for it."""
    recorded: list[float] = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay, result=None):
        if delay:
            recorded.append(delay)
        return await real_sleep(0, result)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded


@pytest.fixture
def settings(fake_api: FakeSonosApi) -> Settings:
    return Settings(base_url=fake_api.base_url, timing=Timing())

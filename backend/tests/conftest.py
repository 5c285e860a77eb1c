"""Shared fixtures: a throwaway database, signed-in users and a fake sensor gateway."""

import asyncio
import json
import os
import tempfile
from types import SimpleNamespace

# Point the app at a temporary database before anything imports it
_tmp_dir = tempfile.mkdtemp(prefix="airsense-tests-")
os.environ["DATABASE_PATH"] = os.path.join(_tmp_dir, "test.db")
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")
os.environ["LIVE_FEED_AUTO_CONNECT"] = "false"
os.environ["INGEST_API_KEY"] = ""

import aiohttp  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from airsense.database import Base, engine  # noqa: E402
from airsense.main import app  # noqa: E402
from airsense.sensors import LiveFeedClient  # noqa: E402


@pytest.fixture
async def db():
    """Fresh tables for each test."""
    # Connections are tied to the event loop that opened them
    await engine.dispose()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client(db):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def sign_in(client: AsyncClient):
    """Factory: register and sign in a user, returning auth headers."""

    async def _sign_in(email: str = "ada@example.com", password: str = "secret123") -> dict:
        await client.post(
            "/api/auth/signup",
            json={"email": email, "password": password, "name": email.split("@")[0]},
        )
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _sign_in


@pytest.fixture
async def auth_headers(sign_in) -> dict:
    return await sign_in()


# --- Fake gateway ---


class FakeWebSocket:
    """Stands in for aiohttp's ClientWebSocketResponse."""

    def __init__(self) -> None:
        self._inbox: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def push_text(self, data: str) -> None:
        self._inbox.put_nowait(SimpleNamespace(type=aiohttp.WSMsgType.TEXT, data=data))

    def push_json(self, payload: dict) -> None:
        self.push_text(json.dumps(payload))

    def drop(self) -> None:
        """The gateway closes the connection."""
        self._inbox.put_nowait(None)

    def exception(self):
        return None

    async def close(self) -> None:
        self.closed = True
        self._inbox.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self):
        msg = await self._inbox.get()
        if msg is None:
            raise StopAsyncIteration
        return msg


class FakeGateway:
    """Connection factory for LiveFeedClient; refuses while ``down`` is set.

    When ``handshake`` is set, each connection waits for that event before it
    completes.
    """

    def __init__(self, down: bool = False) -> None:
        self.down = down
        self.attempts = 0
        self.sockets: list[FakeWebSocket] = []
        self.handshake: asyncio.Event | None = None

    async def __call__(self, url: str) -> FakeWebSocket:
        self.attempts += 1
        if self.handshake is not None:
            await self.handshake.wait()
        if self.down:
            raise aiohttp.ClientConnectionError(f"Cannot connect to {url}")
        ws = FakeWebSocket()
        self.sockets.append(ws)
        return ws

    @property
    def socket(self) -> FakeWebSocket:
        return self.sockets[-1]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def make_feed(gateway: FakeGateway):
    """Factory for LiveFeedClients wired to the fake gateway; closed after the test."""
    feeds: list[LiveFeedClient] = []

    def _make_feed(**kwargs) -> LiveFeedClient:
        kwargs.setdefault("sensor_id", "sensor_001")
        kwargs.setdefault("reconnect_interval", 0.01)
        kwargs.setdefault("max_reconnect_attempts", 3)
        feed = LiveFeedClient("ws://gateway.test/ws/sensors", ws_connect=gateway, **kwargs)
        feeds.append(feed)
        return feed

    yield _make_feed

    for feed in feeds:
        await feed.aclose()


@pytest.fixture
async def live_feed(make_feed):
    """A connected feed installed as the app's live feed."""
    feed = make_feed()
    original = app.state.live_feed
    app.state.live_feed = feed
    await feed.connect()
    yield feed
    app.state.live_feed = original


@pytest.fixture
def wait_for():
    """Poll until a condition holds (or fail after a timeout)."""

    async def _wait_for(predicate, timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("Condition not met before timeout")
            await asyncio.sleep(0.005)

    return _wait_for

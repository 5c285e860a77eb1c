"""WebSocket client for the live feed of the local sensor gateway (Node-RED)."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import aiohttp

from airsense.sensors.conversion import (
    MalformedPayloadError,
    ProcessedSensorData,
    process_sensor_payload,
)

__all__ = ["FeedState", "LiveFeedClient"]

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://localhost:1880/ws/sensors"
DEFAULT_RECONNECT_INTERVAL = 5.0
DEFAULT_MAX_RECONNECT_ATTEMPTS = 10
# Pause between the disconnect and the new attempt of a manual reconnect
RECONNECT_PAUSE = 0.1

ReadingCallback = Callable[[ProcessedSensorData], None]
WebSocketFactory = Callable[[str], Awaitable[Any]]


class FeedState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    MANUALLY_DISCONNECTED = "manually_disconnected"


class LiveFeedClient:
    """
    Long-lived connection to the sensor gateway with bounded reconnection.

    States: idle -> connecting -> connected -> disconnected -> connecting ...
    A lost or failed connection is retried every ``reconnect_interval`` seconds
    up to ``max_reconnect_attempts`` times, then an error is reported and the
    client waits for a manual ``reconnect()``. ``disconnect()`` stops all
    retries. Only the latest reading is kept.

    ``ws_connect`` opens a WebSocket for a URL; by default an aiohttp client
    session owned by this object is used.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        *,
        sensor_id: str | None = None,
        auto_connect: bool = True,
        reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL,
        max_reconnect_attempts: int = DEFAULT_MAX_RECONNECT_ATTEMPTS,
        ws_connect: WebSocketFactory | None = None,
    ) -> None:
        self.url = url
        self.sensor_id = sensor_id
        self.auto_connect = auto_connect
        self.reconnect_interval = reconnect_interval
        self.max_reconnect_attempts = max_reconnect_attempts

        self._ws_connect = ws_connect
        self._http: aiohttp.ClientSession | None = None
        self._ws: Any = None
        self._reader: asyncio.Task | None = None
        self._reconnect_timer: asyncio.Task | None = None

        self._state = FeedState.IDLE
        self._reconnect_attempts = 0
        self._error: str | None = None
        self._reading: ProcessedSensorData | None = None
        self._subscribers: list[ReadingCallback] = []

    # --- Observable state ---

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is FeedState.CONNECTED

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def reading(self) -> ProcessedSensorData | None:
        return self._reading

    @property
    def reconnect_attempts(self) -> int:
        return self._reconnect_attempts

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_timer is not None and not self._reconnect_timer.done()

    def on_reading(self, callback: ReadingCallback) -> Callable[[], None]:
        """Subscribe to new readings. Returns a function that unsubscribes."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # --- Lifecycle ---

    async def start(self) -> None:
        """Connect right away when auto-connect is enabled."""
        if self.auto_connect:
            await self.connect()

    async def connect(self) -> None:
        """Open the connection. No-op while connecting or connected."""
        if self._state in (FeedState.CONNECTING, FeedState.CONNECTED):
            logger.debug("Live feed connection already active, skipping")
            return

        self._cancel_reconnect_timer()
        self._state = FeedState.CONNECTING
        logger.info(f"Connecting to live feed at {self.url}")

        try:
            ws = await self._open()
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Live feed connection failed: {e}")
            self._error = "WebSocket connection error"
            if self._state is FeedState.CONNECTING:
                self._handle_connection_lost()
            return

        # disconnect() may have run while the handshake was in flight
        if self._state is not FeedState.CONNECTING:
            await ws.close()
            return

        self._ws = ws
        self._state = FeedState.CONNECTED
        self._error = None
        self._reconnect_attempts = 0
        self._reader = asyncio.create_task(self._read_loop(ws))
        logger.info("Connected to live feed")

    async def disconnect(self) -> None:
        """Close the connection and stop retrying."""
        self._state = FeedState.MANUALLY_DISCONNECTED
        self._cancel_reconnect_timer()

        reader, self._reader = self._reader, None
        if reader is not None and reader is not asyncio.current_task():
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass

        ws, self._ws = self._ws, None
        if ws is not None:
            await ws.close()
        logger.info("Live feed disconnected")

    async def reconnect(self) -> None:
        """Start over with a fresh retry budget."""
        self._reconnect_attempts = 0
        await self.disconnect()
        await asyncio.sleep(RECONNECT_PAUSE)
        await self.connect()

    async def aclose(self) -> None:
        """Disconnect and release the HTTP client session."""
        await self.disconnect()
        if self._http is not None:
            await self._http.close()
            self._http = None

    # --- Internals ---

    async def _open(self) -> Any:
        if self._ws_connect is not None:
            return await self._ws_connect(self.url)
        if self._http is None or self._http.closed:
            self._http = aiohttp.ClientSession()
        return await self._http.ws_connect(self.url)

    async def _read_loop(self, ws: Any) -> None:
        try:
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    self._handle_message(msg.data)
                elif msg.type == aiohttp.WSMsgType.ERROR:
                    logger.warning(f"Live feed error: {ws.exception()}")
                    self._error = "WebSocket connection error"
                    break
        except (aiohttp.ClientError, OSError) as e:
            logger.warning(f"Live feed connection error: {e}")
            self._error = "WebSocket connection error"

        # Closed by the peer or by a network failure, not by disconnect()
        if self._ws is ws and self._state is FeedState.CONNECTED:
            self._ws = None
            self._reader = None
            logger.info("Live feed closed by gateway")
            self._handle_connection_lost()

    def _handle_message(self, raw: str) -> None:
        try:
            data = process_sensor_payload(json.loads(raw))
        except (json.JSONDecodeError, MalformedPayloadError) as e:
            logger.error(f"Failed to parse live feed message: {e}")
            self._error = "Failed to parse sensor data"
            return

        self._reading = data
        for callback in list(self._subscribers):
            try:
                callback(data)
            except Exception:
                logger.exception("Live feed subscriber failed")

    def _handle_connection_lost(self) -> None:
        self._state = FeedState.DISCONNECTED

        if self._reconnect_attempts < self.max_reconnect_attempts:
            self._reconnect_attempts += 1
            logger.info(
                f"Reconnecting to live feed "
                f"({self._reconnect_attempts}/{self.max_reconnect_attempts})..."
            )
            self._cancel_reconnect_timer()
            self._reconnect_timer = asyncio.create_task(self._reconnect_later())
        else:
            self._error = (
                f"Failed to connect after {self.max_reconnect_attempts} attempts. "
                "Please check the gateway connection."
            )
            logger.error(self._error)

    async def _reconnect_later(self) -> None:
        await asyncio.sleep(self.reconnect_interval)
        self._reconnect_timer = None
        await self.connect()

    def _cancel_reconnect_timer(self) -> None:
        timer, self._reconnect_timer = self._reconnect_timer, None
        if timer is not None and not timer.done() and timer is not asyncio.current_task():
            timer.cancel()

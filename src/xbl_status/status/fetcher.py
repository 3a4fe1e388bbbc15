"""One-shot Xbox LIVE status fetch over the kvchecker WebSocket feed."""

from __future__ import annotations

import asyncio
import logging

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosedOK, InvalidHandshake, InvalidURI, WebSocketException
from websockets.protocol import State
from websockets.typing import Origin

from xbl_status.config.models import FetcherSettings
from xbl_status.status.classify import apply_message
from xbl_status.status.models import FailureKind, FetchResult

logger = logging.getLogger(__name__)

CLOSE_REASON = "Closing connection"


def _signal(done: asyncio.Future[bool], value: bool) -> None:
    """Resolve *done* once; later signals are ignored."""
    if not done.done():
        done.set_result(value)


class StatusFetcher:
    """Connects, reads one status message, closes, and reports a FetchResult.

    ``fetch_status`` never raises: every failure is recorded on the returned
    result. Connect and receive share one deadline, so a slow handshake
    leaves less time for the message to arrive.
    """

    def __init__(self, settings: FetcherSettings | None = None) -> None:
        self._settings = settings or FetcherSettings()

    async def fetch_status(self, timeout_ms: int | None = None) -> FetchResult:
        result = FetchResult()
        if timeout_ms is None:
            timeout_ms = self._settings.timeout_ms

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000

        ws = await self._connect(deadline, timeout_ms, result)
        if ws is None:
            return result

        done: asyncio.Future[bool] = loop.create_future()
        receiver = asyncio.create_task(
            self._receive(ws, deadline, result, done),
            name="xbl-status-receiver",
        )
        try:
            try:
                await done
            except Exception as exc:
                result.fail(FailureKind.UNEXPECTED, f"Error while waiting for WebSocket data: {exc}")
            finally:
                if not receiver.done():
                    receiver.cancel()
                await asyncio.gather(receiver, return_exceptions=True)
        finally:
            await self._close(ws, result)

        if result.success:
            logger.info("Fetched %d service status(es) from %s", len(result.services), self._settings.url)
        else:
            logger.warning("Status fetch failed (%s): %s", result.error_kind, result.error_message)
        return result

    def fetch_status_sync(self, timeout_ms: int | None = None) -> FetchResult:
        return asyncio.run(self.fetch_status(timeout_ms=timeout_ms))

    async def _connect(
        self,
        deadline: float,
        timeout_ms: int,
        result: FetchResult,
    ) -> ClientConnection | None:
        s = self._settings
        logger.debug("Connecting to %s (origin=%s)", s.url, s.origin)
        try:
            async with asyncio.timeout_at(deadline):
                return await connect(
                    s.url,
                    origin=Origin(s.origin),
                    open_timeout=None,
                    close_timeout=s.close_timeout,
                    max_size=s.max_message_size,
                )
        except TimeoutError:
            result.fail(
                FailureKind.CONNECTION,
                f"Failed to connect to WebSocket: timed out after {timeout_ms}ms",
            )
        except (OSError, InvalidHandshake, InvalidURI) as exc:
            result.fail(FailureKind.CONNECTION, f"Failed to connect to WebSocket: {exc}")
        except Exception as exc:
            result.fail(FailureKind.CONNECTION, f"Unexpected error during WebSocket connection: {exc}")
        logger.warning("Connection to %s failed: %s", s.url, result.error_message)
        return None

    async def _receive(
        self,
        ws: ClientConnection,
        deadline: float,
        result: FetchResult,
        done: asyncio.Future[bool],
    ) -> None:
        """Read until the first text message has been classified."""
        try:
            async with asyncio.timeout_at(deadline):
                while ws.state is State.OPEN:
                    message = await ws.recv()
                    if isinstance(message, bytes):
                        logger.debug("Skipping %d-byte binary message", len(message))
                        continue
                    _signal(done, apply_message(message, result, self._settings.operational_color))
                    return
            result.fail(FailureKind.PROTOCOL_READ, "Connection closed before a status message was received.")
        except TimeoutError:
            result.fail(FailureKind.TIMEOUT, "Operation timed out while receiving data.")
        except ConnectionClosedOK:
            result.fail(FailureKind.PROTOCOL_READ, "Connection closed before a status message was received.")
        except WebSocketException as exc:
            result.fail(FailureKind.PROTOCOL_READ, f"WebSocket error while receiving data: {exc}")
        except Exception as exc:
            logger.exception("Unexpected error reading from %s", self._settings.url)
            result.fail(FailureKind.UNEXPECTED, f"Unexpected error while reading data: {exc}")
        _signal(done, False)

    async def _close(self, ws: ClientConnection, result: FetchResult) -> None:
        # A close failure flips an already successful result to failed.
        try:
            if ws.state is State.OPEN:
                await ws.close(code=1000, reason=CLOSE_REASON)
        except Exception as exc:
            result.fail(FailureKind.CLOSE, f"Error closing WebSocket: {exc}")


async def fetch_status(
    timeout_ms: int | None = None,
    settings: FetcherSettings | None = None,
) -> FetchResult:
    """Fetch the current Xbox LIVE service status once."""
    return await StatusFetcher(settings).fetch_status(timeout_ms=timeout_ms)

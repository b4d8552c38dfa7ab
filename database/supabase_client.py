"""Supabase implementation of TableClient.

Realtime channels are only available on the async Supabase client, so the
client runs on a private asyncio loop in a daemon thread. The public methods
are synchronous: they hand a coroutine to that loop and block until it
finishes, which is why callers run them off the Tk main thread (see
ui.tk_runner.TkTaskRunner).
"""
import asyncio
import itertools
import logging
import threading
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from database.errors import BackendError, BackendUnavailableError
from database.table_client import Disposer, Row
from utils.app_config import BackendSettings

logger = logging.getLogger(__name__)

_CALL_TIMEOUT = 30


class SupabaseTableClient:
    def __init__(self, client: AsyncClient, loop: asyncio.AbstractEventLoop,
                 thread: threading.Thread):
        self._client = client
        self._loop = loop
        self._thread = thread
        self._channel_ids = itertools.count(1)
        self._closed = False

    # ── Construction ──────────────────────────────────────────────────────────
    @classmethod
    def connect(cls, settings: BackendSettings) -> "SupabaseTableClient":
        if not settings.is_complete:
            raise BackendUnavailableError(
                "Supabase URL and key are not configured."
            )
        loop = asyncio.new_event_loop()
        thread = threading.Thread(
            target=loop.run_forever, name="supabase-loop", daemon=True
        )
        thread.start()
        future = asyncio.run_coroutine_threadsafe(
            acreate_client(settings.url, settings.key), loop
        )
        try:
            client = future.result(timeout=_CALL_TIMEOUT)
        except Exception as e:
            loop.call_soon_threadsafe(loop.stop)
            raise BackendUnavailableError(f"Could not create Supabase client: {e}") from e
        logger.info("Connected to Supabase at %s", settings.url)
        return cls(client, loop, thread)

    # ── TableClient ───────────────────────────────────────────────────────────
    def select(self, table: str, columns: str = "*", order_by: str | None = None,
               descending: bool = False, limit: int | None = None) -> list[Row]:
        async def run():
            query = self._client.table(table).select(columns)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.limit(limit)
            return await query.execute()

        response = self._call(run())
        return list(response.data or [])

    def insert(self, table: str, row: Row) -> Row:
        async def run():
            return await self._client.table(table).insert(row).execute()

        response = self._call(run())
        data = response.data or []
        return data[0] if data else dict(row)

    def delete(self, table: str, column: str, value: Any) -> None:
        async def run():
            return await self._client.table(table).delete().eq(column, value).execute()

        self._call(run())

    def subscribe(self, table: str, on_change: Callable[[], None]) -> Disposer:
        name = f"{table}_updates_{next(self._channel_ids)}"

        def handle(_payload):
            try:
                on_change()
            except Exception:
                logger.exception("Change handler for %s failed", table)

        async def open_channel():
            channel = self._client.channel(name)
            channel.on_postgres_changes("*", schema="public", table=table, callback=handle)
            await channel.subscribe()
            return channel

        channel = self._call(open_channel())
        released = False

        def dispose():
            nonlocal released
            if released or self._closed:
                released = True
                return
            released = True
            self._schedule(self._client.remove_channel(channel), f"remove channel {name}")

        return dispose

    def close(self):
        """Drop all channels and stop the loop without waiting on the network."""
        if self._closed:
            return
        self._closed = True

        async def shutdown():
            try:
                await asyncio.wait_for(self._client.remove_all_channels(), _CALL_TIMEOUT)
            except Exception as e:
                logger.warning("Error while closing realtime channels: %s", e)
            finally:
                self._loop.stop()

        asyncio.run_coroutine_threadsafe(shutdown(), self._loop)

    # ── Internals ─────────────────────────────────────────────────────────────
    def _call(self, coro):
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout=_CALL_TIMEOUT)
        except APIError as e:
            raise BackendError(e.message or str(e), code=e.code) from e
        except FutureTimeoutError as e:
            future.cancel()
            raise BackendError("The backend did not respond in time.") from e
        except (httpx.HTTPError, OSError, RuntimeError) as e:
            raise BackendError(str(e) or type(e).__name__) from e

    def _schedule(self, coro, what: str):
        """Run `coro` on the loop without blocking the caller; failures are logged."""
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)

        def report(done):
            if not done.cancelled() and done.exception() is not None:
                logger.warning("Could not %s: %s", what, done.exception())

        future.add_done_callback(report)

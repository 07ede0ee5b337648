import asyncio
import logging
import queue
import threading
from concurrent.futures import Future
from typing import Callable, Coroutine

logger = logging.getLogger(__name__)


class BackgroundLoop:
    """An asyncio event loop running on a daemon thread, so network and decode work stays off the UI thread."""

    def __init__(self, name: str = "pokeviewer-io"):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def _run(self):
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def start(self) -> "BackgroundLoop":
        self._thread.start()
        logger.debug(f"Background loop started on thread {self._thread.name}")
        return self

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    def submit(self, coro: Coroutine) -> Future:
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def stop(self, timeout: float = 5.0):
        if self._thread.is_alive():
            self.loop.call_soon_threadsafe(self.loop.stop)
            self._thread.join(timeout)
        if not self._thread.is_alive() and not self.loop.is_closed():
            self.loop.close()
        logger.debug("Background loop stopped")


class QueueDispatcher:
    """
    Collects state updates produced on worker threads. The UI thread calls
    ``drain`` (Tk polls it with ``after``) and the updates run there, in order.
    """

    def __init__(self):
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def __call__(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    def drain(self) -> int:
        handled = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return handled
            fn()
            handled += 1

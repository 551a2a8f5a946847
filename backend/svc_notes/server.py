"""
svc-notes: Process Lifecycle
==============================

What:  Runs the uvicorn listener and orchestrates graceful shutdown.
How:   ServiceLifecycle owns SIGINT/SIGTERM (uvicorn's own signal capture
       is disabled in NotesServer) and drives an explicit state machine.
Who:   `python -m svc_notes` and the `svc-notes` console script call main().

State Machine:
    STARTING ──bind ok──▶ LISTENING ──signal──▶ DRAINING ──drained──▶ STOPPED
                                                    │
                                                    └──timeout──▶ exit 1

    DRAINING: uvicorn stops accepting connections and waits for in-flight
    requests; the app lifespan then closes the persistence gateway. Both
    must finish within `shutdown_timeout` seconds, otherwise the process
    exits with status 1 without waiting any further.

Exit codes:
    0  graceful shutdown
    1  drain did not finish in time (or the server stopped unexpectedly)
    2  configuration error, no listener was bound
"""

import asyncio
import contextlib
import logging
import os
import signal
import sys
from enum import Enum
from typing import Callable, Optional

import uvicorn

from svc_notes.config import Settings, load_settings
from svc_notes.exceptions import ConfigurationError
from svc_notes.main import create_app, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TIMEOUT = 1
EXIT_CONFIG = 2


class LifecycleState(Enum):
    STARTING = "starting"
    LISTENING = "listening"
    DRAINING = "draining"
    STOPPED = "stopped"


class NotesServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to ServiceLifecycle."""

    def __init__(
        self,
        config: uvicorn.Config,
        on_listening: Optional[Callable[[int], None]] = None,
    ):
        super().__init__(config)
        self._on_listening = on_listening

    # uvicorn < 0.29
    def install_signal_handlers(self) -> None:
        pass

    # uvicorn >= 0.29
    @contextlib.contextmanager
    def capture_signals(self):
        yield

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self._on_listening is not None:
            self._on_listening(self.config.port)


class ServiceLifecycle:
    """
    Drives one server through STARTING → LISTENING → DRAINING → STOPPED.

    `server` is anything with an awaitable `serve()` and a writable
    `should_exit` flag; NotesServer in production.
    """

    def __init__(self, server, shutdown_timeout: float = 10.0):
        self.server = server
        self.shutdown_timeout = shutdown_timeout
        self.state = LifecycleState.STARTING
        self._shutdown_requested = asyncio.Event()

    def mark_listening(self, port: int) -> None:
        self.state = LifecycleState.LISTENING
        logger.info("Notes service listening on port %d", port)

    def request_shutdown(self, sig: Optional[signal.Signals] = None) -> None:
        """Enter DRAINING. Signals received while draining are ignored."""
        if self.state in (LifecycleState.DRAINING, LifecycleState.STOPPED):
            logger.warning("Shutdown already in progress; ignoring %s", sig.name if sig else "request")
            return
        logger.info("Shutting down server (%s)...", sig.name if sig else "requested")
        self.state = LifecycleState.DRAINING
        self.server.should_exit = True
        self._shutdown_requested.set()

    def install_signal_handlers(self) -> None:
        if sys.platform == "win32":
            return
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.request_shutdown, sig)

    async def run(self) -> int:
        """Serve until shut down; returns the process exit code."""
        serve_task = asyncio.create_task(self.server.serve())
        shutdown_wait = asyncio.create_task(self._shutdown_requested.wait())

        await asyncio.wait({serve_task, shutdown_wait}, return_when=asyncio.FIRST_COMPLETED)

        if not self._shutdown_requested.is_set():
            shutdown_wait.cancel()
            self.state = LifecycleState.STOPPED
            if serve_task.exception() is not None:
                logger.error("Server crashed", exc_info=serve_task.exception())
            else:
                logger.error("Server stopped without a shutdown request")
            return EXIT_TIMEOUT

        # Drain completion races the timeout
        done, _ = await asyncio.wait({serve_task}, timeout=self.shutdown_timeout)
        if serve_task not in done:
            logger.error(
                "Graceful shutdown exceeded %.1fs; forcing exit", self.shutdown_timeout
            )
            serve_task.cancel()
            return EXIT_TIMEOUT

        self.state = LifecycleState.STOPPED
        if serve_task.exception() is not None:
            logger.error("Error during shutdown", exc_info=serve_task.exception())
            return EXIT_TIMEOUT
        logger.info("Shutdown complete.")
        return EXIT_OK


async def serve(settings: Settings) -> int:
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        lifespan="on",
    )
    lifecycle: Optional[ServiceLifecycle] = None

    def on_listening(port: int) -> None:
        lifecycle.mark_listening(port)

    server = NotesServer(config, on_listening=on_listening)
    lifecycle = ServiceLifecycle(server, shutdown_timeout=settings.shutdown_timeout)
    lifecycle.install_signal_handlers()

    code = await lifecycle.run()
    if code == EXIT_TIMEOUT:
        # A stuck connection or close() would also block loop teardown
        logging.shutdown()
        os._exit(code)
    return code


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        setup_logging()
        logger.error("Configuration error: %s", exc.message)
        return EXIT_CONFIG

    setup_logging(settings.log_level)
    return asyncio.run(serve(settings))

"""Asynchronous handling of shutdown and reload signals."""

from __future__ import annotations

import asyncio
import enum
import logging
import signal
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SignalType(enum.Enum):
    """Kinds of requests a signal can carry."""

    SHUTDOWN = "shutdown"
    RELOAD = "reload"


SignalSender = Callable[[SignalType], None]


def _listened_signals() -> list[int]:
    signals = [signal.SIGTERM, signal.SIGINT]
    if hasattr(signal, "SIGHUP"):
        signals.append(signal.SIGHUP)
    return signals


class SignalHandler:
    """Turns SIGTERM/SIGINT into shutdown requests and SIGHUP into reload requests.

    If a sender is given, every request is also passed to it as a SignalType.
    """

    def __init__(self, sender: Optional[SignalSender] = None) -> None:
        self._shutdown = threading.Event()
        self._sender = sender

    @property
    def shutdown_flag(self) -> threading.Event:
        """The event set once shutdown has been requested."""
        return self._shutdown

    def handle_signal(self, signum: int) -> bool:
        """Act on one signal; return True when listening should stop."""
        if signum in (signal.SIGTERM, signal.SIGINT):
            logger.info("Received shutdown signal (%s), initiating graceful shutdown", signum)
            self._shutdown.set()
            if self._sender is not None:
                try:
                    self._sender(SignalType.SHUTDOWN)
                except Exception:  # noqa: BLE001 - delivery failure must not block shutdown
                    logger.debug("Shutdown notification could not be delivered")
            return True
        if signum == getattr(signal, "SIGHUP", None):
            logger.info("Received SIGHUP signal, reloading configuration")
            if self._sender is None:
                logger.warning("No signal receiver configured, reload request ignored")
            else:
                try:
                    self._sender(SignalType.RELOAD)
                except Exception as exc:  # noqa: BLE001
                    logger.warning("Failed to send reload signal: %s", exc)
                else:
                    logger.info("Configuration reload signal sent")
            return False
        logger.warning("Received unexpected signal: %s", signum)
        return False

    async def listen_for_signals(self) -> None:
        """Handle signals on the running loop until a shutdown signal arrives."""
        loop = asyncio.get_running_loop()
        received: asyncio.Queue[int] = asyncio.Queue()
        signals = _listened_signals()
        for signum in signals:
            loop.add_signal_handler(signum, received.put_nowait, signum)
        logger.info("Signal handler initialized, listening for SIGTERM, SIGINT, SIGHUP")
        try:
            while not self.handle_signal(await received.get()):
                pass
        finally:
            for signum in signals:
                loop.remove_signal_handler(signum)

    def is_shutdown_requested(self) -> bool:
        return self._shutdown.is_set()
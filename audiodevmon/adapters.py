"""Production implementations of the file-system and system-service interfaces."""

from __future__ import annotations

import logging
import os
import signal
import threading
from pathlib import Path
from types import FrameType

from audiodevmon.interfaces import FileSystemInterface, PathType, SystemServiceInterface

logger = logging.getLogger(__name__)

_EVENT_LOOP_TICK_MS = 100


class StandardFileSystem(FileSystemInterface):
    """File operations on the real file system."""

    def read_config_file(self, path: PathType) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to read config file: {exc}") from exc

    def write_config_file(self, path: PathType, content: str) -> None:
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to write config file: {exc}") from exc

    def config_file_exists(self, path: PathType) -> bool:
        return Path(path).exists()

    def create_config_dir(self, path: PathType) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OSError(f"Failed to create config directory: {exc}") from exc

    def get_config_modified_time(self, path: PathType) -> float:
        try:
            return Path(path).stat().st_mtime
        except OSError as exc:
            raise OSError(f"Failed to get file metadata: {exc}") from exc


class PosixSystemService(SystemServiceInterface):
    """Signal-driven service control for a POSIX process.

    SIGTERM and SIGINT request termination; SIGHUP requests a configuration reload.
    """

    def __init__(self) -> None:
        self._stop_requested = threading.Event()
        self._reload_requested = threading.Event()
        self._reload_lock = threading.Lock()

    def handle_signal(self, signum: int, frame: FrameType | None = None) -> None:
        """Record the effect of a received signal."""
        if signum in (signal.SIGTERM, signal.SIGINT):
            logger.info("Received termination signal %s", signum)
            self._stop_requested.set()
        elif signum == getattr(signal, "SIGHUP", None):
            logger.info("Received SIGHUP, configuration reload requested")
            self._reload_requested.set()
        else:
            logger.warning("Received unexpected signal: %s", signum)

    def register_signal_handlers(self) -> None:
        logger.info("Registering signal handlers for SIGTERM, SIGINT, SIGHUP")
        signals = [signal.SIGTERM, signal.SIGINT]
        if hasattr(signal, "SIGHUP"):
            signals.append(signal.SIGHUP)
        for signum in signals:
            signal.signal(signum, self.handle_signal)
        logger.info("Signal handlers registered successfully")

    def run_event_loop(self) -> None:
        self.sleep_ms(_EVENT_LOOP_TICK_MS)

    def should_continue_running(self) -> bool:
        return not self._stop_requested.is_set()

    def sleep_ms(self, milliseconds: int) -> None:
        # Waiting on the stop event lets a termination request cut the sleep short.
        self._stop_requested.wait(milliseconds / 1000)

    def get_process_id(self) -> int:
        return os.getpid()

    def is_config_reload_requested(self) -> bool:
        with self._reload_lock:
            requested = self._reload_requested.is_set()
            self._reload_requested.clear()
        return requested
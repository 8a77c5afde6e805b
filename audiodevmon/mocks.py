"""In-memory implementations of the system interfaces, controllable from tests."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from audiodevmon.interfaces import (
    AudioDevice,
    AudioSystemInterface,
    DeviceChangeCallback,
    FileSystemInterface,
    PathType,
    SystemServiceInterface,
)

SET_DEFAULT_OUTPUT = "set_default_output"
SET_DEFAULT_INPUT = "set_default_input"

MOCK_PROCESS_ID = 12345
# Modification time reported for files whose time was never recorded.
UNTRACKED_MODIFIED_TIME = 1000.0


class MockError(RuntimeError):
    """A failure the mock was told to produce."""


class MockAudioSystem(AudioSystemInterface):
    """Audio system holding its devices in memory and recording switch requests."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.devices: list[AudioDevice] = []
        self.default_output: AudioDevice | None = None
        self.default_input: AudioDevice | None = None
        self.device_change_callbacks: list[DeviceChangeCallback] = []
        self.set_device_calls: list[tuple[str, str]] = []
        self.should_fail_enumeration = False
        self.should_fail_set_device = False

    def add_device(self, device: AudioDevice) -> None:
        """Simulate a device being connected."""
        with self._lock:
            self.devices.append(device)
        self.trigger_device_change()

    def remove_device(self, device_id: str) -> None:
        """Simulate disconnecting every device whose id or name is device_id."""
        with self._lock:
            self.devices = [
                d for d in self.devices if d.id != device_id and d.name != device_id
            ]
        self.trigger_device_change()

    def set_mock_default_output(self, device: AudioDevice | None) -> None:
        with self._lock:
            self.default_output = device
        self.trigger_device_change()

    def set_mock_default_input(self, device: AudioDevice | None) -> None:
        with self._lock:
            self.default_input = device
        self.trigger_device_change()

    def trigger_device_change(self) -> None:
        """Run every registered device change callback."""
        with self._lock:
            callbacks = list(self.device_change_callbacks)
        for callback in callbacks:
            callback()

    def clear_set_device_calls(self) -> None:
        with self._lock:
            self.set_device_calls.clear()

    def _calls_of(self, call_type: str) -> list[str]:
        with self._lock:
            return [device_id for device_id, kind in self.set_device_calls if kind == call_type]

    def output_switch_calls(self) -> list[str]:
        """Device ids passed to set_default_output_device, in order."""
        return self._calls_of(SET_DEFAULT_OUTPUT)

    def input_switch_calls(self) -> list[str]:
        """Device ids passed to set_default_input_device, in order."""
        return self._calls_of(SET_DEFAULT_INPUT)

    def _find(self, device_id: str) -> AudioDevice | None:
        return next(
            (d for d in self.devices if d.id == device_id or d.name == device_id),
            None,
        )

    def enumerate_devices(self) -> list[AudioDevice]:
        with self._lock:
            if self.should_fail_enumeration:
                raise MockError("Mock enumeration failure")
            return list(self.devices)

    def get_default_output_device(self) -> AudioDevice | None:
        with self._lock:
            return self.default_output

    def get_default_input_device(self) -> AudioDevice | None:
        with self._lock:
            return self.default_input

    def set_default_output_device(self, device_id: str) -> None:
        with self._lock:
            if self.should_fail_set_device:
                raise MockError("Mock set device failure")
            self.set_device_calls.append((device_id, SET_DEFAULT_OUTPUT))
            device = self._find(device_id)
            if device is not None:
                self.default_output = device

    def set_default_input_device(self, device_id: str) -> None:
        with self._lock:
            if self.should_fail_set_device:
                raise MockError("Mock set device failure")
            self.set_device_calls.append((device_id, SET_DEFAULT_INPUT))
            device = self._find(device_id)
            if device is not None:
                self.default_input = device

    def add_device_change_listener(self, callback: DeviceChangeCallback) -> None:
        with self._lock:
            self.device_change_callbacks.append(callback)

    def is_device_available(self, device_id: str) -> bool:
        with self._lock:
            return self._find(device_id) is not None


class MockFileSystem(FileSystemInterface):
    """File system kept in a dictionary, recording every operation."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.files: dict[Path, str] = {}
        self.modification_times: dict[Path, float] = {}
        self.read_calls: list[Path] = []
        self.write_calls: list[tuple[Path, str]] = []
        self.directory_creation_calls: list[Path] = []
        self.should_fail_read = False
        self.should_fail_write = False
        self.should_fail_create_dir = False

    def add_file(self, path: PathType, content: str) -> None:
        """Store a file and stamp it with the current time."""
        key = Path(path)
        with self._lock:
            self.files[key] = content
            self.modification_times[key] = time.time()

    def remove_file(self, path: PathType) -> None:
        with self._lock:
            self.files.pop(Path(path), None)

    def clear_call_history(self) -> None:
        with self._lock:
            self.read_calls.clear()
            self.write_calls.clear()
            self.directory_creation_calls.clear()

    def file_exists(self, path: PathType) -> bool:
        with self._lock:
            return Path(path) in self.files

    def read_config_file(self, path: PathType) -> str:
        key = Path(path)
        with self._lock:
            self.read_calls.append(key)
            if self.should_fail_read:
                raise MockError("Mock read failure")
            try:
                return self.files[key]
            except KeyError:
                raise FileNotFoundError(f"File not found: {key}") from None

    def write_config_file(self, path: PathType, content: str) -> None:
        key = Path(path)
        with self._lock:
            self.write_calls.append((key, content))
            if self.should_fail_write:
                raise MockError("Mock write failure")
            self.files[key] = content
            self.modification_times[key] = time.time()

    def config_file_exists(self, path: PathType) -> bool:
        return self.file_exists(path)

    def create_config_dir(self, path: PathType) -> None:
        with self._lock:
            self.directory_creation_calls.append(Path(path))
            if self.should_fail_create_dir:
                raise MockError("Mock create directory failure")

    def get_config_modified_time(self, path: PathType) -> float:
        key = Path(path)
        with self._lock:
            if key not in self.files:
                raise FileNotFoundError(f"File not found: {key}")
            return self.modification_times.get(key, UNTRACKED_MODIFIED_TIME)


class MockSystemService(SystemServiceInterface):
    """Service control that never sleeps and counts what it was asked to do."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.should_run = True
        self.signal_handlers_registered = False
        self.event_loop_calls = 0
        self.sleep_calls: list[int] = []
        self.should_fail_signal_registration = False
        self.should_fail_event_loop = False

    def stop_service(self) -> None:
        """Simulate receipt of a termination signal."""
        self.should_run = False

    def start_service(self) -> None:
        self.should_run = True

    def reset(self) -> None:
        """Return every counter and switch to its initial state."""
        with self._lock:
            self.should_run = True
            self.signal_handlers_registered = False
            self.event_loop_calls = 0
            self.sleep_calls.clear()
            self.should_fail_signal_registration = False
            self.should_fail_event_loop = False

    def register_signal_handlers(self) -> None:
        if self.should_fail_signal_registration:
            raise MockError("Mock signal registration failure")
        self.signal_handlers_registered = True

    def run_event_loop(self) -> None:
        if self.should_fail_event_loop:
            raise MockError("Mock event loop failure")
        with self._lock:
            self.event_loop_calls += 1

    def should_continue_running(self) -> bool:
        return self.should_run

    def sleep_ms(self, milliseconds: int) -> None:
        with self._lock:
            self.sleep_calls.append(milliseconds)

    def get_process_id(self) -> int:
        return MOCK_PROCESS_ID

    def is_config_reload_requested(self) -> bool:
        return False
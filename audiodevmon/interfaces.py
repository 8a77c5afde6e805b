"""Core device types and the abstract interfaces the service depends on."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from os import PathLike
from typing import Callable, Union

PathType = Union[str, "PathLike[str]"]
DeviceChangeCallback = Callable[[], None]


class DeviceType(enum.Enum):
    """Direction of an audio device."""

    INPUT = "Input"
    OUTPUT = "Output"
    INPUT_OUTPUT = "InputOutput"

    def __str__(self) -> str:
        return self.value


@dataclass
class AudioDevice:
    """An audio device as reported by the audio system."""

    id: str
    name: str
    device_type: DeviceType
    is_available: bool = True
    is_default: bool = False

    def __str__(self) -> str:
        return f"{self.name} ({self.device_type})"


class AudioSystemInterface(ABC):
    """Operations on the system's audio devices."""

    @abstractmethod
    def enumerate_devices(self) -> list[AudioDevice]:
        """Return all available audio devices."""

    @abstractmethod
    def get_default_output_device(self) -> AudioDevice | None:
        """Return the current default output device, if any."""

    @abstractmethod
    def get_default_input_device(self) -> AudioDevice | None:
        """Return the current default input device, if any."""

    @abstractmethod
    def set_default_output_device(self, device_id: str) -> None:
        """Make the given device the system default output."""

    @abstractmethod
    def set_default_input_device(self, device_id: str) -> None:
        """Make the given device the system default input."""

    @abstractmethod
    def add_device_change_listener(self, callback: DeviceChangeCallback) -> None:
        """Register a callback run when devices or defaults change."""

    @abstractmethod
    def is_device_available(self, device_id: str) -> bool:
        """Tell whether a device with this id or name is present."""


class FileSystemInterface(ABC):
    """File operations needed for configuration handling."""

    @abstractmethod
    def read_config_file(self, path: PathType) -> str:
        """Return the whole content of a configuration file."""

    @abstractmethod
    def write_config_file(self, path: PathType, content: str) -> None:
        """Write configuration content to a file."""

    @abstractmethod
    def config_file_exists(self, path: PathType) -> bool:
        """Tell whether a configuration file exists."""

    @abstractmethod
    def create_config_dir(self, path: PathType) -> None:
        """Create the directory tree for configuration files."""

    @abstractmethod
    def get_config_modified_time(self, path: PathType) -> float:
        """Return the file's last modification time in seconds since the epoch."""


class SystemServiceInterface(ABC):
    """Process-level services: signals, event loop, sleeping."""

    @abstractmethod
    def register_signal_handlers(self) -> None:
        """Install handlers for termination and reload signals."""

    @abstractmethod
    def run_event_loop(self) -> None:
        """Run one iteration of the event loop."""

    @abstractmethod
    def should_continue_running(self) -> bool:
        """Return False once a termination request has been received."""

    @abstractmethod
    def sleep_ms(self, milliseconds: int) -> None:
        """Sleep for the given number of milliseconds."""

    @abstractmethod
    def get_process_id(self) -> int:
        """Return the id of the running process."""

    @abstractmethod
    def is_config_reload_requested(self) -> bool:
        """Return True once per reload request, False otherwise."""
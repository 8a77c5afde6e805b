"""User notifications about audio device events."""

from __future__ import annotations

import enum
import logging
import subprocess
import threading
from abc import ABC, abstractmethod

from audiodevmon.interfaces import AudioDevice, DeviceType

logger = logging.getLogger(__name__)

_DEVICE_ICONS = {
    DeviceType.INPUT: "🎤",
    DeviceType.OUTPUT: "🔊",
    DeviceType.INPUT_OUTPUT: "🎧",
}

_DEVICE_LABELS = {
    DeviceType.INPUT: "🎤 Input",
    DeviceType.OUTPUT: "🔊 Output",
    DeviceType.INPUT_OUTPUT: "🎧 Input/Output",
}


class NotificationError(RuntimeError):
    """A notification could not be delivered."""


class SwitchReason(enum.Enum):
    """Why the active device was switched."""

    HIGHER_PRIORITY = "higher_priority"
    PREVIOUS_UNAVAILABLE = "previous_unavailable"
    MANUAL = "manual"


class NotificationSender(ABC):
    """Delivers a titled message to the user."""

    @abstractmethod
    def send(self, title: str, body: str) -> None:
        """Deliver one notification; raise NotificationError on failure."""


class OsascriptNotificationSender(NotificationSender):
    """Shows notifications through the system's osascript tool."""

    def send(self, title: str, body: str) -> None:
        escaped_body = body.replace('"', '\\"')
        escaped_title = title.replace('"', '\\"')
        script = (
            f'display notification "{escaped_body}" '
            f'with title "{escaped_title}" subtitle ""'
        )
        try:
            result = subprocess.run(
                ["osascript", "-e", script],
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            raise NotificationError(f"osascript failed: {exc}") from exc
        if result.returncode != 0:
            raise NotificationError(f"osascript failed: {result.stderr}")


class RecordingNotificationSender(NotificationSender):
    """Keeps notifications in memory instead of showing them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.sent_notifications: list[tuple[str, str]] = []

    def send(self, title: str, body: str) -> None:
        logger.debug("Recorded notification: %s - %s", title, body)
        with self._lock:
            self.sent_notifications.append((title, body))

    def clear(self) -> None:
        with self._lock:
            self.sent_notifications.clear()


class NotificationManager:
    """Decides which device events become notifications and sends them."""

    def __init__(
        self,
        sender: NotificationSender | None = None,
        *,
        show_device_availability: bool = False,
        show_switching_actions: bool = True,
    ) -> None:
        self.sender = sender if sender is not None else OsascriptNotificationSender()
        self.show_device_availability = show_device_availability
        self.show_switching_actions = show_switching_actions
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        logger.info("Notifications %s", "enabled" if value else "disabled")

    def _availability_allowed(self) -> bool:
        return self._enabled and self.show_device_availability

    def _switching_allowed(self) -> bool:
        return self._enabled and self.show_switching_actions

    def _send(self, title: str, body: str) -> None:
        logger.debug("Sending notification: %s - %s", title, body)
        self.sender.send(title, body)
        logger.debug("Successfully sent notification: %s", title)

    def device_connected(self, device: AudioDevice) -> None:
        """Announce that a device became available."""
        if not self._availability_allowed():
            return
        icon = _DEVICE_ICONS[device.device_type]
        self._send("Audio Device Connected", f"{icon} {device.name} is now available")
        logger.info("Sent device connected notification for: %s", device.name)

    def device_disconnected(self, device: AudioDevice) -> None:
        """Announce that a device went away."""
        if not self._availability_allowed():
            return
        icon = _DEVICE_ICONS[device.device_type]
        self._send(
            "Audio Device Disconnected", f"{icon} {device.name} is no longer available"
        )
        logger.info("Sent device disconnected notification for: %s", device.name)

    def device_switched(self, device: AudioDevice, reason: SwitchReason) -> None:
        """Announce that the active device changed."""
        if not self._switching_allowed():
            return
        label = _DEVICE_LABELS[device.device_type]
        if reason is SwitchReason.HIGHER_PRIORITY:
            body = f"{label} switched to {device.name} (higher priority)"
        elif reason is SwitchReason.PREVIOUS_UNAVAILABLE:
            body = f"{label} switched to {device.name} (previous device unavailable)"
        else:
            body = f"{label} manually switched to {device.name}"
        self._send("Audio Device Switched", body)
        logger.info("Sent device switched notification: %s -> %s", label, device.name)

    def switch_failed(self, device_name: str, error: str) -> None:
        """Announce that switching to a device failed."""
        if not self._switching_allowed():
            return
        self._send(
            "Audio Device Switch Failed", f"Failed to switch to {device_name}: {error}"
        )
        logger.warning("Sent switch failed notification for: %s", device_name)

    def test_notification(self) -> None:
        """Send a fixed notification regardless of the enabled settings."""
        logger.info("Sending test notification...")
        try:
            self.sender.send(
                "Audio Device Monitor", "Notification system is working correctly!"
            )
        except Exception as exc:
            logger.error("Failed to send notification: %s", exc)
            logger.error(
                "Possible causes: Do Not Disturb, restricted osascript, "
                "or system-level notification restrictions"
            )
            raise NotificationError(f"Failed to send notification: {exc}") from exc
        logger.info("Test notification sent successfully")
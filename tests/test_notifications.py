import subprocess
from unittest import mock

import pytest

from audiodevmon.interfaces import AudioDevice, DeviceType
from audiodevmon.notifications import (
    NotificationError,
    NotificationManager,
    NotificationSender,
    OsascriptNotificationSender,
    RecordingNotificationSender,
    SwitchReason,
)


def make_manager(availability, switching):
    sender = RecordingNotificationSender()
    manager = NotificationManager(
        sender,
        show_device_availability=availability,
        show_switching_actions=switching,
    )
    return manager, sender


def device(name, device_type=DeviceType.OUTPUT):
    return AudioDevice(id=f"id-{len(name)}", name=name, device_type=device_type)


class FailingSender(NotificationSender):
    def send(self, title, body):
        raise RuntimeError("boom")


def test_availability_enabled_sends_connect_and_disconnect():
    manager, sender = make_manager(True, False)
    d = device("Test Device")
    manager.device_connected(d)
    manager.device_disconnected(d)
    assert sender.sent_notifications == [
        ("Audio Device Connected", "🔊 Test Device is now available"),
        ("Audio Device Disconnected", "🔊 Test Device is no longer available"),
    ]


def test_availability_disabled_sends_nothing():
    manager, sender = make_manager(False, False)
    d = device("Test Device")
    manager.device_connected(d)
    manager.device_disconnected(d)
    assert sender.sent_notifications == []


def test_switching_enabled_sends_switch_and_failure():
    manager, sender = make_manager(False, True)
    d = device("Test Device")
    manager.device_switched(d, SwitchReason.HIGHER_PRIORITY)
    manager.switch_failed("Test Device", "Test error")
    assert sender.sent_notifications == [
        ("Audio Device Switched", "🔊 Output switched to Test Device (higher priority)"),
        ("Audio Device Switch Failed", "Failed to switch to Test Device: Test error"),
    ]


def test_switching_disabled_sends_nothing():
    manager, sender = make_manager(False, False)
    manager.device_switched(device("Test Device"), SwitchReason.HIGHER_PRIORITY)
    manager.switch_failed("Test Device", "Test error")
    assert sender.sent_notifications == []


def test_all_enabled_sends_four():
    manager, sender = make_manager(True, True)
    d = device("Test Device")
    manager.device_connected(d)
    manager.device_disconnected(d)
    manager.device_switched(d, SwitchReason.MANUAL)
    manager.switch_failed("Test Device", "Error message")
    assert len(sender.sent_notifications) == 4
    assert sender.sent_notifications[2][1] == "🔊 Output manually switched to Test Device"


def test_all_disabled_sends_nothing():
    manager, sender = make_manager(False, False)
    d = device("Test Device")
    manager.device_connected(d)
    manager.device_disconnected(d)
    manager.device_switched(d, SwitchReason.PREVIOUS_UNAVAILABLE)
    manager.switch_failed("Device", "Error")
    assert sender.sent_notifications == []


def test_default_manager_is_enabled():
    manager, _ = make_manager(False, True)
    assert manager.enabled is True


def test_enable_disable():
    manager, sender = make_manager(True, True)
    assert manager.enabled
    manager.enabled = False
    assert not manager.enabled
    manager.device_connected(device("X"))
    assert sender.sent_notifications == []
    manager.enabled = True
    assert manager.enabled
    manager.device_connected(device("X"))
    assert len(sender.sent_notifications) == 1


@pytest.mark.parametrize(
    "availability,switching", [(True, True), (True, False), (False, True), (False, False)]
)
def test_config_combinations(availability, switching):
    manager, sender = make_manager(availability, switching)
    assert manager.enabled
    d = device("Test")
    manager.device_connected(d)
    manager.device_switched(d, SwitchReason.HIGHER_PRIORITY)
    assert len(sender.sent_notifications) == int(availability) + int(switching)


def test_input_device_icon():
    manager, sender = make_manager(True, True)
    manager.device_disconnected(device("Input Device", DeviceType.INPUT))
    assert sender.sent_notifications == [
        ("Audio Device Disconnected", "🎤 Input Device is no longer available")
    ]


def test_input_output_device_label():
    manager, sender = make_manager(True, True)
    d = device("Input/Output Device")
    d.device_type = DeviceType.INPUT_OUTPUT
    manager.device_switched(d, SwitchReason.HIGHER_PRIORITY)
    assert sender.sent_notifications[0][1] == (
        "🎧 Input/Output switched to Input/Output Device (higher priority)"
    )


def test_previous_unavailable_reason():
    manager, sender = make_manager(False, True)
    manager.device_switched(
        device("Fallback Device", DeviceType.INPUT), SwitchReason.PREVIOUS_UNAVAILABLE
    )
    assert sender.sent_notifications[0][1] == (
        "🎤 Input switched to Fallback Device (previous device unavailable)"
    )


def test_all_reasons_send_one_each():
    manager, sender = make_manager(False, True)
    for i, reason in enumerate(SwitchReason):
        manager.device_switched(device(f"Device {i}"), reason)
    assert [title for title, _ in sender.sent_notifications] == [
        "Audio Device Switched"
    ] * 3


def test_empty_device_name():
    manager, sender = make_manager(True, True)
    d = device("")
    manager.device_connected(d)
    manager.device_switched(d, SwitchReason.MANUAL)
    assert sender.sent_notifications[0][1] == "🔊  is now available"
    assert sender.sent_notifications[1][1] == "🔊 Output manually switched to "


def test_unicode_device_name():
    manager, sender = make_manager(True, True)
    manager.device_disconnected(device("🎵 音频设备 🎵"))
    assert "🎵 音频设备 🎵" in sender.sent_notifications[0][1]


def test_very_long_device_name():
    manager, sender = make_manager(True, True)
    long_name = "A" * 1000
    manager.device_connected(device(long_name, DeviceType.INPUT))
    assert long_name in sender.sent_notifications[0][1]


def test_special_characters_in_device_name():
    manager, sender = make_manager(True, True)
    special = "Device \"with\" 'quotes' & <html> characters"
    manager.device_connected(device(special))
    assert sender.sent_notifications[0][1] == f"🔊 {special} is now available"


def test_switch_failed_with_empty_error():
    manager, sender = make_manager(False, True)
    manager.switch_failed("Device Name", "")
    assert sender.sent_notifications[0][1] == "Failed to switch to Device Name: "


def test_switch_failed_with_long_error():
    manager, sender = make_manager(False, True)
    long_error = "Error message " * 100
    manager.switch_failed("Device", long_error)
    assert sender.sent_notifications[0][1].endswith(long_error)


def test_switch_failed_with_unicode_error():
    manager, sender = make_manager(False, True)
    manager.switch_failed("Device", "错误消息: 设备不可用 🚫")
    assert sender.sent_notifications[0][1] == "Failed to switch to Device: 错误消息: 设备不可用 🚫"


def test_test_notification():
    manager, sender = make_manager(True, True)
    manager.test_notification()
    assert sender.sent_notifications == [
        ("Audio Device Monitor", "Notification system is working correctly!")
    ]


def test_test_notification_ignores_disabled():
    manager, sender = make_manager(True, True)
    manager.enabled = False
    manager.test_notification()
    assert len(sender.sent_notifications) == 1


def test_test_notification_failure_raises():
    manager = NotificationManager(FailingSender())
    with pytest.raises(NotificationError, match="Failed to send notification: boom"):
        manager.test_notification()


def test_sender_failure_propagates_from_events():
    manager = NotificationManager(FailingSender(), show_switching_actions=True)
    with pytest.raises(RuntimeError, match="boom"):
        manager.device_switched(device("X"), SwitchReason.MANUAL)


def test_default_settings():
    manager = NotificationManager(RecordingNotificationSender())
    assert manager.show_device_availability is False
    assert manager.show_switching_actions is True
    assert isinstance(NotificationManager().sender, OsascriptNotificationSender)


def test_recording_sender_clear():
    sender = RecordingNotificationSender()
    sender.send("a", "b")
    assert sender.sent_notifications == [("a", "b")]
    sender.clear()
    assert sender.sent_notifications == []


def test_osascript_sender_escapes_quotes():
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
    with mock.patch("audiodevmon.notifications.subprocess.run", return_value=completed) as run:
        result = OsascriptNotificationSender().send('Ti"tle', 'Bo"dy')
    assert result is None
    assert run.call_count == 1
    argv = run.call_args.args[0]
    assert argv[:2] == ["osascript", "-e"]
    assert argv[2] == 'display notification "Bo\\"dy" with title "Ti\\"tle" subtitle ""'


def test_osascript_sender_failure():
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="denied")
    with mock.patch("audiodevmon.notifications.subprocess.run", return_value=completed):
        with pytest.raises(NotificationError, match="osascript failed: denied"):
            OsascriptNotificationSender().send("t", "b")


def test_osascript_missing_binary():
    with mock.patch(
        "audiodevmon.notifications.subprocess.run", side_effect=FileNotFoundError("osascript")
    ):
        with pytest.raises(NotificationError, match="osascript failed"):
            OsascriptNotificationSender().send("t", "b")
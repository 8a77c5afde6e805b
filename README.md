# audiodevmon

Building blocks for a background service that watches the audio devices on a
machine and keeps the default input and output on the device you prefer
most. The package is a library: it supplies the interfaces, the decision
logic, notifications, signal handling and launch-agent installation that
such a service is made of.

## Modules

### `audiodevmon.interfaces`

- `DeviceType`: `INPUT`, `OUTPUT` and `INPUT_OUTPUT`.
- `AudioDevice`: a dataclass with `id`, `name`, `device_type`,
  `is_available` (default `True`) and `is_default` (default `False`).
  `str(device)` gives `"<name> (<type>)"`.
- Three abstract base classes that backends implement:
  - `AudioSystemInterface`: `enumerate_devices`,
    `get_default_output_device`, `get_default_input_device`,
    `set_default_output_device`, `set_default_input_device`,
    `add_device_change_listener`, `is_device_available`.
  - `FileSystemInterface`: `read_config_file`, `write_config_file`,
    `config_file_exists`, `create_config_dir`, `get_config_modified_time`
    (seconds since the epoch).
  - `SystemServiceInterface`: `register_signal_handlers`, `run_event_loop`,
    `should_continue_running`, `sleep_ms`, `get_process_id`,
    `is_config_reload_requested`.

### `audiodevmon.adapters`

- `StandardFileSystem` implements `FileSystemInterface` on the local disk.
  Failures are raised as `OSError` with a message saying which operation
  failed.
- `PosixSystemService` implements `SystemServiceInterface`. After
  `register_signal_handlers()`, SIGTERM or SIGINT make
  `should_continue_running()` return `False`, and SIGHUP makes the next
  call of `is_config_reload_requested()` return `True` (once).
  `sleep_ms()` returns early when termination is requested;
  `run_event_loop()` sleeps for 100 ms. `handle_signal(signum, frame)` can
  be called directly to apply a signal.

### `audiodevmon.signals`

`SignalHandler` for asyncio programs. `await handler.listen_for_signals()`
installs handlers for SIGTERM, SIGINT and SIGHUP on the running loop and
returns once a termination signal arrives. An optional sender callable
passed to `SignalHandler(sender)` receives `SignalType.SHUTDOWN` or
`SignalType.RELOAD`. `handle_signal(signum)` processes one signal and
returns `True` when listening should stop; `is_shutdown_requested()` and
the `shutdown_flag` event report whether shutdown was requested.

### `audiodevmon.mocks`

In-memory implementations of the three interfaces, for running a service
without sound hardware:

- `MockAudioSystem`: `add_device`, `remove_device` (by id or name),
  `set_mock_default_output`, `set_mock_default_input`,
  `trigger_device_change`; switch requests are recorded and read back with
  `output_switch_calls()` and `input_switch_calls()`, and cleared with
  `clear_set_device_calls()`.
- `MockFileSystem`: `add_file`, `remove_file`, `file_exists`,
  `clear_call_history`; reads, writes and directory creations are recorded
  in `read_calls`, `write_calls` and `directory_creation_calls`.
- `MockSystemService`: `stop_service`, `start_service`, `reset`; it never
  sleeps, records `sleep_calls`, counts `event_loop_calls` and reports
  process id 12345.

Setting the `should_fail_*` attributes makes the matching operation raise
`MockError`.

### `audiodevmon.priority`

`DevicePriorityManager(output_rules, input_rules)` picks the best device:

```python
manager = DevicePriorityManager(output_rules=rules)
best = manager.find_best_output_device(devices)
if best and manager.should_switch_output(best):
    audio.set_default_output_device(best.name)
    manager.update_current_output(best.name)
```

A rule is any object with `name`, `weight` and `matches(device_name)`. Only
devices of the requested type are considered, a rule must have a positive
weight to select a device, the highest weight wins, and among equal
weights the earliest device in the list wins. `should_switch_output` and
`should_switch_input` return `True` unless the device's name is the one
last recorded with `update_current_output` / `update_current_input`.

### `audiodevmon.notifications`

`NotificationManager(sender=None, *, show_device_availability=False,
show_switching_actions=True)` announces `device_connected`,
`device_disconnected`, `device_switched(device, reason)` with a
`SwitchReason` (`HIGHER_PRIORITY`, `PREVIOUS_UNAVAILABLE`, `MANUAL`) and
`switch_failed(device_name, error)`. Setting `enabled` to `False` silences
all of them; `test_notification()` always sends and raises
`NotificationError` if the sender fails.

Senders: `OsascriptNotificationSender` (the default) shows a macOS
notification through `osascript` and raises `NotificationError` when that
fails; `RecordingNotificationSender` keeps `(title, body)` pairs in
`sent_notifications`.

### `audiodevmon.installer`

`ServiceInstaller(home=None, executable=None)` manages a LaunchAgent
property list at
`~/Library/LaunchAgents/com.audiodevicemonitor.daemon.plist`.
`install_launch_agent()` writes it and returns the path;
`uninstall_launch_agent()` removes it and returns whether it was there.
The agent runs `<executable> daemon` at login and keeps it alive.

## What the package does not do

- It has no command-line program. The launch agent starts whatever
  executable you give `ServiceInstaller`, with the argument `daemon`; that
  program has to be provided separately.
- It contains no backend for a real audio system: only the
  `AudioSystemInterface` and the in-memory `MockAudioSystem`.
- It has no configuration file format or rule class; priority rules are
  objects you supply.
- It has no service main loop tying these parts together.

## Requirements

Python 3.10 or later, no third-party packages at run time. Notifications
through `OsascriptNotificationSender` need macOS. Tests use `pytest` and
`pytest-asyncio` (the `test` extra).
"""Choosing the preferred audio device from weighted rules."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from audiodevmon.interfaces import AudioDevice, DeviceType

logger = logging.getLogger(__name__)


class _Rule(Protocol):
    name: str
    weight: int

    def matches(self, device_name: str) -> bool: ...


class DevicePriorityManager:
    """Picks the best device per direction and tracks the current selection.

    A rule is any object with ``name``, ``weight`` and ``matches(device_name)``.
    A device is chosen only through a rule of positive weight; among equal
    weights the earliest device in the list wins.
    """

    def __init__(
        self,
        output_rules: Iterable[_Rule] = (),
        input_rules: Iterable[_Rule] = (),
    ) -> None:
        logger.info("Creating device priority manager")
        self.output_rules: list[_Rule] = list(output_rules)
        self.input_rules: list[_Rule] = list(input_rules)
        self.current_output: str | None = None
        self.current_input: str | None = None

    def find_best_output_device(
        self, devices: Sequence[AudioDevice]
    ) -> AudioDevice | None:
        return self._find_best(devices, self.output_rules, DeviceType.OUTPUT)

    def find_best_input_device(
        self, devices: Sequence[AudioDevice]
    ) -> AudioDevice | None:
        return self._find_best(devices, self.input_rules, DeviceType.INPUT)

    @staticmethod
    def _find_best(
        devices: Sequence[AudioDevice],
        rules: Sequence[_Rule],
        device_type: DeviceType,
    ) -> AudioDevice | None:
        candidates = [d for d in devices if d.device_type == device_type]
        logger.debug(
            "Evaluating %d %s devices (filtered from %d total)",
            len(candidates),
            device_type,
            len(devices),
        )
        best: AudioDevice | None = None
        best_weight = 0
        for device in candidates:
            for rule in rules:
                if rule.weight > best_weight and rule.matches(device.name):
                    best, best_weight = device, rule.weight
                    logger.debug(
                        "Found %s device match: %s (weight: %d)",
                        device_type,
                        device.name,
                        rule.weight,
                    )
        if best is None:
            logger.debug("No matching %s device found", device_type)
        else:
            logger.info("Best %s device: %s (weight: %d)", device_type, best.name, best_weight)
        return best

    def should_switch_output(self, device: AudioDevice) -> bool:
        return self.current_output != device.name

    def should_switch_input(self, device: AudioDevice) -> bool:
        return self.current_input != device.name

    def update_current_output(self, device_name: str) -> None:
        self.current_output = device_name

    def update_current_input(self, device_name: str) -> None:
        self.current_input = device_name
"""Interfaces, mocks, priority selection, notifications, signals and launch-agent installation for an audio device monitor."""

__version__ = "0.1.0"

__all__ = [
    "adapters",
    "installer",
    "interfaces",
    "mocks",
    "notifications",
    "priority",
    "signals",
]
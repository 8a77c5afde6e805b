"""Installing the monitor as a per-user launch agent."""

from __future__ import annotations

import logging
import plistlib
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

LAUNCH_AGENT_LABEL = "com.audiodevicemonitor.daemon"
STDOUT_LOG_PATH = "/tmp/audio-device-monitor.log"
STDERR_LOG_PATH = "/tmp/audio-device-monitor.err"


class ServiceInstaller:
    """Writes and removes the launch agent definition for the daemon."""

    def __init__(
        self,
        home: str | Path | None = None,
        executable: str | Path | None = None,
    ) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.executable = (
            Path(executable) if executable is not None else Path(sys.argv[0]).resolve()
        )

    def launch_agent_path(self) -> Path:
        return self.home / "Library" / "LaunchAgents" / f"{LAUNCH_AGENT_LABEL}.plist"

    def generate_launch_agent_plist(self) -> str:
        """Return the XML property list describing the daemon."""
        agent = {
            "Label": LAUNCH_AGENT_LABEL,
            "ProgramArguments": [str(self.executable), "daemon"],
            "RunAtLoad": True,
            "KeepAlive": True,
            "StandardOutPath": STDOUT_LOG_PATH,
            "StandardErrorPath": STDERR_LOG_PATH,
            "EnvironmentVariables": {"AUDIODEVMON_LOG": "info"},
        }
        return plistlib.dumps(agent, fmt=plistlib.FMT_XML, sort_keys=False).decode("utf-8")

    def install_launch_agent(self) -> Path:
        """Write the launch agent file and return its path."""
        logger.info("Installing launch agent")
        path = self.launch_agent_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generate_launch_agent_plist(), encoding="utf-8")
        logger.info("Launch agent installed to: %s", path)
        logger.info("To load the service, run: launchctl load %s", path)
        return path

    def uninstall_launch_agent(self) -> bool:
        """Remove the launch agent file; return whether one was present."""
        logger.info("Uninstalling launch agent")
        path = self.launch_agent_path()
        if not path.exists():
            logger.warning("Launch agent plist not found at: %s", path)
            return False
        path.unlink()
        logger.info("Launch agent removed from: %s", path)
        logger.info("To unload the service, run: launchctl unload %s", path)
        return True
from __future__ import annotations

"""Системные уведомления через консольную утилиту платформы."""

import logging
import platform
import shutil
import subprocess

from manta.core.errors import NotificationError


logger = logging.getLogger(__name__)

TIMEOUT_S = 5


def _applescript_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notification_command(
    title: str,
    message: str,
    system: str | None = None,
    activate: str | None = None,
) -> list[str]:
    """Build the notifier invocation for this platform."""
    system = system or platform.system()
    if system == "Darwin":
        if shutil.which("terminal-notifier"):
            cmd = ["terminal-notifier", "-title", title, "-message", message or " "]
            if activate:
                cmd += ["-activate", activate]
            return cmd
        script = f"display notification {_applescript_quote(message)} with title {_applescript_quote(title)}"
        return ["osascript", "-e", script]
    if system == "Linux":
        if not shutil.which("notify-send"):
            raise NotificationError("notify-send is not installed")
        return ["notify-send", title, message]
    raise NotificationError(f"no notifier available on {system}")


def show_notification(title: str, message: str, activate: str | None = None) -> None:
    """Показывает уведомление; при любой ошибке бросает `NotificationError`."""
    cmd = notification_command(title, message, activate=activate)
    try:
        result = subprocess.run(cmd, capture_output=True, timeout=TIMEOUT_S)
    except (subprocess.SubprocessError, OSError) as exc:
        raise NotificationError(f"{cmd[0]} failed: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip()
        raise NotificationError(f"{cmd[0]} exited with {result.returncode}: {stderr}")
    logger.debug("Notification sent via %s", cmd[0])

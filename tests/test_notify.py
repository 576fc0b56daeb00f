import subprocess

import pytest

from manta.core import notify
from manta.core.errors import NotificationError


def test_linux_uses_notify_send(monkeypatch) -> None:
    monkeypatch.setattr(notify.shutil, "which", lambda name: "/usr/bin/" + name)

    cmd = notify.notification_command("manta", "Time to work is over", system="Linux")

    assert cmd == ["notify-send", "manta", "Time to work is over"]


def test_linux_without_notify_send(monkeypatch) -> None:
    monkeypatch.setattr(notify.shutil, "which", lambda name: None)

    with pytest.raises(NotificationError):
        notify.notification_command("manta", "x", system="Linux")


def test_macos_prefers_terminal_notifier(monkeypatch) -> None:
    monkeypatch.setattr(notify.shutil, "which", lambda name: "/opt/homebrew/bin/" + name)

    cmd = notify.notification_command("manta", "done", system="Darwin", activate="com.example.term")

    assert cmd[0] == "terminal-notifier"
    assert cmd[-2:] == ["-activate", "com.example.term"]


def test_macos_falls_back_to_osascript(monkeypatch) -> None:
    monkeypatch.setattr(notify.shutil, "which", lambda name: None)

    cmd = notify.notification_command("manta", 'say "hi"', system="Darwin")

    assert cmd[:2] == ["osascript", "-e"]
    assert 'display notification "say \\"hi\\"" with title "manta"' == cmd[2]


def test_unsupported_platform() -> None:
    with pytest.raises(NotificationError):
        notify.notification_command("manta", "x", system="Windows")


def test_show_notification_reports_failure(monkeypatch) -> None:
    monkeypatch.setattr(notify, "notification_command", lambda *args, **kwargs: ["notify-send", "a", "b"])

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"no bus")

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    with pytest.raises(NotificationError, match="no bus"):
        notify.show_notification("a", "b")


def test_show_notification_timeout(monkeypatch) -> None:
    monkeypatch.setattr(notify, "notification_command", lambda *args, **kwargs: ["notify-send", "a", "b"])

    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    with pytest.raises(NotificationError):
        notify.show_notification("a", "b")


def test_show_notification_success(monkeypatch) -> None:
    seen: list = []
    monkeypatch.setattr(notify, "notification_command", lambda *args, **kwargs: ["notify-send", "a", "b"])

    def fake_run(cmd, **kwargs):
        seen.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=b"", stderr=b"")

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    notify.show_notification("a", "b")

    assert seen == [["notify-send", "a", "b"]]

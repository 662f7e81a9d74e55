"""Unit tests for the Ollama relaunch recovery hook."""

from unittest.mock import MagicMock

import pytest

import careassist.clients.recovery as recovery_module
from careassist.clients.recovery import (
    WINDOWS_OLLAMA_PATH,
    OllamaRelauncher,
    noop_recovery,
)


def test_noop_recovery_does_nothing():
    assert noop_recovery(ConnectionError("refused")) is None


def test_windows_command_uses_default_install_path():
    assert OllamaRelauncher(platform="win32").command() == [WINDOWS_OLLAMA_PATH]


def test_windows_command_honors_configured_executable():
    relauncher = OllamaRelauncher(executable=r"D:\ollama\ollama.exe", platform="win32")
    assert relauncher.command() == [r"D:\ollama\ollama.exe"]


def test_macos_opens_app():
    assert OllamaRelauncher(platform="darwin").command() == ["open", "-a", "Ollama"]


def test_linux_serves_binary_from_path(monkeypatch):
    monkeypatch.setattr(recovery_module.shutil, "which", lambda name: "/usr/bin/ollama")
    assert OllamaRelauncher(platform="linux").command() == ["/usr/bin/ollama", "serve"]


def test_linux_without_binary_has_no_command(monkeypatch):
    monkeypatch.setattr(recovery_module.shutil, "which", lambda name: None)
    assert OllamaRelauncher(platform="linux").command() is None


@pytest.fixture
def popen(monkeypatch):
    mock = MagicMock()
    mock.return_value.poll.return_value = None
    mock.return_value.pid = 4242
    monkeypatch.setattr(recovery_module.subprocess, "Popen", mock)
    return mock


def test_relaunch_spawns_detached_process(popen):
    relauncher = OllamaRelauncher(executable="/opt/ollama", platform="linux")
    relauncher(ConnectionError("refused"))

    popen.assert_called_once()
    args, kwargs = popen.call_args
    assert args[0] == ["/opt/ollama", "serve"]
    assert kwargs["start_new_session"] is True


def test_relaunch_skipped_while_previous_launch_alive(popen):
    relauncher = OllamaRelauncher(executable="/opt/ollama", platform="linux")
    relauncher(ConnectionError("refused"))
    relauncher(ConnectionError("refused"))
    assert popen.call_count == 1


def test_relaunch_again_after_previous_exit(popen):
    relauncher = OllamaRelauncher(executable="/opt/ollama", platform="linux")
    relauncher(ConnectionError("refused"))
    popen.return_value.poll.return_value = 1
    relauncher(ConnectionError("refused"))
    assert popen.call_count == 2


def test_spawn_failure_is_logged_not_raised(monkeypatch, caplog):
    monkeypatch.setattr(
        recovery_module.subprocess, "Popen", MagicMock(side_effect=FileNotFoundError("nope"))
    )
    relauncher = OllamaRelauncher(executable="/missing/ollama", platform="linux")
    relauncher(ConnectionError("refused"))
    assert "Failed to start Ollama" in caplog.text


def test_missing_binary_is_logged(monkeypatch, popen, caplog):
    monkeypatch.setattr(recovery_module.shutil, "which", lambda name: None)
    OllamaRelauncher(platform="linux")(ConnectionError("refused"))
    popen.assert_not_called()
    assert "executable not found" in caplog.text

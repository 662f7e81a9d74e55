"""Best-effort relaunch of the local Ollama process.

Injected into the retry executor as a recovery hook; tests use
``noop_recovery``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Protocol

logger = logging.getLogger(__name__)

WINDOWS_OLLAMA_PATH = r"C:\Program Files\Ollama\ollama.exe"


class RecoveryHook(Protocol):
    def __call__(self, error: BaseException) -> None:
        ...


def noop_recovery(error: BaseException) -> None:
    return None


class OllamaRelauncher:
    """Tries to start Ollama when the server refuses connections.

    Fire-and-forget: the process is spawned detached and never awaited.
    A second launch is skipped while the previous process is still alive.
    """

    def __init__(self, executable: str = "", platform: str | None = None) -> None:
        self.executable = executable
        self.platform = platform or sys.platform
        self._process: subprocess.Popen | None = None

    def command(self) -> list[str] | None:
        """Platform-specific launch command, or None if Ollama isn't installed."""
        if self.platform == "win32":
            return [self.executable or WINDOWS_OLLAMA_PATH]
        if self.platform == "darwin" and not self.executable:
            return ["open", "-a", "Ollama"]
        binary = self.executable or shutil.which("ollama")
        if not binary:
            return None
        return [binary, "serve"]

    def __call__(self, error: BaseException) -> None:
        if self._process is not None and self._process.poll() is None:
            logger.info("Ollama launch already in progress (PID %s)", self._process.pid)
            return

        cmd = self.command()
        if cmd is None:
            logger.warning("Cannot relaunch Ollama: executable not found on PATH")
            return

        logger.info("Attempting to start Ollama: %s", " ".join(cmd))
        try:
            self._process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
                creationflags=getattr(subprocess, "DETACHED_PROCESS", 0),
            )
        except OSError as e:
            logger.error("Failed to start Ollama: %s", e)

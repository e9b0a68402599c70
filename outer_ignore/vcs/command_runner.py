from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(slots=True)
class VcsRunResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class VcsRunError(RuntimeError):
    def __init__(self, message: str, *, kind: str = "vcs_error", stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.stdout = stdout
        self.stderr = stderr


class VcsCommandRunner:
    """Runs read-only git/hg queries without prompting."""

    def __init__(self, *, default_timeout_seconds: int = 10) -> None:
        self._default_timeout_seconds = max(1, int(default_timeout_seconds))

    @staticmethod
    def which(executable: str) -> str | None:
        return shutil.which(executable)

    def run(self, *, executable: str, cwd: str, args: list[str], timeout_seconds: int | None = None) -> VcsRunResult:
        command = [str(executable), *[str(arg) for arg in args]]
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        env["HGPLAIN"] = "1"
        timeout = max(1, int(timeout_seconds or self._default_timeout_seconds))
        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd),
                env=env,
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise VcsRunError(
                f"{executable} command timed out.",
                kind="timeout",
                stdout=_to_text(exc.stdout),
                stderr=_to_text(exc.stderr),
            ) from exc
        except OSError as exc:
            raise VcsRunError(f"Could not start {executable}.", kind="not_installed") from exc

        return VcsRunResult(
            returncode=int(proc.returncode),
            stdout=str(proc.stdout or ""),
            stderr=str(proc.stderr or ""),
        )


def _to_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)

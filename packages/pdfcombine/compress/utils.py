"""Utility helpers for :mod:`pdfcombine.compress`."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, MutableMapping, Sequence

_LOGGER = logging.getLogger("pdfcombine.compress")


def which(executables: Sequence[str]) -> str | None:
    """Return the first executable from *executables* found on ``PATH``."""

    for candidate in executables:
        found = shutil.which(candidate)
        if found:
            _LOGGER.debug("Detected external tool: %s -> %s", candidate, found)
            return found
    return None


def run_subprocess(
    command: Sequence[str],
    *,
    env: MutableMapping[str, str] | None = None,
    check: bool = True,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *command* capturing output.

    Parameters
    ----------
    command:
        Command and arguments to execute.
    env:
        Optional environment overrides.
    check:
        Whether to raise :class:`subprocess.CalledProcessError` on non-zero exit.
    timeout:
        Seconds to wait before the child is killed and
        :class:`subprocess.TimeoutExpired` is raised.
    """

    _LOGGER.debug("Executing command: %s", " ".join(command))
    completed = subprocess.run(
        list(command),
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=check,
        text=True,
        timeout=timeout,
    )
    _LOGGER.debug(
        "Command finished with exit code %s\nstdout: %s\nstderr: %s",
        completed.returncode,
        completed.stdout,
        completed.stderr,
    )
    return completed


@contextmanager
def request_workspace(
    root: str | Path | None = None,
    *,
    prefix: str = "pdfcombine-",
) -> Iterator[Path]:
    """Yield a private temporary directory that is removed on every exit path.

    Removal failures are logged and swallowed so they never replace the
    outcome of the work done inside the block.
    """

    if root is not None:
        Path(root).mkdir(parents=True, exist_ok=True)
    workspace = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    _LOGGER.debug("Created workspace %s", workspace)
    try:
        yield workspace
    finally:
        try:
            shutil.rmtree(workspace)
        except OSError as exc:
            _LOGGER.warning("Cleanup error for %s: %s", workspace, exc)


__all__ = ["which", "run_subprocess", "request_workspace"]

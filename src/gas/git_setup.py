"""Register gas as git's global credential helper.

Git consults every configured ``credential.helper`` in order, and a helper
configured at system level (Git Credential Manager, osxkeychain) would
answer before gas. :func:`setup_git_config` therefore:

1. removes all global ``credential.helper`` values,
2. adds an empty helper, which tells git to discard helpers inherited from
   the system config,
3. adds gas itself as ``!"<path to gas>"``.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional

from gas.exceptions import GasError

logger = logging.getLogger(__name__)


def helper_command(executable: Optional[str] = None) -> str:
    """Return the ``credential.helper`` value that invokes *executable*.

    Backslashes become forward slashes so the value survives git's shell
    quoting on Windows.
    """
    exe = executable or str(Path(sys.argv[0]).resolve())
    return '!"{}"'.format(exe.replace("\\", "/"))


def _git_config(*args: str) -> subprocess.CompletedProcess[bytes]:
    logger.debug("git config --global %s", " ".join(args))
    return subprocess.run(["git", "config", "--global", *args], check=False)


def setup_git_config(executable: Optional[str] = None) -> None:
    """Make gas the only global credential helper.

    Raises:
        GasError: If git cannot be executed or refuses the final write.
    """
    helper = helper_command(executable)
    try:
        # The first two calls fail harmlessly when nothing is configured yet.
        _git_config("--unset-all", "credential.helper")
        _git_config("--add", "credential.helper", "")
        result = _git_config("--add", "credential.helper", helper)
    except OSError as exc:
        raise GasError(f"Failed to execute git: {exc}") from exc

    if result.returncode != 0:
        raise GasError(f"git config command failed (exit {result.returncode})")
    logger.info("Registered credential helper %s", helper)

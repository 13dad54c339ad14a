"""Fire-and-forget OS registration commands (Launch Services, desktop database)."""

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

HOOK_TIMEOUT = 30.0


def run_os_hook(*command: str | Path) -> bool:
    """
    Run an OS registration command, ignoring any failure.

    Args:
        command: Program and arguments

    Returns:
        True if the command ran and exited with 0
    """
    args = [str(part) for part in command]
    program = args[0]
    if not Path(program).is_absolute() and shutil.which(program) is None:
        logger.debug(f"{program} not available, skipping")
        return False

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=HOOK_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"{program} failed: {e}")
        return False

    if result.returncode != 0:
        logger.debug(f"{program} exited with {result.returncode}: {result.stderr.strip()}")
        return False

    return True

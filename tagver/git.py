"""``git describe`` collaborator used when no describe string is supplied."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, Optional, Union

from tagver.errors import DescribeError

logger = logging.getLogger(__name__)

DESCRIBE_COMMAND = ("git", "describe", "--tags", "--long")


def git_describe(
    cwd: Optional[Union[str, Path]] = None,
    *,
    runner: Callable[..., Any] = subprocess.run,
) -> str:
    """Return ``git describe --tags --long`` output for ``cwd``.

    Args:
        cwd: Repository directory. Defaults to the current working directory.
        runner: ``subprocess.run``-compatible callable (useful for tests).

    Returns:
        The describe string with surrounding whitespace stripped.

    Raises:
        DescribeError: If git is unavailable, exits non-zero, or prints nothing.
    """
    command = list(DESCRIBE_COMMAND)
    logger.debug("Running %s in %s", " ".join(command), cwd or ".")
    try:
        completed = runner(
            command,
            cwd=str(cwd) if cwd is not None else None,
            check=True,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise DescribeError(f"Unable to run git: {exc}", command=command) from exc
    except subprocess.CalledProcessError as exc:
        raise DescribeError(
            f"git describe exited with status {exc.returncode}",
            command=command,
            stderr=exc.stderr or "",
        ) from exc

    description = (completed.stdout or "").strip()
    if not description:
        raise DescribeError("git describe produced no output", command=command)
    logger.debug("git describe -> %s", description)
    return description

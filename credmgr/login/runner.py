"""Subprocess wrapper shared by the login integrations."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class LoginError(Exception):
    """An external CLI step failed."""

    def __init__(self, step: str, detail: str):
        self.step = step
        self.detail = detail
        super().__init__(f"Failed to {step}: {detail}")


def run_cli(
    argv: list[str],
    *,
    step: str,
    env: dict[str, str] | None = None,
    input: str | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess:
    """Run a CLI command and return the completed process. Raises LoginError on failure.

    Arguments are not logged since they may carry secrets.
    """
    logger.debug("Running %s to %s", argv[0], step)
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            env=env,
            input=input,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise LoginError(
            step, f"'{argv[0]}' not found. Make sure it is installed and in your PATH"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise LoginError(step, f"'{argv[0]}' timed out after {timeout}s") from e
    except OSError as e:
        raise LoginError(step, f"could not run '{argv[0]}': {e.strerror or e}") from e

    if result.returncode != 0:
        detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
        raise LoginError(step, detail)
    return result

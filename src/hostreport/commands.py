"""External command execution with a bounded wait."""

import shlex
import subprocess
from collections.abc import Sequence

import structlog

from hostreport.errors import CommandExecutionError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class CommandRunner:
    """
    Runs short-lived commands and returns their standard output as text.

    Commands are never passed through a shell. Any failure to launch,
    read or finish the process within ``timeout`` seconds is raised as
    CommandExecutionError with the original exception chained.
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """
        Initialize the CommandRunner.

        Args:
            timeout: Seconds to wait for each command. None waits forever.
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def run(self, command: str | Sequence[str]) -> str:
        """Run ``command`` and return its decoded standard output."""
        args = shlex.split(command) if isinstance(command, str) else list(command)
        display = shlex.join(args)

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                timeout=self._timeout,
                check=True,
            )
            return completed.stdout.decode("utf-8")
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(display, f"timed out after {self._timeout}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            logger.debug("Command failed", command=display, returncode=e.returncode, stderr=stderr)
            raise CommandExecutionError(display, f"exited with status {e.returncode}") from e
        except UnicodeDecodeError as e:
            raise CommandExecutionError(display, "output is not valid UTF-8") from e
        except OSError as e:
            raise CommandExecutionError(display, f"could not be started: {e}") from e

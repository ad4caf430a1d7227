from __future__ import annotations

import subprocess
from typing import IO, Mapping, Sequence

from dotenv_launch.errors import SpawnError

# ``None`` tells subprocess to hand the parent's own stream to the child.
INHERIT = None


def merge_environment(current: Mapping[str, str], overlay: Mapping[str, str]) -> dict[str, str]:
    """Return a new environment where ``overlay`` wins over ``current``."""

    merged = dict(current)
    merged.update(overlay)
    return merged


def exit_code_from_returncode(returncode: int) -> int:
    # Popen reports death by signal N as -N; shells report it as 128 + N.
    if returncode < 0:
        return 128 - returncode
    return returncode


def spawn(
    command: Sequence[str],
    env: Mapping[str, str],
    stdin: IO | int | None = INHERIT,
    stdout: IO | int | None = INHERIT,
    stderr: IO | int | None = INHERIT,
) -> int:
    """Run ``command`` with ``env`` and block until it exits.

    Returns the exit code to forward. Raises ``SpawnError`` when there is no
    command or the executable cannot be started.
    """

    if not command:
        raise SpawnError("no command given")

    try:
        proc = subprocess.Popen(list(command), env=dict(env), stdin=stdin, stdout=stdout, stderr=stderr)
    except FileNotFoundError as exc:
        raise SpawnError(f"command not found: {command[0]}") from exc
    except PermissionError as exc:
        raise SpawnError(f"permission denied: {command[0]}") from exc
    except OSError as exc:
        raise SpawnError(f"cannot start {command[0]}: {exc.strerror or exc}") from exc
    except ValueError as exc:
        # Raised for NUL bytes or "=" in names the OS cannot pass on.
        raise SpawnError(f"cannot start {command[0]}: {exc}") from exc

    while True:
        try:
            returncode = proc.wait()
            break
        except KeyboardInterrupt:
            # The child got the same SIGINT from the terminal; let it decide.
            continue

    return exit_code_from_returncode(returncode)

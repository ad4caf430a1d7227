from __future__ import annotations

import dataclasses
import os
import sys
from typing import Sequence

from dotenv_launch import launcher
from dotenv_launch.config import defaults_from_env, read_env_file
from dotenv_launch.errors import ArgumentError, LauncherError
from dotenv_launch.models import Fail, LaunchOptions, Ok

PROG = "dotenv-launch"
USAGE = f"usage: {PROG} [--file|-f <path>] [--] <command> [<args>...]"

_FILE_FLAGS = ("--file", "-f")


def parse_args(argv: Sequence[str], defaults: LaunchOptions | None = None) -> Ok[LaunchOptions] | Fail:
    """Split ``argv`` into launcher options and the command vector.

    Option parsing stops at a bare ``--`` (consumed) or at the first token
    that does not start with ``-`` (kept as the command name). Everything
    except the file path comes from ``DOTENV_CONFIG_*`` variables.
    """

    options = defaults or defaults_from_env()
    path = options.path

    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == "--":
            index += 1
            break

        if arg in _FILE_FLAGS:
            if index + 1 >= len(argv):
                return Fail(ArgumentError(f"missing value for {arg}"))
            path = argv[index + 1]
            index += 2
        elif arg.startswith("-"):
            return Fail(ArgumentError(f"illegal argument: {arg}"))
        else:
            break

    return Ok(dataclasses.replace(options, path=path, command=list(argv[index:])))


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        parsed = parse_args(argv)
        if isinstance(parsed, Fail):
            raise parsed.error
        options = parsed.value

        overlay = read_env_file(
            options.path,
            options.dialect,
            encoding=options.encoding,
            strict=options.strict,
            debug=options.debug,
        )
        env = launcher.merge_environment(os.environ, overlay)
        return launcher.spawn(options.command, env)
    except ArgumentError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    except LauncherError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()

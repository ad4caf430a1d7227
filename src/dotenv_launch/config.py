from __future__ import annotations

import io
import os
import warnings
from pathlib import Path

from dotenv import dotenv_values

from dotenv_launch.errors import FileError
from dotenv_launch.models import LaunchOptions, LineOutcome, Ok, Skip

DEFAULT_PATH = ".env"
DEFAULT_DIALECT = "simple"
DEFAULT_ENCODING = "utf-8"
DIALECTS = ("simple", "python-dotenv")

# Accepted DOTENV_CONFIG_ENCODING spellings mapped to Python codec names.
# Plain utf-8 files may start with a BOM, which utf-8-sig drops.
ENCODINGS = {
    "utf-8": "utf-8-sig",
    "utf8": "utf-8-sig",
    "ascii": "ascii",
    "us-ascii": "ascii",
    "latin1": "latin-1",
    "latin-1": "latin-1",
    "iso-8859-1": "latin-1",
    "iso8859-1": "latin-1",
    "utf-16le": "utf-16-le",
    "utf16le": "utf-16-le",
    "utf-16be": "utf-16-be",
    "utf16be": "utf-16-be",
    "utf-32le": "utf-32-le",
    "utf32le": "utf-32-le",
    "utf-32be": "utf-32-be",
    "utf32be": "utf-32-be",
}


def _env_str(name: str, fallback: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    return raw


def _env_bool(name: str, fallback: bool) -> bool:
    raw = _env_str(name, "").strip().lower()
    if raw in ("true", "1"):
        return True
    if raw in ("false", "0"):
        return False
    return fallback


def default_path() -> str:
    return _env_str("DOTENV_CONFIG_PATH", DEFAULT_PATH)


def default_dialect() -> str:
    dialect = _env_str("DOTENV_CONFIG_DIALECT", DEFAULT_DIALECT).strip().lower()
    if dialect not in DIALECTS:
        return DEFAULT_DIALECT
    return dialect


def default_encoding() -> str:
    encoding = _env_str("DOTENV_CONFIG_ENCODING", DEFAULT_ENCODING).strip().lower()
    if encoding not in ENCODINGS:
        return DEFAULT_ENCODING
    return encoding


def default_strict() -> bool:
    return _env_bool("DOTENV_CONFIG_STRICT", True)


def default_debug() -> bool:
    return _env_bool("DOTENV_CONFIG_DEBUG", False)


def defaults_from_env() -> LaunchOptions:
    return LaunchOptions(
        path=default_path(),
        dialect=default_dialect(),
        encoding=default_encoding(),
        strict=default_strict(),
        debug=default_debug(),
    )


def _cut_null(text: str) -> str:
    # Process environments cannot hold NUL, so everything after it is dropped.
    return text.split("\0", 1)[0]


def parse_env_line(raw_line: str) -> LineOutcome:
    """Parse one ``KEY=VALUE`` line of the simple dialect.

    Blank lines, comments and lines without a usable ``=`` come back as
    ``Skip`` so a single bad line never aborts the whole file.
    """

    line = raw_line.strip()
    if not line:
        return Skip("blank line", malformed=False)
    if line.startswith("#"):
        return Skip("comment", malformed=False)
    if "=" not in line:
        return Skip(f"not a KEY=VALUE pair: {line!r}")

    key, value = line.split("=", 1)
    key = _cut_null(key).strip()
    if not key:
        return Skip(f"empty key: {line!r}")

    return Ok((key, _cut_null(value.strip())))


def parse_env_text(text: str, *, debug: bool = False, source: str = DEFAULT_PATH) -> dict[str, str]:
    values: dict[str, str] = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        outcome = parse_env_line(raw_line)
        if isinstance(outcome, Ok):
            key, value = outcome.value
            values[key] = value
        elif debug and outcome.malformed:
            warnings.warn(f"{source}:{lineno}: skipped, {outcome.reason}", RuntimeWarning, stacklevel=2)
    return values


def parse_python_dotenv_text(text: str) -> dict[str, str]:
    parsed = dotenv_values(stream=io.StringIO(text), interpolate=True)
    values: dict[str, str] = {}
    for key, value in parsed.items():
        # A bare ``KEY`` with no ``=`` parses to None and carries no value.
        if value is None:
            continue
        key = _cut_null(key)
        if key:
            values[key] = _cut_null(value)
    return values


def read_env_file(
    env_path: str = DEFAULT_PATH,
    dialect: str = DEFAULT_DIALECT,
    *,
    encoding: str = DEFAULT_ENCODING,
    strict: bool = True,
    debug: bool = False,
) -> dict[str, str]:
    """Read an env file into a fresh mapping without touching ``os.environ``.

    A file that cannot be opened raises ``FileError`` when ``strict`` is set
    and reads as empty otherwise. Undecodable contents always raise.
    """

    path = Path(env_path)
    codec = ENCODINGS.get(encoding.lower(), ENCODINGS[DEFAULT_ENCODING])
    try:
        text = path.read_text(encoding=codec)
    except UnicodeDecodeError as exc:
        raise FileError(f"env file is not valid {encoding}: {env_path}") from exc
    except OSError as exc:
        if isinstance(exc, FileNotFoundError):
            message = f"env file not found: {env_path}"
        else:
            message = f"cannot read env file {env_path}: {exc.strerror or exc}"
        if strict:
            raise FileError(message) from exc
        if debug:
            warnings.warn(f"{message}, continuing without it", RuntimeWarning, stacklevel=2)
        return {}

    if dialect == "python-dotenv":
        return parse_python_dotenv_text(text)
    return parse_env_text(text, debug=debug, source=env_path)

from __future__ import annotations


class LauncherError(Exception):
    """Fatal launcher failure raised before any child process exists."""


class ArgumentError(LauncherError):
    pass


class FileError(LauncherError):
    pass


class SpawnError(LauncherError):
    pass

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from dotenv_launch.errors import LauncherError

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class Skip:
    reason: str
    # Blank lines and comments are expected; only malformed lines get reported.
    malformed: bool = True


@dataclass(slots=True, frozen=True)
class Fail:
    error: LauncherError


LineOutcome = Union[Ok[tuple[str, str]], Skip]


@dataclass(slots=True)
class LaunchOptions:
    path: str = ".env"
    dialect: str = "simple"
    encoding: str = "utf-8"
    strict: bool = True
    debug: bool = False
    command: list[str] = field(default_factory=list)

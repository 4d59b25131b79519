import os
import tomllib
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Any
from typing import Self

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, kw_only=True)
class Settings:
    """Settings for driving sequences.

    ``await_timeout`` bounds how long a producer body may wait on a single
    awaited suspension before ``TimeoutError`` is thrown into it. ``None``
    waits forever. ``events`` turns lifecycle event publishing on or off.
    """

    await_timeout: float | None = None
    events: bool = True

    def __post_init__(self):
        if self.await_timeout is not None and self.await_timeout <= 0:
            raise ValueError(
                f"await_timeout must be a positive number, got: {self.await_timeout}"
            )

    @classmethod
    def load(cls, *, cwd: Path | None = None) -> Self:
        """Resolve settings from the environment, then pyproject.toml.

        Environment variables are ``PULLSEQ_AWAIT_TIMEOUT`` and
        ``PULLSEQ_EVENTS``. The file settings live under ``[tool.pullseq]``
        in the nearest pyproject.toml at or above ``cwd``.
        """
        config = _config(cwd or Path.cwd())

        raw_timeout = os.environ.get("PULLSEQ_AWAIT_TIMEOUT")
        if raw_timeout is None:
            raw_timeout = config.get("await_timeout")

        raw_events = os.environ.get("PULLSEQ_EVENTS")
        if raw_events is None:
            raw_events = config.get("events", True)

        return cls(
            await_timeout=_parse_timeout(raw_timeout),
            events=_parse_bool(raw_events, name="events"),
        )


@cache
def settings() -> Settings:
    """The process-wide settings, loaded once."""
    return Settings.load()


def _pyproject(cwd: Path) -> Path | None:
    for path in [cwd, *cwd.parents]:
        candidate = path / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _config(cwd: Path) -> dict[str, Any]:
    if pyproject := _pyproject(cwd):
        with pyproject.open("rb") as f:
            config = tomllib.load(f)
        return config.get("tool", {}).get("pullseq", {})
    return {}


def _parse_timeout(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"await_timeout must be a positive number, got: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"await_timeout must be a positive number, got: {value!r}"
        ) from None


def _parse_bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got: {value!r}")

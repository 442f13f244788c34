"""Runtime settings for the reflectkit inspector.

Defaults can be overridden through environment variables, and command-line
options override both:

- REFLECTKIT_LOG_LEVEL: logging level name (default WARNING)
- REFLECTKIT_JSON_INDENT: indent for --json output (default 2)
- REFLECTKIT_SHOW_INHERITED: list members inherited from bases (default true)
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

_TRUE = frozenset(["1", "true", "yes", "on"])
_FALSE = frozenset(["0", "false", "no", "off"])


class InspectorConfigError(ValueError):
    """Raised when a setting has an invalid value."""


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise InspectorConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise InspectorConfigError(f"{name} is not a logging level: {value!r}")
    return level


@dataclass(frozen=True)
class InspectorSettings:
    """Settings for the inspector CLI.

    Attributes:
        log_level: Level name for the root logger.
        json_indent: Indentation used by ``info --json``.
        show_inherited: Whether members declared on base classes are listed.
    """

    log_level: str = "WARNING"
    json_indent: int = 2
    show_inherited: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "InspectorSettings":
        """Build settings from REFLECTKIT_* environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if "REFLECTKIT_LOG_LEVEL" in env:
            values["log_level"] = _parse_level("REFLECTKIT_LOG_LEVEL", env["REFLECTKIT_LOG_LEVEL"])
        if "REFLECTKIT_JSON_INDENT" in env:
            raw = env["REFLECTKIT_JSON_INDENT"]
            try:
                values["json_indent"] = int(raw)
            except ValueError as ex:
                raise InspectorConfigError(
                    f"REFLECTKIT_JSON_INDENT must be an integer, got {raw!r}"
                ) from ex
        if "REFLECTKIT_SHOW_INHERITED" in env:
            values["show_inherited"] = _parse_bool(
                "REFLECTKIT_SHOW_INHERITED", env["REFLECTKIT_SHOW_INHERITED"]
            )

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "InspectorSettings":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "log_level" in values:
            values["log_level"] = _parse_level("log_level", values["log_level"])
        return replace(self, **values)

"""Environment-driven configuration for editor sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "ED_ENGINE_"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Resolved knobs shared by the interpreter, storage, and telemetry."""

    encoding: str = "utf-8"
    verbose: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_console: bool = False
    log_json: bool = False
    log_preset: Optional[str] = None


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EditorSettings:
    """Read ``ED_ENGINE_*`` variables, falling back to defaults."""

    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(f"{ENV_PREFIX}{name}")
        if value is None or not value.strip():
            return None
        return value.strip()

    defaults = EditorSettings()
    return EditorSettings(
        encoding=get("ENCODING") or defaults.encoding,
        verbose=_flag(get("VERBOSE"), defaults.verbose),
        log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
        log_file=get("LOG_FILE"),
        log_console=_flag(get("LOG_CONSOLE"), defaults.log_console),
        log_json=_flag(get("LOG_JSON"), defaults.log_json),
        log_preset=get("LOG_PRESET"),
    )


__all__ = ["ENV_PREFIX", "EditorSettings", "load_settings"]

"""Settings for the render driver: JSON file, then environment overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

from .renderer import BACKENDS

SETTINGS_ENV = "MANDELBROT_SETTINGS"
ENV_PREFIX = "MANDELBROT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class SettingsError(ValueError):
    """Raised when settings cannot be parsed or fail validation."""


@dataclass(frozen=True)
class Settings:
    """Everything the driver needs to produce its outputs."""

    width: int = 800
    height: int = 800
    iterations: int = 255
    image_path: Path | None = Path("mandelbrot.png")
    ascii_path: Path | None = None
    backend: str = "python"
    verbose: bool = False
    ascii: bool = True
    image: bool = True

    def validate(self) -> "Settings":
        for name in ("width", "height", "iterations"):
            value = getattr(self, name)
            if value <= 0:
                raise SettingsError(f"{name} must be a positive integer, got {value}.")
        if self.backend not in BACKENDS:
            raise SettingsError(f"Unknown backend '{self.backend}'. Valid choices: {', '.join(BACKENDS)}.")
        if self.image and self.image_path is None:
            raise SettingsError("image_path is required when image output is enabled.")
        return self


_FIELD_TYPES = {
    "width": int,
    "height": int,
    "iterations": int,
    "image_path": Path,
    "ascii_path": Path,
    "backend": str,
    "verbose": bool,
    "ascii": bool,
    "image": bool,
}


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise SettingsError(f"{name} must be a boolean, got '{raw}'.")


def _coerce_json(name: str, value: Any) -> Any:
    kind = _FIELD_TYPES[name]
    if kind is Path:
        if value is None:
            return None
        if not isinstance(value, str) or not value:
            raise SettingsError(f"{name} must be a non-empty string or null.")
        return Path(value).expanduser()
    if kind is bool:
        if not isinstance(value, bool):
            raise SettingsError(f"{name} must be true or false.")
        return value
    if kind is int:
        # bool is an int subclass, reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingsError(f"{name} must be an integer.")
        return value
    if not isinstance(value, str):
        raise SettingsError(f"{name} must be a string.")
    return value


def _coerce_env(name: str, raw: str) -> Any:
    kind = _FIELD_TYPES[name]
    if kind is Path:
        return Path(raw).expanduser() if raw else None
    if kind is bool:
        return _parse_bool(ENV_PREFIX + name.upper(), raw)
    if kind is int:
        try:
            return int(raw)
        except ValueError as exc:
            raise SettingsError(f"{ENV_PREFIX}{name.upper()} must be an integer, got '{raw}'.") from exc
    return raw


def read_settings_file(path: Path) -> dict[str, Any]:
    """Parse the JSON settings file at ``path`` into field values."""

    try:
        data = json.loads(path.read_text("utf-8"))
    except OSError as exc:
        raise SettingsError(f"Unable to read settings file {str(path)!r}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Settings file {str(path)!r} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {str(path)!r} must contain a JSON object.")

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _FIELD_TYPES:
            raise SettingsError(f"Unknown setting '{key}' in {str(path)!r}.")
        values[key] = _coerce_json(key, value)
    return values


def environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field in fields(Settings):
        raw = environ.get(ENV_PREFIX + field.name.upper())
        if raw is not None:
            values[field.name] = _coerce_env(field.name, raw)
    return values


def load_settings(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from defaults, a settings file and the environment.

    When ``path`` is not given the file named by ``MANDELBROT_SETTINGS`` is used,
    if any. Environment variables such as ``MANDELBROT_WIDTH`` override values
    read from the file.
    """

    environ = os.environ if environ is None else environ
    if path is None:
        path = environ.get(SETTINGS_ENV) or None

    settings = Settings()
    if path is not None:
        settings = replace(settings, **read_settings_file(Path(path).expanduser()))
    settings = replace(settings, **environment_overrides(environ))
    return settings.validate()

"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from assistant_core.config.domain.config import AppConfig
from assistant_core.config.domain.observer import ConfigObserver
from assistant_core.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from assistant_core.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

# Above this, models routinely emit malformed tool-call arguments.
_TEMPERATURE_WARNING_THRESHOLD = 1.0


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an AppConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> AppConfig:
        """
        Load, interpolate, validate, and return an AppConfig from a YAML file.

        A relative transcript_path is resolved against the config file's directory.

        Raises:
            ConfigLoadError: if the file cannot be read or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the document is not a mapping or the schema is violated.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        cfg = _build_config(interpolated=interpolate(raw), base_dir=path.parent)
        if cfg.orchestrator.temperature > _TEMPERATURE_WARNING_THRESHOLD:
            self._observer.config_temperature_warning(cfg.orchestrator.temperature)
        self._observer.config_loaded(name=cfg.name, model=cfg.orchestrator.model)
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path) from exc
    except OSError as exc:
        raise ConfigLoadError(path, reason=str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path, reason=f"invalid YAML ({exc})") from exc


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _build_config(interpolated: Any, base_dir: Path) -> AppConfig:
    if not isinstance(interpolated, dict):
        raise ConfigValidationError("top-level YAML document must be a mapping")
    try:
        cfg = AppConfig.model_validate(interpolated)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc

    if cfg.transcript_path is not None and not cfg.transcript_path.is_absolute():
        cfg = cfg.model_copy(update={"transcript_path": base_dir / cfg.transcript_path})
    return cfg

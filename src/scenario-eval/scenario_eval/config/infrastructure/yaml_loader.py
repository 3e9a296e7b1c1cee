"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from scenario_eval.config.domain.config import HarnessConfig
from scenario_eval.config.domain.observer import ConfigObserver
from scenario_eval.config.infrastructure.env_interpolation import (
    missing_vars,
    substitute,
)
from scenario_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
    SystemPromptLoadError,
)

# Keys whose `path` value is resolved against the config file's directory.
_PATH_SECTIONS = ("scenarios", "system_prompt", "catalog")


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a HarnessConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> HarnessConfig:
        """
        Load, interpolate, validate, and return a HarnessConfig from a YAML file.

        The backend credential is normally supplied as ``${SOME_API_KEY}``; an
        unset variable is a fatal configuration error, raised before anything runs.

        Raises:
            ConfigLoadError: if the file is missing, unreadable, or not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated.
        """
        raw = _parse_yaml(path=path)
        missing = missing_vars(raw, os.environ)
        if missing:
            raise MissingEnvVarsError(missing)
        interpolated = substitute(raw, os.environ)
        resolved = _resolve_relative_paths(data=interpolated, base_dir=path.parent)
        cfg = _build_config(resolved=resolved)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, version=cfg.version)
        return cfg


def read_system_prompt(cfg: HarnessConfig) -> str:
    """Return the system prompt text, reading it from disk when configured by path.

    Raises:
        SystemPromptLoadError: if the file is missing, unreadable, or blank.
    """
    if cfg.system_prompt.text is not None:
        return cfg.system_prompt.text
    path = cfg.system_prompt.path
    assert path is not None
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SystemPromptLoadError(path=path, reason="file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemPromptLoadError(
            path=path, reason=f"cannot read file ({exc})"
        ) from exc
    if not text.strip():
        raise SystemPromptLoadError(path=path, reason="file is empty")
    return text


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(path=path, reason=f"cannot read file ({exc})") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return data


def _resolve_relative_paths(data: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    resolved = dict(data)
    for section in _PATH_SECTIONS:
        block = resolved.get(section)
        if not isinstance(block, dict):
            continue
        raw_path = block.get("path")
        if isinstance(raw_path, str) and not Path(raw_path).is_absolute():
            resolved[section] = {**block, "path": str(base_dir / raw_path)}
    return resolved


def _build_config(resolved: Any) -> HarnessConfig:
    try:
        return HarnessConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: HarnessConfig, observer: ConfigObserver) -> None:
    if cfg.backend.timeout_seconds is None:
        observer.config_backend_timeout_warning(model=cfg.backend.model)

"""Utilities for reading mk configuration from YAML."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mk.errors import MkError
from mk.locator import DEFAULT_SCHEME
from mk.logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = 'MK_CONFIG'
VERBOSE_ENV_VAR = 'MK_VERBOSE'
DEFAULT_CONFIG_PATH = Path('~/.config/mk/config.yaml')
DEFAULT_PASTEBOARD = 'mkStreamingPreview'


class MkConfigError(MkError):
    """Raised when mk configuration is invalid."""


class MkConfig(BaseModel):
    """Settings documented in config.yaml."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    scheme: str = DEFAULT_SCHEME
    pasteboard: str = DEFAULT_PASTEBOARD
    opener: list[str] = Field(default_factory=lambda: ['open'])
    verbose: bool = False

    @field_validator('scheme', 'pasteboard')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that the value is not blank."""
        if not v.strip():
            msg = 'value cannot be empty'
            raise ValueError(msg)
        return v.strip()

    @field_validator('opener')
    @classmethod
    def validate_opener(cls, v: list[str]) -> list[str]:
        """Validate that the opener names an executable."""
        if not v or not v[0].strip():
            msg = 'opener must name an executable'
            raise ValueError(msg)
        return v


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    logger.debug('loading_config', config=str(config_path))
    try:
        with config_path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as exc:
        msg = f'could not read configuration file {config_path}: {exc.strerror}'
        raise MkConfigError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f'failed to parse YAML: {exc}'
        raise MkConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f'configuration root must be a mapping in {config_path}'
        raise MkConfigError(msg)

    return data


def config_path_from_env(environ: dict[str, str] | None = None) -> tuple[Path, bool]:
    """Return the configuration path and whether it was chosen explicitly."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def verbose_from_env(environ: dict[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(VERBOSE_ENV_VAR, '').strip().lower() in {'1', 'true', 'yes', 'on'}


def load_config(config_path: Path, *, required: bool = False) -> MkConfig:
    """Load mk configuration from YAML.

    A missing file yields the defaults unless ``required`` is set.
    """
    if not config_path.exists():
        if required:
            msg = f'configuration file not found: {config_path}'
            raise MkConfigError(msg)
        logger.debug('config_not_found_using_defaults', config=str(config_path))
        return MkConfig()

    config_data = _load_yaml_config(config_path)

    try:
        return MkConfig.model_validate(config_data)
    except ValidationError as exc:
        logger.debug('config_validation_failed', errors=[error['msg'] for error in exc.errors()])
        first = exc.errors()[0]
        location = '.'.join(str(part) for part in first['loc']) or '<root>'
        msg = f'invalid mk configuration in {config_path}: {location}: {first["msg"]}'
        raise MkConfigError(msg) from exc


def load_config_from_env(environ: dict[str, str] | None = None) -> MkConfig:
    """Load configuration from $MK_CONFIG or the default location."""
    config_path, explicit = config_path_from_env(environ)
    config = load_config(config_path, required=explicit)
    if verbose_from_env(environ) and not config.verbose:
        config = config.model_copy(update={'verbose': True})
    return config


__all__ = [
    'CONFIG_ENV_VAR',
    'DEFAULT_CONFIG_PATH',
    'DEFAULT_PASTEBOARD',
    'MkConfig',
    'MkConfigError',
    'load_config',
    'load_config_from_env',
]

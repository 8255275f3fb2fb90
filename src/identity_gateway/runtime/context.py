from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from src.identity_gateway.runtime.config.config_data import ConfigData
from src.identity_gateway.runtime.config.config_template import load_templated_yaml
from src.identity_gateway.runtime.config.settings import EnvironmentVariables


@dataclass(frozen=True)
class AppContext:
    """Application context containing configuration."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load the process configuration from the configured YAML file.

    Falls back to built-in defaults when the file does not exist so that
    tooling and tests can import the package without a deployment config.
    """
    env = EnvironmentVariables()
    path = Path(env.config_file)
    if not path.exists():
        logger.warning(f"Configuration file {path} not found, using defaults")
        config = ConfigData()
    else:
        config = load_templated_yaml(path)

    if env.log_level:
        config.logging.level = env.log_level
    return config


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Dump only the fields of ``model`` that were explicitly set, at any depth.

    A field assigned directly is dumped whole. A nested model that was only
    mutated in place contributes just its own explicitly set fields.
    """
    result: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if name in model.model_fields_set:
            result[name] = value.model_dump() if isinstance(value, BaseModel) else value
        elif isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                result[name] = nested
    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set parts of ``override_config`` over ``base_config``."""
    merged = _deep_merge(base_config.model_dump(), _explicit_fields(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the enclosing context.

    Example:
        override = ConfigData()
        override.platform.app_id = "AK-test"
        with with_context(override):
            assert get_config().platform.app_id == "AK-test"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config

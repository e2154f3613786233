from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from birth_quality.exceptions import BirthQualityException

logger = logging.getLogger(__name__)


class SettingsError(BirthQualityException):
    """Raised when a settings value cannot be interpreted."""


class MappingVariant(StrEnum):
    RATIO = "ratio"
    LEGACY = "legacy"


@dataclass(frozen=True)
class BirthQualitySettings:
    prevent_short_lifespan_penalty: bool = False
    ageless_at_peak_birth_quality: bool = False
    variant: MappingVariant = MappingVariant.RATIO


_DEFAULTS: dict[str, object] = {
    "birth_quality": {
        "prevent_short_lifespan_penalty": False,
        "ageless_at_peak_birth_quality": False,
        "variant": "ratio",
    },
}

_TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "f", "no", "n", "off"})


def create_config(
    yaml_path: str = "birth_quality.yaml",
    env_prefix: str = "BQ",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g.
            ``BQ__BIRTH_QUALITY__VARIANT=legacy``.
        defaults: Default configuration values.
        overrides: Values that win over every other layer (CLI flags).
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _parse_bool(value: object, key: str) -> bool:
    # env vars always arrive as strings
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise SettingsError(f"Setting '{key}': expected a boolean, got '{value}'")


def load_settings(cfg: ConfigurationSet | None = None) -> BirthQualitySettings:
    if cfg is None:
        cfg = create_config()

    raw_variant = str(cfg["birth_quality.variant"]).strip().lower()
    try:
        variant = MappingVariant(raw_variant)
    except ValueError:
        raise SettingsError(f"Setting 'variant': unknown mapping variant '{raw_variant}'")

    settings = BirthQualitySettings(
        prevent_short_lifespan_penalty=_parse_bool(
            cfg["birth_quality.prevent_short_lifespan_penalty"], "prevent_short_lifespan_penalty"
        ),
        ageless_at_peak_birth_quality=_parse_bool(
            cfg["birth_quality.ageless_at_peak_birth_quality"], "ageless_at_peak_birth_quality"
        ),
        variant=variant,
    )
    logger.debug("Loaded settings: %s", settings)
    return settings

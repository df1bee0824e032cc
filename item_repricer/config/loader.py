from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

"""Config loader.

Responsibilities:
- Load YAML config (default: config/repricer.yml)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every missing key
- Apply environment overrides (REPRICER_OUTPUT_DIR)
"""

if TYPE_CHECKING:
    import jsonschema
    from jsonschema.exceptions import ValidationError
else:
    try:
        import jsonschema
        from jsonschema.exceptions import ValidationError
    except ImportError:  # pragma: no cover
        jsonschema = None  # type: ignore[assignment]
        ValidationError = Exception  # type: ignore[misc,assignment]


SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/repricer.yml")
OUTPUT_DIR_ENV = "REPRICER_OUTPUT_DIR"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class PricingConfig:
    """Markup rules applied by the pricing engine."""
    exempt_section: Any = 52  # compared with coercing equality
    threshold: Decimal = Decimal("150")  # price >= threshold -> high tier
    high_tier_percent: Decimal = Decimal("7")
    low_tier_percent: Decimal = Decimal("7.5")


@dataclass(frozen=True)
class RepricerConfig:
    allowed_units: tuple[Any, ...] = (1, 4)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    output_directory: str = "./output"
    export_sheet_name: str = "Updated Items"
    export_prefix: str = "updated_items"


def default_config() -> RepricerConfig:
    return RepricerConfig()


def _to_decimal(value: Any) -> Decimal:
    # str() first so 7.5 becomes Decimal("7.5"), not its binary expansion
    return Decimal(str(value))


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If jsonschema is unavailable, the schema file is missing
            or unreadable, or the config data violates the schema.
    """
    if jsonschema is None:
        raise ConfigError("jsonschema library is required for config validation")

    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> RepricerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = default_config()
    pricing_raw = data.get("pricing", {})
    base = defaults.pricing
    pricing = PricingConfig(
        exempt_section=pricing_raw.get("exempt_section", base.exempt_section),
        threshold=_to_decimal(pricing_raw.get("threshold", base.threshold)),
        high_tier_percent=_to_decimal(pricing_raw.get("high_tier_percent", base.high_tier_percent)),
        low_tier_percent=_to_decimal(pricing_raw.get("low_tier_percent", base.low_tier_percent)),
    )
    return RepricerConfig(
        allowed_units=tuple(data.get("allowed_units", defaults.allowed_units)),
        pricing=pricing,
        output_directory=data.get("output_directory", defaults.output_directory),
        export_sheet_name=data.get("export_sheet_name", defaults.export_sheet_name),
        export_prefix=data.get("export_prefix", defaults.export_prefix),
    )


def apply_env_overrides(cfg: RepricerConfig) -> RepricerConfig:
    """Return ``cfg`` with environment overrides applied (env wins over YAML)."""
    output_dir = os.getenv(OUTPUT_DIR_ENV)
    if output_dir:
        cfg = replace(cfg, output_directory=output_dir)
    return cfg

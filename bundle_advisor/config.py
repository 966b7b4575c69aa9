"""Rule threshold configuration.

Usage:
    thresholds = load("bundle-advisor.yaml")            # raises ConfigError on bad config
    thresholds = thresholds.merged(max_module_size=300_000)   # CLI overrides
    generate_template("bundle-advisor.yaml")            # writes example file to disk
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from bundle_advisor.rules.huge_modules import DEFAULT_MAX_MODULE_SIZE
from bundle_advisor.rules.large_vendor_chunks import DEFAULT_MAX_CHUNK_SIZE
from bundle_advisor.rules.lazy_load_candidates import DEFAULT_MIN_LAZY_LOAD_THRESHOLD

DEFAULT_CONFIG_PATH = "bundle-advisor.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Thresholds dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RuleThresholds:
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE
    max_module_size: int = DEFAULT_MAX_MODULE_SIZE
    min_lazy_load_threshold: int = DEFAULT_MIN_LAZY_LOAD_THRESHOLD

    def merged(self, **overrides: int | None) -> "RuleThresholds":
        """Return a copy with every non-None override applied."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigError(f"Unknown threshold(s): {', '.join(sorted(unknown))}")
        values = {k: v for k, v in overrides.items() if v is not None}
        for name, value in values.items():
            _check_positive(name, value)
        return replace(self, **values)


# YAML key -> dataclass field
_YAML_KEYS = {
    "maxChunkSize":         "max_chunk_size",
    "maxModuleSize":        "max_module_size",
    "minLazyLoadThreshold": "min_lazy_load_threshold",
}

# Environment variable -> dataclass field
_ENV_VARS = {
    "BUNDLE_ADVISOR_MAX_CHUNK_SIZE":          "max_chunk_size",
    "BUNDLE_ADVISOR_MAX_MODULE_SIZE":         "max_module_size",
    "BUNDLE_ADVISOR_MIN_LAZY_LOAD_THRESHOLD": "min_lazy_load_threshold",
}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str | None = None) -> RuleThresholds:
    """Load thresholds from a YAML file, or defaults when *config_path* is None.

    Environment variables (BUNDLE_ADVISOR_MAX_CHUNK_SIZE, ...) override file
    values.

    Raises:
        ConfigError: if the file is missing, malformed, or holds invalid values.
    """
    values: dict[str, int] = {}

    if config_path is not None:
        values.update(_read_file(config_path))

    for var, name in _ENV_VARS.items():
        raw = os.environ.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            values[name] = int(raw)
        except ValueError as exc:
            raise ConfigError(f"{var} must be an integer byte count, got '{raw}'") from exc

    return RuleThresholds().merged(**values)


def _read_file(config_path: str) -> dict[str, int]:
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `bundle-advisor init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    section = raw.get("thresholds") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'thresholds' in '{config_path}' must be a mapping.")

    errors: list[str] = []
    values: dict[str, int] = {}
    for key, value in section.items():
        name = _YAML_KEYS.get(key)
        if name is None:
            errors.append(f"  - unknown key 'thresholds.{key}'")
        elif isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(f"  - 'thresholds.{key}' must be a positive integer byte count")
        else:
            values[name] = value

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))
    return values


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"'{name}' must be a positive integer byte count, got {value!r}")


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = f"""\
thresholds:
  # Vendor bytes allowed in a single initial chunk (large-vendor-chunks)
  maxChunkSize: {DEFAULT_MAX_CHUNK_SIZE}
  # Size above which a module is reported (huge-modules)
  maxModuleSize: {DEFAULT_MAX_MODULE_SIZE}
  # Initial chunk size above which lazy loading is suggested (lazy-load-candidates)
  minLazyLoadThreshold: {DEFAULT_MIN_LAZY_LOAD_THRESHOLD}
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template bundle-advisor.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")

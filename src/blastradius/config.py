"""Run configuration: one immutable ``Config`` built per invocation.

Loaded from the first config file found in the project root (JSON or YAML),
then environment overrides (``BLASTRADIUS_MAX_DEPTH``,
``BLASTRADIUS_CACHE_DIR``).  Keys may be camelCase (``ignorePatterns``) or
snake_case (``ignore_patterns``).  Validation never raises; it returns
advisory warnings.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from blastradius import defaults
from blastradius.globs import matches_any
from blastradius.observability import LogLike, get_log


class ConfigError(Exception):
    """Raised when a config file cannot be created."""


@dataclass(frozen=True)
class Config:
    ignore_patterns: tuple[str, ...] = defaults.DEFAULT_IGNORE_PATTERNS
    test_patterns: tuple[str, ...] = ()            # empty: built-in naming rules
    bruno_path: str | None = None
    risk_weights: dict[str, float] = field(default_factory=dict)
    folder_mappings: dict[str, str] = field(default_factory=dict)
    high_risk_files: tuple[str, ...] = ()
    low_risk_files: tuple[str, ...] = ()
    max_depth: int = defaults.DEFAULT_MAX_DEPTH
    cache_dir: str = defaults.DEFAULT_CACHE_DIR

    def weight(self, signal: str, default: float) -> float:
        """Effective weight for a risk signal (config override or default)."""
        value = self.risk_weights.get(signal)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        return default

    def is_ignored(self, path: str) -> bool:
        return matches_any(path, self.ignore_patterns)

    def is_high_risk(self, path: str) -> bool:
        return matches_any(path, self.high_risk_files)

    def is_low_risk(self, path: str) -> bool:
        return matches_any(path, self.low_risk_files)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for key in ("ignore_patterns", "test_patterns", "high_risk_files", "low_risk_files"):
            d[key] = list(d[key])
        return d


_KEY_ALIASES = {
    "ignorePatterns": "ignore_patterns",
    "testPatterns": "test_patterns",
    "brunoPath": "bruno_path",
    "riskWeights": "risk_weights",
    "folderMappings": "folder_mappings",
    "highRiskFiles": "high_risk_files",
    "lowRiskFiles": "low_risk_files",
    "maxDepth": "max_depth",
    "cacheDir": "cache_dir",
}
_LIST_FIELDS = {"ignore_patterns", "test_patterns", "high_risk_files", "low_risk_files"}
_DICT_FIELDS = {"risk_weights", "folder_mappings"}
_KNOWN_FIELDS = set(Config.__dataclass_fields__)


def find_config_file(root: str | Path) -> Path | None:
    for name in defaults.CONFIG_FILE_NAMES:
        candidate = Path(root) / name
        if candidate.is_file():
            return candidate
    return None


def _read_config_file(path: Path, log: LogLike) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (OSError, ValueError, yaml.YAMLError) as e:
        log.warning("Failed to parse config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Config file %s does not contain an object, ignoring", path)
        return {}
    return data


def _normalize(raw: dict[str, Any], log: LogLike) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in _KNOWN_FIELDS:
            log.warning("Unknown config key '%s' ignored", key)
            continue
        if value is None:
            continue
        if name in _LIST_FIELDS:
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, (list, tuple)):
                log.warning("%s must be a list of patterns, got %r", key, value)
                continue
            values[name] = tuple(str(v) for v in value)
        elif name in _DICT_FIELDS:
            values[name] = dict(value) if isinstance(value, dict) else {}
        elif name == "max_depth":
            try:
                values[name] = int(value)
            except (TypeError, ValueError):
                log.warning("maxDepth must be an integer, got %r", value)
        else:
            values[name] = str(value)
    return values


def _env_overrides(log: LogLike) -> dict[str, Any]:
    values: dict[str, Any] = {}
    depth = os.environ.get("BLASTRADIUS_MAX_DEPTH")
    if depth:
        try:
            values["max_depth"] = int(depth)
        except ValueError:
            log.warning("BLASTRADIUS_MAX_DEPTH is not an integer: %r", depth)
    cache_dir = os.environ.get("BLASTRADIUS_CACHE_DIR")
    if cache_dir:
        values["cache_dir"] = cache_dir
    return values


def load_config(
    root: str | Path,
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    log: LogLike | None = None,
) -> Config:
    """Load configuration.

    Priority:
    1. ``overrides`` (CLI flags; ``None`` values are skipped)
    2. Environment variables
    3. Config file (explicit path, else first match in the project root)
    4. Defaults
    """
    log = get_log("config", log)
    values: dict[str, Any] = {}

    path = Path(config_path) if config_path else find_config_file(root)
    if path is not None:
        if path.is_file():
            values.update(_normalize(_read_config_file(path, log), log))
            log.info("Loaded configuration from %s", path)
        else:
            log.warning("Config file not found at explicit path: %s", path)

    values.update(_env_overrides(log))
    if overrides:
        values.update(_normalize({k: v for k, v in overrides.items() if v is not None}, log))
    return Config(**values)


def validate_config(config: Config) -> list[str]:
    """Return advisory warnings for out-of-range values.  Never raises."""
    warnings: list[str] = []
    lo, hi = defaults.MAX_DEPTH_RANGE
    if not lo <= config.max_depth <= hi:
        warnings.append(f"maxDepth should be between {lo} and {hi}")

    wlo, whi = defaults.RISK_WEIGHT_RANGE
    for key, value in config.risk_weights.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not wlo <= value <= whi:
            warnings.append(f"riskWeights.{key} should be a number between {wlo} and {whi}")
    return warnings


def write_default_config(root: str | Path) -> Path:
    """Write ``.blastradiusrc.json`` with the default values."""
    existing = find_config_file(root)
    if existing is not None:
        raise ConfigError(f"Configuration file {existing.name} already exists")
    target = Path(root) / defaults.DEFAULT_CONFIG_FILE
    data = Config().to_dict()
    camel = {v: k for k, v in _KEY_ALIASES.items()}
    payload = {camel.get(k, k): v for k, v in data.items()}
    target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return target

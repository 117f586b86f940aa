"""Shared CLI helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from blastradius.config import Config, load_config, validate_config
from blastradius.observability import get_log


def _out(data: Any) -> int:
    print(json.dumps(data, indent=2, default=str))
    if isinstance(data, dict) and "error" in data:
        return 1
    return 0


def _root(args: Any) -> Path:
    return Path(args.root).resolve()


def _load_config(args: Any, **overrides: Any) -> Config:
    """Load config for ``args.root`` and log any advisory warnings."""
    config = load_config(_root(args), getattr(args, "config", None), overrides)
    log = get_log("cli")
    for warning in validate_config(config):
        log.warning("Config: %s", warning)
    return config

"""CLI for blastradius: grouped subcommands.

Commands:
  blastradius analyze [--base REF] [--head REF] [--staged] [--files F ...]
  blastradius graph
  blastradius cache clear
  blastradius config {init, validate}
"""

from __future__ import annotations

import sys

from blastradius.cli._helpers import _out  # noqa: F401 (re-exported for tests)
from blastradius.cli._parser import build_parser
from blastradius.cli.commands import (
    cmd_analyze,
    cmd_cache_clear,
    cmd_config_init,
    cmd_config_validate,
    cmd_graph,
)
from blastradius.observability import setup_logging


# ===================================================================
# Dispatch
# ===================================================================

_DISPATCH = {
    ("analyze", None): cmd_analyze,
    ("graph", None): cmd_graph,
    ("cache", "clear"): cmd_cache_clear,
    ("config", "init"): cmd_config_init,
    ("config", "validate"): cmd_config_validate,
}

# Map subcmd attr names to the dispatch key
_SUBCMD_ATTR = {
    "cache": "cache_cmd",
    "config": "config_cmd",
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level, json_output=args.log_json)

    subcmd_attr = _SUBCMD_ATTR.get(args.command)
    subcmd = getattr(args, subcmd_attr, None) if subcmd_attr else None
    handler = _DISPATCH.get((args.command, subcmd))
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)

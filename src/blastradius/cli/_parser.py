"""Argparse parser definition for the blastradius CLI."""

from __future__ import annotations

import argparse

from blastradius import __version__


def _common() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=".", help="Project root (default: current directory)")
    common.add_argument("--config", help="Explicit config file path")
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blastradius",
        description="Static test impact analysis for TypeScript/JavaScript projects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level (stderr)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command")
    common = _common()

    _register_analyze_command(sub, common)
    _register_graph_command(sub, common)
    _register_cache_commands(sub, common)
    _register_config_commands(sub, common)
    return parser


def _register_analyze_command(sub: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    p = sub.add_parser("analyze", parents=[common], help="Find tests impacted by a change")
    p.add_argument("--base", help="Base ref (compare base...head, or base against the working tree)")
    p.add_argument("--head", help="Head ref (requires --base)")
    p.add_argument("--staged", action="store_true", help="Analyze staged changes only")
    p.add_argument("--files", nargs="+", help="Explicit changed files instead of a git diff")
    p.add_argument("--bruno", help="Bruno collection directory")
    p.add_argument("--no-cache", action="store_true", help="Do not read or write the import cache")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Show every impact reason")


def _register_graph_command(sub: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    p = sub.add_parser("graph", parents=[common], help="Dependency graph metrics")
    p.add_argument("--no-cache", action="store_true")
    p.add_argument("--top", type=int, default=10, help="Entries per ranked list")


def _register_cache_commands(sub: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    cache_p = sub.add_parser("cache", help="Import cache maintenance")
    cache_sub = cache_p.add_subparsers(dest="cache_cmd")
    cache_sub.add_parser("clear", parents=[common], help="Reset the import cache")


def _register_config_commands(sub: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    config_p = sub.add_parser("config", help="Configuration file")
    config_sub = config_p.add_subparsers(dest="config_cmd")
    config_sub.add_parser("init", parents=[common], help="Write .blastradiusrc.json with defaults")
    config_sub.add_parser("validate", parents=[common], help="Report out-of-range config values")

"""Unified CLI for waypoint-engine.

Usage:
    waypoint render <folder>
    waypoint scan <note>
    waypoint refresh <path>
    waypoint watch [--debounce SECONDS]
    waypoint config show
    waypoint config set <key> <value>...
"""

import argparse
import sys

from waypoint_engine.cli.config import cmd_config_set, cmd_config_show
from waypoint_engine.cli.session import configure_logging
from waypoint_engine.cli.tree import cmd_refresh, cmd_render, cmd_scan
from waypoint_engine.cli.watch import cmd_watch


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Generated tables of contents for folder notes",
    )
    parser.add_argument(
        "--vault", default=None,
        help="Vault root directory (default: $WAYPOINT_VAULT_DIR or cwd)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output",
    )
    sub = parser.add_subparsers(dest="command")

    render = sub.add_parser("render", help="Print the tree for a folder")
    render.add_argument("folder")

    scan = sub.add_parser("scan", help="Act on a trigger token in a note")
    scan.add_argument("note")

    refresh = sub.add_parser(
        "refresh", help="Regenerate marked notes at and above a path",
    )
    refresh.add_argument("path")

    watch = sub.add_parser("watch", help="Keep blocks in sync with the vault")
    watch.add_argument(
        "--debounce", type=float, default=None,
        help="Quiet period in seconds before a refresh pass",
    )

    cfg = sub.add_parser("config", help="Settings operations")
    cfg_sub = cfg.add_subparsers(dest="subcommand")
    cfg_sub.add_parser("show", help="Show current settings")
    cfg_set = cfg_sub.add_parser("set", help="Change a setting")
    cfg_set.add_argument("key")
    cfg_set.add_argument("values", nargs="+")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    dispatch = {
        ("render", ""): cmd_render,
        ("scan", ""): cmd_scan,
        ("refresh", ""): cmd_refresh,
        ("watch", ""): cmd_watch,
        ("config", "show"): cmd_config_show,
        ("config", "set"): cmd_config_set,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())

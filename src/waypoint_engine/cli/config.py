"""Settings CLI commands."""

import argparse

from waypoint_engine.cli.session import open_store
from waypoint_engine.settings.loader import settings_to_dict


def cmd_config_show(args: argparse.Namespace) -> int:
    store = open_store(args)
    print(f"\n  Settings ({store.path})")
    print(f"  {'─' * 40}")
    for key, value in settings_to_dict(store.current).items():
        if isinstance(value, list):
            print(f"  {key + ':':<28}{', '.join(str(v) for v in value) or '(none)'}")
        else:
            print(f"  {key + ':':<28}{value}")
    print()
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    store = open_store(args)
    value = args.values if args.key == "ignore_paths" else " ".join(args.values)
    ok, message = store.update(**{args.key: value})
    if not ok:
        print(f"ERROR: {message}")
        return 1
    print(message)
    return 0

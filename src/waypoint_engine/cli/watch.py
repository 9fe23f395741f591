"""Watch CLI command."""

import argparse
import asyncio

from waypoint_engine.cli.session import open_engine


def cmd_watch(args: argparse.Namespace) -> int:
    from waypoint_engine.watcher import watch

    engine = open_engine(args)
    if args.debounce is not None:
        engine.coalescer.delay = args.debounce
    print(f"Watching {engine.vault.root} (Ctrl-C to stop)")
    try:
        asyncio.run(watch(engine))
    except KeyboardInterrupt:
        print("\nStopped.")
    return 0

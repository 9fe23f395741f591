"""Render, scan, and refresh CLI commands."""

import argparse
import asyncio

from waypoint_engine.cli.session import open_engine, vault_relpath
from waypoint_engine.vault.nodes import Document, Folder


def cmd_render(args: argparse.Namespace) -> int:
    engine = open_engine(args)
    rel = vault_relpath(engine, args.folder)
    folder = engine.vault.get_folder(rel) if rel is not None else None
    if folder is None:
        print(f"ERROR: '{args.folder}' is not a folder in {engine.vault.root}")
        return 1
    print(asyncio.run(engine.render_folder(folder)))
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    engine = open_engine(args)
    rel = vault_relpath(engine, args.note)
    doc = engine.vault.get_document(rel) if rel else None
    if doc is None:
        print(f"ERROR: '{args.note}' is not a note in {engine.vault.root}")
        return 1

    result = asyncio.run(engine.detect_flags(doc))
    messages = {
        "none": "No trigger token found.",
        "generated": "Generated block and refreshed ancestors.",
        "rejected": "Trigger token is misplaced; replaced it with an error comment.",
    }
    print(f"{doc.path}: {messages[result]}")
    return 1 if result == "rejected" else 0


def cmd_refresh(args: argparse.Namespace) -> int:
    engine = open_engine(args)
    rel = vault_relpath(engine, args.path)
    node = engine.vault.get_node(rel) if rel is not None else None
    if node is None:
        print(f"ERROR: '{args.path}' does not exist in {engine.vault.root}")
        return 1
    if isinstance(node, Document):
        node = engine.vault.parent_of(node) or Folder("")

    updated = asyncio.run(engine.update_ancestors(node, include_self=True))
    print("Refresh Results")
    print("─" * 40)
    for found in updated:
        print(f"  {found.kind.value:<9} {found.note.path}")
    print(f"\n  {len(updated)} note(s) regenerated")
    return 0

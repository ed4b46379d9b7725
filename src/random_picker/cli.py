"""
Command-line interface for random-picker.
"""

import argparse
import json
import logging
import sys

from .core import NO_REPEAT_LIMIT, init_picker
from .errors import ParseError, PersistenceError
from .parser import PickRequest, check_count, parse_request
from .picker import RandomPicker, RecordingHost
from .sampler import pick
from .store import JsonFilePersistence, PickerStore


def _open_store(args) -> PickerStore:
    if args.store is None:
        init_picker()
    return PickerStore.load(JsonFilePersistence(args.store))


def _print_list(entries, as_json: bool, numbered: bool = False):
    if as_json:
        print(json.dumps(entries, indent=2, ensure_ascii=False))
        return
    for i, entry in enumerate(entries):
        print(f"{i}: {entry}" if numbered else entry)


def _fail(message: str, detail: str = ""):
    print(message, file=sys.stderr)
    if detail:
        print(detail, file=sys.stderr)
    sys.exit(1)


def cmd_pick(args):
    """Draw values from a random definition."""
    text = " ".join(args.definition)
    try:
        if args.count is None and args.max_repeat is None:
            request = parse_request(text)
        else:
            request = PickRequest(
                definition=text,
                result_count=1 if args.count is None else check_count(args.count, "result count"),
                max_repeat_count=(
                    NO_REPEAT_LIMIT
                    if args.max_repeat is None
                    else check_count(args.max_repeat, "max repeat count")
                ),
            )
    except ParseError as e:
        _fail(f"{e.title}: {e.message}", e.help_text)

    outcome = pick(request)
    if not outcome.ok:
        _fail(f"{outcome.error.title}: {outcome.error.message}")

    if not args.no_history:
        store = _open_store(args)
        try:
            store.add_history(request.definition)
        except PersistenceError as e:
            print(f"Warning: {e.message}", file=sys.stderr)

    _print_list(outcome.values, args.json)
    if outcome.short and not args.json:
        print(
            f"(only {len(outcome.values)} of {request.result_count} values: repeat cap reached)",
            file=sys.stderr,
        )


def cmd_history(args):
    """List previously used definitions, most recent first."""
    store = _open_store(args)
    entries = store.history(args.search)
    if not entries and not args.json:
        print("No history result")
        return
    _print_list(entries, args.json, numbered=True)


def cmd_favorites(args):
    """List favorite definitions."""
    store = _open_store(args)
    entries = store.favorites(args.search)
    if not entries and not args.json:
        print("No favorite result")
        return
    _print_list(entries, args.json, numbered=True)


def cmd_favorite(args):
    """Add, remove or move a favorite."""
    store = _open_store(args)
    try:
        if args.subcommand == "add":
            changed = store.add_favorite(args.definition)
            print("Added to favorites" if changed else "Already a favorite")
        elif args.subcommand == "remove":
            changed = store.remove_favorite(args.definition)
            print("Removed from favorites" if changed else "Not a favorite")
        elif args.subcommand == "move":
            changed = store.move_favorite(args.definition, args.index)
            print(f"Moved to position {args.index}" if changed else "Not a favorite")
        else:
            print("Usage: random-picker favorite <add|remove|move>")
    except PersistenceError as e:
        _fail(f"{e.title}: {e.message}")


def cmd_query(args):
    """Render the menu entries a launcher would show for the query."""
    store = _open_store(args)
    host = RecordingHost()
    picker = RandomPicker(host, store)

    text = " ".join(args.text)
    entries = picker.query(text)

    if args.select is not None:
        if not 0 <= args.select < len(entries):
            _fail(f"No entry {args.select}")
        try:
            entries[args.select].activate()
        except PersistenceError as e:
            print(f"Warning: {e.message}", file=sys.stderr)
        if host.clipboard is not None:
            print(host.clipboard)
            return
        if host.queries:
            print(f"> {host.queries[-1]}")
            entries = picker.query(host.queries[-1])

    for i, entry in enumerate(entries):
        marker = "!" if entry.warning else " "
        line = f"{marker}[{i}] {entry.title}"
        if entry.subtitle:
            line += f"  ({entry.subtitle.splitlines()[0]})"
        print(line)


def main():
    parser = argparse.ArgumentParser(
        description="Random Picker: weighted random choice from a definition string",
        prog="random-picker",
    )
    parser.add_argument("--store", default=None, help="Path to the store file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Pick
    pick_parser = subparsers.add_parser(
        "pick", help="Pick from <item>[:weight][;<item>[:weight]...] [count [max-repeat]]"
    )
    pick_parser.add_argument("definition", nargs="+", help="Random definition")
    pick_parser.add_argument("-n", "--count", type=int, help="Number of values to draw")
    pick_parser.add_argument(
        "-m", "--max-repeat", type=int, help="How often the same item may be drawn"
    )
    pick_parser.add_argument(
        "--no-history", action="store_true", help="Do not record the definition"
    )
    pick_parser.add_argument("--json", action="store_true", help="JSON output")

    # History
    history_parser = subparsers.add_parser("history", help="List previously used definitions")
    history_parser.add_argument("search", nargs="?", help="Only entries containing this text")
    history_parser.add_argument("--json", action="store_true", help="JSON output")

    # Favorites
    favorites_parser = subparsers.add_parser("favorites", help="List favorite definitions")
    favorites_parser.add_argument("search", nargs="?", help="Only entries containing this text")
    favorites_parser.add_argument("--json", action="store_true", help="JSON output")

    favorite_parser = subparsers.add_parser("favorite", help="Manage favorites")
    favorite_sub = favorite_parser.add_subparsers(dest="subcommand")

    add_parser = favorite_sub.add_parser("add", help="Add a favorite")
    add_parser.add_argument("definition", help="Random definition")

    remove_parser = favorite_sub.add_parser("remove", help="Remove a favorite")
    remove_parser.add_argument("definition", help="Random definition")

    move_parser = favorite_sub.add_parser("move", help="Move a favorite to a position")
    move_parser.add_argument("definition", help="Random definition")
    move_parser.add_argument("index", type=int, help="New position, 0 is first")

    # Query (launcher view)
    query_parser = subparsers.add_parser("query", help="Show launcher entries for a query")
    query_parser.add_argument("text", nargs="*", help="Query text, e.g. 'pick a;b 2'")
    query_parser.add_argument("--select", type=int, help="Activate the entry at this index")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "pick":
        cmd_pick(args)
    elif args.command == "history":
        cmd_history(args)
    elif args.command == "favorites":
        cmd_favorites(args)
    elif args.command == "favorite":
        cmd_favorite(args)
    elif args.command == "query":
        cmd_query(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

# banis/cli.py
"""
Command line reader for Banis.

Usage:
    banis list                         # Catalog, with cached entries marked
    banis read japjiSahib              # Show a Bani (cache first, then BaniDB)
    banis read japjiSahib --json       # Dump it in the normalized envelope
    banis preload --force              # Download every Bani into the cache
    banis settings --hindi on          # Show Hindi under each line
    banis clear-cache
"""
import argparse
import json
import sys
from typing import List, Optional

import tqdm
from colorama import Fore, Style, init

from . import __version__
from .bani_cache import BaniCache
from .banidb_client import BaniDBClient
from .data_model import BaniDataModel
from .decoder import encode_bani
from .log import setup_logging
from .models import Bani, BaniCategory, BaniType
from .settings import Preferences, PreferencesStore

SEPARATOR = "─" * 55


def build_data_model() -> BaniDataModel:
    """Composition root: one cache, one client, one preferences store."""
    return BaniDataModel(BaniCache(), BaniDBClient(), PreferencesStore())


def render_bani(bani: Bani, preferences: Preferences):
    print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + f"📖 {bani.name}")
    print(Fore.RED + "├" + SEPARATOR)
    for number, line in enumerate(bani.lines, start=1):
        print(Fore.RED + "│ " + Fore.CYAN + f"{number:>3} " + Style.BRIGHT + Fore.WHITE + line.line)
        if preferences.show_translation and line.translation:
            print(Fore.RED + "│     " + Fore.WHITE + line.translation)
        if preferences.show_hindi_translation and line.hindi_translation:
            print(Fore.RED + "│     " + Fore.YELLOW + line.hindi_translation)
    print(Fore.RED + "╰" + SEPARATOR)


def _wait_with_progress(model: BaniDataModel, total: int) -> List:
    outcomes = []
    with tqdm.tqdm(total=total, desc=Fore.RED + "Progress" + Fore.RESET, unit="bani", colour="red") as pbar:
        for outcome in model.iter_completions():
            outcomes.append(outcome)
            pbar.update(1)
    return outcomes


def cmd_list(model: BaniDataModel, args) -> int:
    cached = set(model.cache.cached_types())
    for category in BaniCategory:
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + category.display_title)
        for bani_type in BaniType:
            if bani_type.category is not category:
                continue
            if bani_type.is_bundled_pdf:
                status = Style.DIM + Fore.WHITE + "PDF"
            elif bani_type in cached:
                status = Fore.GREEN + "✓ cached"
            else:
                status = Style.DIM + Fore.WHITE + "-"
            print(Fore.RED + f"├─ {Fore.CYAN}{bani_type.value:<20}{Fore.WHITE} {bani_type.display_title}  {status}")
        print(Fore.RED + "╰" + SEPARATOR)
    return 0


def cmd_read(model: BaniDataModel, args) -> int:
    try:
        bani_type = BaniType.from_name(args.bani)
    except ValueError as e:
        print(Fore.RED + f"❌ {e}")
        return 1
    if bani_type.is_bundled_pdf:
        print(Fore.YELLOW + f"📄 {bani_type.display_title} is a bundled PDF and cannot be read here.")
        return 1

    if model.fetch_bani(bani_type) is not None:
        print(Fore.CYAN + f"⏳ Fetching {bani_type.display_title}...", file=sys.stderr)
    # First run on this install also warms the cache with everything else
    queued = model.preload_all_banis()
    if queued:
        print(Fore.CYAN + f"⏳ Downloading {queued} banis for offline use...", file=sys.stderr)
        _wait_with_progress(model, model.pending)
    else:
        model.wait_for_pending()

    bani = model.current_bani
    if bani is None:
        print(Fore.RED + f"❌ {bani_type.display_title} is not available yet. Check your connection and try again.")
        return 1

    if args.json:
        print(json.dumps(encode_bani(bani), ensure_ascii=False, indent=2))
    else:
        render_bani(bani, model.preferences.preferences)
    return 0


def cmd_preload(model: BaniDataModel, args) -> int:
    queued = model.preload_all_banis(force=args.force)
    if not queued:
        print(Fore.GREEN + "✓ Banis already preloaded. Use --force to download again.")
        return 0

    print(Fore.CYAN + f"⏳ Downloading {queued} banis...")
    outcomes = _wait_with_progress(model, queued)
    failed = [outcome for outcome in outcomes if not outcome.ok]
    if failed:
        print(Fore.YELLOW + f"\n⚠️ {len(failed)} bani(s) could not be downloaded:")
        for outcome in failed:
            print(Fore.YELLOW + f"  • {outcome.bani_type.value}: {outcome.error}")
    print(Fore.GREEN + f"\n✓ {queued - len(failed)} of {queued} banis saved for offline use.")
    return 0


def cmd_clear_cache(model: BaniDataModel, args) -> int:
    model.cache.clear()
    print(Fore.GREEN + "🧹 Banis cache cleared.")
    return 0


def cmd_settings(model: BaniDataModel, args) -> int:
    changes = {}
    if args.translation is not None:
        changes["show_translation"] = args.translation == "on"
    if args.hindi is not None:
        changes["show_hindi_translation"] = args.hindi == "on"
    preferences = model.preferences.update(**changes) if changes else model.preferences.preferences

    rows = [
        ("English translation", preferences.show_translation),
        ("Hindi translation", preferences.show_hindi_translation),
        ("Preloaded", preferences.has_preloaded_banis),
    ]
    print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "⚙️ Settings")
    for label, enabled in rows:
        status = Fore.GREEN + "✓ Enabled" if enabled else Fore.RED + "✗ Disabled"
        print(Fore.RED + f"├─ {Fore.WHITE}{label:<20} : {status}")
    print(Fore.RED + "╰" + SEPARATOR)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="banis", description="Read Sikh Banis from BaniDB, offline after first use.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all banis").set_defaults(handler=cmd_list)

    read = subparsers.add_parser("read", help="Show a bani")
    read.add_argument("bani", help="Bani key, e.g. japjiSahib")
    read.add_argument("--json", action="store_true", help="Print the normalized JSON instead")
    read.set_defaults(handler=cmd_read)

    preload = subparsers.add_parser("preload", help="Download all banis into the cache")
    preload.add_argument("--force", action="store_true", help="Download again even if already preloaded")
    preload.set_defaults(handler=cmd_preload)

    subparsers.add_parser("clear-cache", help="Delete cached banis").set_defaults(handler=cmd_clear_cache)

    settings = subparsers.add_parser("settings", help="Show or change display settings")
    settings.add_argument("--translation", choices=["on", "off"])
    settings.add_argument("--hindi", choices=["on", "off"])
    settings.set_defaults(handler=cmd_settings)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init(autoreset=True)
    setup_logging(verbose=args.verbose)
    try:
        with build_data_model() as model:
            return args.handler(model, args)
    except KeyboardInterrupt:
        print(Fore.YELLOW + "\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())

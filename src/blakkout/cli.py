"""blakkout CLI: unified entry point.

Usage:
    blakkout                            # open the console
    blakkout console --no-persist       # console with in-memory unlocks
    blakkout status                     # how many secrets are found
    blakkout rewards                    # the trophy room
    blakkout reset                      # lock everything again
    blakkout config list                # every setting and where it came from
    blakkout config get debounce_ms
    blakkout config set toast_ms 8000 --global
"""

import argparse
import sys

from dotenv import load_dotenv
load_dotenv()

from blakkout.config import load_config, list_config, set_global_value, set_project_value
from blakkout.log import enable_console_export, set_level, warn


# ============================================================
# HELPERS
# ============================================================

def _provider(args):
    from blakkout.provider import Provider
    from blakkout.unlocks.store import MemoryStore
    config = load_config()
    store = MemoryStore() if getattr(args, "no_persist", False) else None
    return Provider(config=config, store=store)


# ============================================================
# COMMANDS
# ============================================================

def cmd_console(args):
    from blakkout.repl import run_repl
    run_repl(provider=_provider(args))


def cmd_status(args):
    with _provider(args) as p:
        reg = p.registry
        print(f"\n  {reg.unlocked_count()}/{reg.total()} secrets found.\n")
        for uid, found in reg.state().items():
            mark = "x" if found else " "
            print(f"    [{mark}] {uid}")
        print()


def cmd_rewards(args):
    from blakkout.rewards import render_rewards
    with _provider(args) as p:
        render_rewards(p.registry)


def cmd_reset(args):
    if not args.yes:
        answer = input("  lock every secret again? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("  nothing changed.")
            return
    with _provider(args) as p:
        p.registry.reset()
        if p.registry.stats()["write_failures"]:
            print("  reset in memory only; could not write the store.")
        else:
            print("  all secrets locked.")


def cmd_config_list(args):
    for key, entry in list_config().items():
        print(f"  {key:<24} {entry['value']!r:<28} ({entry['source']})")


def cmd_config_get(args):
    config = load_config()
    if args.key not in config:
        print(f"  unknown key: {args.key}", file=sys.stderr)
        sys.exit(1)
    print(config.get(args.key))


def cmd_config_set(args):
    try:
        if args.global_:
            set_global_value(args.key, args.value)
        else:
            set_project_value(args.key, args.value)
    except ValueError as e:
        print(f"  {e}", file=sys.stderr)
        sys.exit(1)
    where = "global" if args.global_ else "project"
    print(f"  {args.key} = {args.value} ({where})")


# ============================================================
# PARSER
# ============================================================

def _build_parsers(subparsers):
    """register all subcommands."""
    p = subparsers.add_parser("console", help="Open the interactive console")
    p.add_argument("--no-persist", action="store_true", help="Keep unlocks in memory only")
    p.set_defaults(func=cmd_console)

    p = subparsers.add_parser("status", help="Secrets found so far")
    p.add_argument("--no-persist", action="store_true")
    p.set_defaults(func=cmd_status)

    p = subparsers.add_parser("rewards", help="Show the rewards summary")
    p.add_argument("--no-persist", action="store_true")
    p.set_defaults(func=cmd_rewards)

    p = subparsers.add_parser("reset", help="Lock every secret again")
    p.add_argument("--yes", "-y", action="store_true", help="Don't ask")
    p.add_argument("--no-persist", action="store_true")
    p.set_defaults(func=cmd_reset)

    p = subparsers.add_parser("config", help="Show or change settings")
    config_sub = p.add_subparsers(dest="config_command")

    c = config_sub.add_parser("list", help="Every setting and its source")
    c.set_defaults(func=cmd_config_list)

    c = config_sub.add_parser("get", help="One setting")
    c.add_argument("key")
    c.set_defaults(func=cmd_config_get)

    c = config_sub.add_parser("set", help="Change a setting")
    c.add_argument("key")
    c.add_argument("value")
    c.add_argument("--global", dest="global_", action="store_true",
                   help="Write ~/.blakkout/config.json instead of .blakkout.json")
    c.set_defaults(func=cmd_config_set)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blakkout",
        description="A console with secrets in it.",
    )
    parser.add_argument("--trace", action="store_true", help="Print tracing spans to stderr")
    subparsers = parser.add_subparsers(dest="command")
    _build_parsers(subparsers)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    set_level(load_config().get("log_level"))
    if args.trace:
        enable_console_export()

    if not args.command:
        cmd_console(args)
        return

    if args.command == "config" and not getattr(args, "config_command", None):
        parser.parse_args(["config", "--help"])
        return

    try:
        args.func(args)
    except KeyboardInterrupt:
        warn("cli", "interrupted")


if __name__ == "__main__":
    main()

"""commands.py - everything you can type into the console.

each handler is fn(ctx, args). the secret commands always tell their
story, whether or not the secret was already found. the toast is what
gets gated, not the narration.

in the world: the menu. some items aren't on it.
"""

from blakkout.console.interpreter import (
    CommandTable, Effect, Result,
    output, error, success, listing, table,
)
from blakkout.unlocks import catalog

COMMANDS = CommandTable()


# ============================================================
# BASICS
# ============================================================

@COMMANDS.command("help", "show this list")
def cmd_help(ctx, args):
    rows = [f"{c.usage:<16} {c.description}" for c in ctx.table.visible()]
    return [
        listing(rows, title="available commands:"),
        output("hint: some commands unlock secrets..."),
    ]


@COMMANDS.command("clear", "clear the console")
def cmd_clear(ctx, args):
    return Result(effects=[Effect.CLEAR_LOG])


@COMMANDS.command("status", "system status")
def cmd_status(ctx, args):
    reg = ctx.registry
    return [
        output("SYSTEM: OPERATIONAL"),
        output("SECURITY: LEVEL 3"),
        output("ACCESS: LIMITED"),
        output(f"EASTER EGGS: {reg.unlocked_count()}/{reg.total()}"),
        output(f"LAST LOGIN: {ctx.now().strftime('%Y-%m-%d %H:%M:%S')}"),
    ]


@COMMANDS.command("scan", "look for anomalies")
def cmd_scan(ctx, args):
    return [
        output("scanning..."),
        output("████████████████████████████████ 100%"),
        output("ANOMALIES DETECTED:"),
        output("- non-standard cryptographic signature"),
        output("- unknown communication protocol"),
        output("- potential root access available"),
    ]


@COMMANDS.command("whoami", "who you are")
def cmd_whoami(ctx, args):
    return [output("anonymous visitor of the BLAKKOUT network")]


@COMMANDS.command("date", "current date and time")
def cmd_date(ctx, args):
    return [output(ctx.now().strftime("%d/%m/%Y %H:%M:%S"))]


@COMMANDS.command("echo", "repeat some text", usage="echo <text>")
def cmd_echo(ctx, args):
    if not args:
        return [error("usage: echo <text>")]
    return [output(" ".join(args))]


@COMMANDS.command("exit", "close the console")
def cmd_exit(ctx, args):
    return Result(lines=[output("console closed.")], effects=[Effect.CLOSE_CONSOLE])


# ============================================================
# REWARDS
# ============================================================

@COMMANDS.command("rewards", "what you've unlocked so far")
def cmd_rewards(ctx, args):
    reg = ctx.registry
    texts = reg.unlocked_reward_texts()
    if not texts:
        return [output("no rewards unlocked yet. keep digging.")]
    lines = [listing(texts, title=f"rewards ({reg.unlocked_count()}/{reg.total()}):", kind="success")]
    if reg.all_unlocked():
        lines.append(success(catalog.GRAND_REWARD))
    return lines


@COMMANDS.command("progress", "which secrets are found", hidden=True)
def cmd_progress(ctx, args):
    reg = ctx.registry
    rows = [
        (d.title, "unlocked" if reg.is_unlocked(d.id) else "locked")
        for d in catalog.CATALOG
    ]
    return [table(("secret", "state"), rows)]


@COMMANDS.command("reset", "forget every secret found", hidden=True)
def cmd_reset(ctx, args):
    ctx.registry.reset()
    return [output("all secrets locked again.")]


# ============================================================
# SECRETS
# ============================================================

def _secret(unlock_id: str, lines: list[str]):
    """a command that activates unlock_id and always prints lines."""
    def handler(ctx, args):
        ctx.registry.activate(unlock_id)
        return [output(t) for t in lines]
    return handler


_SECRET_TEXT = {
    "konami": [
        "🎮 KONAMI CODE DETECTED 🎮",
        "VIP access granted.",
        "welcome to the secret club.",
    ],
    "consoleAccess": [
        "attempting privileged access...",
        "checking credentials...",
        "✓ ACCESS GRANTED",
        "welcome, Agent.",
    ],
    "glitch": [
        "system anomaly detected...",
        "ERROR: Reality.exe has stopped working",
        "⚡ GLITCH DETECTED ⚡",
        "reality compromised. rebooting...",
    ],
    "hidden": [
        "searching for the truth...",
        "accessing classified files...",
        "🔍 TRUTH REVEALED 🔍",
        "reality is only an illusion.",
    ],
    "matrix": [
        "initializing the matrix...",
        "01001000 01100101 01101100 01101100 01101111",
        "connection established with the network.",
        "follow the white rabbit...",
    ],
}

_SECRET_DESCRIPTIONS = {
    "konami": "80s secret code",
    "consoleAccess": "attempt privileged access",
    "glitch": "detect anomalies",
    "hidden": "search for the truth",
    "matrix": "initialize the matrix",
}

for _def in catalog.CATALOG:
    COMMANDS.register(
        _def.command,
        _secret(_def.id, _SECRET_TEXT[_def.id]),
        description=_SECRET_DESCRIPTIONS[_def.id],
    )


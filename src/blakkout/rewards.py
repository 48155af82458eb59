"""rewards.py - the trophy room.

read-only view over the registry: every secret with its state,
the rewards already earned, and the grand prize once everything is found.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from blakkout.unlocks import catalog


def summary(registry) -> dict:
    """plain data behind the view."""
    return {
        "unlocked": registry.unlocked_count(),
        "total": registry.total(),
        "secrets": [
            {
                "id": d.id,
                "title": d.title,
                "description": d.description,
                "unlocked": registry.is_unlocked(d.id),
            }
            for d in catalog.CATALOG
        ],
        "rewards": registry.unlocked_reward_texts(),
        "all_unlocked": registry.all_unlocked(),
    }


def render_rewards(registry, console: Console = None):
    """print the trophy room."""
    console = console or Console()
    data = summary(registry)

    console.print(f"\n  [bold green]🏆 REWARDS[/bold green]  "
                  f"[dim]{data['unlocked']}/{data['total']} easter eggs unlocked[/dim]\n")

    grid = Table(show_header=True, header_style="bold green", box=None, padding=(0, 2))
    grid.add_column("")
    grid.add_column("secret")
    grid.add_column("description", style="dim")
    for s in data["secrets"]:
        grid.add_row("🔓" if s["unlocked"] else "🔒", s["title"], s["description"])
    console.print(grid)
    console.print()

    if data["rewards"]:
        body = "\n".join(f"🎁 {text}" for text in data["rewards"])
        console.print(Panel(body, title="unlocked rewards", border_style="cyan"))
    else:
        console.print(Panel(
            "explore the console and find the easter eggs to unlock exclusive rewards.\n"
            "[dim]try special key combinations. look for hidden commands.[/dim]",
            title="no rewards yet", border_style="dim",
        ))

    if data["all_unlocked"]:
        console.print(Panel(catalog.GRAND_REWARD, title="👑 ultimate reward",
                            border_style="yellow"))

"""Rich rendering of hand analyses."""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from riichi.config import AnalysisConfig
from riichi.core.exceptions import RiichiError
from riichi.core.hand import Hand, ImprovingTiles
from riichi.rules.shanten import AGARI_STATE, TENPAI_STATE
from riichi.ui.tile_display import (
    hand_to_rich_text, tile_to_rich_text, tiles_to_rich_text,
)


def shanten_label(shanten: int) -> str:
    if shanten == AGARI_STATE:
        return "complete (agari)"
    if shanten == TENPAI_STATE:
        return "tenpai"
    return f"{shanten}-shanten"


class Renderer:
    """Prints analyses of hands to a rich console."""

    def __init__(self, console: Console, config: AnalysisConfig):
        self.console = console
        self.config = config

    def render_analysis(self, hand: Hand, rows: List[ImprovingTiles]):
        """Show a hand, its shanten and the improving tiles table."""
        colors = self.config.colors
        header = Text()
        header.append_text(hand_to_rich_text(hand, colors=colors))
        header.append(f"\n{hand.to_string()}  ", style="dim")
        header.append(shanten_label(hand.shanten()), style="bold cyan")

        self.console.print(Panel(header, border_style="cyan", padding=(0, 2)))

        if not rows:
            if hand.shanten() == AGARI_STATE:
                self.console.print("  [green]Nothing to improve: the hand is complete.[/green]")
            else:
                self.console.print("  [yellow]No improving tiles found.[/yellow]")
            return

        shown = rows if self.config.max_rows is None else rows[:self.config.max_rows]
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Discard")
        table.add_column("Improving tiles")
        table.add_column("Tiles", justify="right")
        table.add_column("Count", justify="right")

        for row in shown:
            discard = tile_to_rich_text(row.discard, colors=colors) if row.discard else Text("-")
            table.add_row(
                discard,
                tiles_to_rich_text(row.tiles, colors=colors),
                str(len(row.tiles)),
                str(row.acceptance),
            )

        self.console.print(table)
        if len(shown) < len(rows):
            self.console.print(f"  [dim]... {len(rows) - len(shown)} more discards[/dim]")

    def render_error(self, representation: str, error: RiichiError):
        self.console.print(
            f"  [red]{escape(representation)}: {escape(error.message)} (code {error.code})[/red]")

#!/usr/bin/env python3
"""Riichi Mahjong hand analyzer - Terminal CLI"""

from typing import List, Optional, Tuple

import structlog
from rich.console import Console
from rich.panel import Panel

from riichi.config import AnalysisConfig
from riichi.core.exceptions import RiichiError
from riichi.core.hand import Hand, ImprovingTiles
from riichi.logging import resolve_log_level, setup_logging
from riichi.ui.renderer import Renderer

logger = structlog.get_logger()


def analyze(representation: str,
            config: AnalysisConfig) -> Tuple[Hand, List[ImprovingTiles]]:
    """Parse a hand and search its improving tiles."""
    hand = Hand.from_text(representation.strip(), force_return=not config.strict_parsing)
    # raises ShantenError for hands that aren't 13 or 14 tiles
    hand.shanten()
    return hand, hand.find_shanten_improving_tiles()


def analyze_and_render(representation: str, config: AnalysisConfig,
                       renderer: Renderer) -> bool:
    """Analyze one hand and print the result. Returns False on a hand error."""
    try:
        hand, rows = analyze(representation, config)
    except RiichiError as error:
        logger.info("hand rejected", hand=representation, code=error.code)
        renderer.render_error(representation, error)
        return False

    renderer.render_analysis(hand, rows)
    return True


def run_interactive(console: Console, config: AnalysisConfig, renderer: Renderer):
    """Read hands from the prompt until an empty line."""
    console.print(Panel(
        "[bold cyan]Riichi Mahjong hand analyzer[/bold cyan]\n"
        "[dim]Enter a hand like 237m13478s45699p1z, empty line to quit[/dim]",
        border_style="cyan",
        padding=(1, 4),
    ))

    while True:
        try:
            representation = console.input("\n  > ").strip()
        except EOFError:
            return
        if not representation:
            return
        analyze_and_render(representation, config, renderer)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    config, hands = AnalysisConfig.from_args(argv)
    level = resolve_log_level("WARNING", override=config.log_level)
    setup_logging(level)

    console = Console(no_color=not config.colors, highlight=False)
    renderer = Renderer(console, config)

    try:
        if not hands:
            run_interactive(console, config, renderer)
            return 0

        ok = True
        for representation in hands:
            ok = analyze_and_render(representation, config, renderer) and ok
        return 0 if ok else 1
    except KeyboardInterrupt:
        console.print("\n\n  [dim]Bye[/dim]\n")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())

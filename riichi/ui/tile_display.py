"""Tile display formatting with colors for terminal output."""

from typing import List

from rich.text import Text

from riichi.core.hand import Hand
from riichi.core.tile import Tile, TileSuit


# Color schemes
SUIT_COLORS = {
    TileSuit.MAN: "red",
    TileSuit.PIN: "blue",
    TileSuit.SOU: "green",
    TileSuit.WIND: "yellow",
    TileSuit.DRAGON: "yellow",
}


def tile_to_display_str(tile: Tile) -> str:
    """Readable name: number tiles by notation, honors by kanji."""
    return tile.name


def tile_to_rich_text(tile: Tile, highlight: bool = False, colors: bool = True) -> Text:
    """Convert a tile to a Rich Text object with appropriate colors."""
    name = tile_to_display_str(tile)
    if not colors:
        return Text(f"[{name}]")

    style = f"bold {SUIT_COLORS[tile.suit]}"
    if tile.is_open:
        style = f"dim {SUIT_COLORS[tile.suit]}"
    if highlight:
        style += " on white"

    return Text(f"[{name}]", style=style)


def tiles_to_rich_text(tiles: List[Tile], separator: str = " ",
                       colors: bool = True) -> Text:
    """Convert a list of tiles to Rich Text."""
    result = Text()
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(separator)
        result.append_text(tile_to_rich_text(tile, colors=colors))
    return result


def hand_to_rich_text(hand: Hand, colors: bool = True) -> Text:
    """Render a hand: concealed tiles, the drawn tile set apart, then melds."""
    concealed = [t for t in hand.concealed_tiles() if not t.is_draw]
    drawn = [t for t in hand.concealed_tiles() if t.is_draw]

    result = tiles_to_rich_text(concealed, colors=colors)
    if drawn:
        result.append("  ")
        result.append_text(tile_to_rich_text(drawn[0], highlight=True, colors=colors))

    for shape in hand.open_shapes:
        result.append("  ")
        shape_tiles = []
        for tile in shape.tiles:
            shown = Tile(tile.id)
            shown.is_open = True
            shape_tiles.append(shown)
        result.append_text(tiles_to_rich_text(shape_tiles, separator="", colors=colors))

    return result

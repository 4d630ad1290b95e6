"""Hand management - tiles, declared melds, cached histogram and shanten."""

import string
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import structlog

from riichi.rules.shanten import AGARI_STATE, HAND_SIZES, ShantenFinder
from .exceptions import (
    ERR_BAD_CHARACTER, ERR_EMPTY_RUN, ERR_MELD_NOT_IN_HAND, ERR_NO_DRAWN_TILE,
    ERR_TILE_NOT_FOUND, ERR_UNTERMINATED_RUN,
    HandValidationError, InvalidMeldError, ParseError, TileLookupError,
)
from .meld import MeldType, OpenShape
from .tile import YAOCHU_IDS, Tile, tiles_to_34_array

logger = structlog.get_logger()

# Cached shanten value meaning "not computed yet"
SHANTEN_UNKNOWN = 99

MAX_COPIES = 4
MIN_PHYSICAL_TILES = 13
MAX_PHYSICAL_TILES = 18  # 13 + 4 extra from quads + 1 draw
MAX_LOGICAL_TILES = 14


@dataclass
class ImprovingTiles:
    """One row of an improving-tile search.

    Attributes:
        discard: Tile discarded first (None for 13 tile hands)
        tiles: Draws that lower shanten, in canonical order
        acceptance: Copies of those draws not held in hand
    """
    discard: Optional[Tile]
    tiles: List[Tile] = field(default_factory=list)
    acceptance: int = 0


class Hand:
    """A player's tiles plus the melds declared from them.

    Attributes:
        tiles: Tiles in canonical order, open ones included
        open_shapes: Declared melds, in declaration order

    The 34-count histograms and the shanten value are cached; every
    mutation goes through reset_shanten() to drop them.
    """

    def __init__(self, tiles: Optional[List[Tile]] = None):
        self.tiles: List[Tile] = sorted(tiles or [])
        self.open_shapes: List[OpenShape] = []
        self._array_34: Optional[List[int]] = None
        self._array_34_concealed: Optional[List[int]] = None
        self._shanten: int = SHANTEN_UNKNOWN
        self._finder = ShantenFinder()

    @classmethod
    def from_text(cls, representation: str, force_return: bool = False) -> 'Hand':
        """Parse a hand like '123m123p12345s22z'.

        The notation is read from the back, because suit letters are
        written after their digits. The last tile written is the drawn
        tile. With force_return the hand is returned even when it fails
        validation.
        """
        tiles: List[Tile] = []
        suit_char: Optional[str] = None
        run_length = 0

        for ch in reversed(representation):
            if ch in string.digits:
                if suit_char is None:
                    raise ParseError(
                        ERR_UNTERMINATED_RUN,
                        f"Digits without a suit letter in {representation!r}")
                tile = Tile.from_text(ch + suit_char)
                # first tile read is the last one written
                if not tiles:
                    tile.is_draw = True
                tiles.append(tile)
                run_length += 1
            elif ch.isalpha():
                if suit_char is not None and run_length == 0:
                    raise ParseError(
                        ERR_EMPTY_RUN, f"Suit letter {suit_char!r} has no tiles")
                suit_char = ch
                run_length = 0
            else:
                raise ParseError(
                    ERR_BAD_CHARACTER, f"Unexpected character {ch!r} in {representation!r}")

        if suit_char is not None and run_length == 0:
            raise ParseError(ERR_EMPTY_RUN, f"Suit letter {suit_char!r} has no tiles")

        hand = cls(tiles)

        if force_return or hand.validate():
            return hand

        raise HandValidationError()

    def validate(self) -> bool:
        """Check tile counts: no more than 4 copies, 13..18 tiles, logical size <= 14."""
        self.reset_shanten()
        array_34 = self.get_34_array()

        if any(count > MAX_COPIES for count in array_34):
            return False

        if not (MIN_PHYSICAL_TILES <= sum(array_34) <= MAX_PHYSICAL_TILES):
            return False

        return self.count_tiles() <= MAX_LOGICAL_TILES

    def get_34_array(self, remove_open_tiles: bool = False) -> List[int]:
        """Convert tiles to a 34-length count array.

        With remove_open_tiles only the concealed part is counted, which
        is what the shanten search reasons about.
        """
        if remove_open_tiles:
            if self._array_34_concealed is None:
                self._array_34_concealed = tiles_to_34_array(
                    [t for t in self.tiles if not t.is_open])
            return list(self._array_34_concealed)

        if self._array_34 is None:
            self._array_34 = tiles_to_34_array(self.tiles)
        return list(self._array_34)

    def count_tiles(self) -> int:
        """Logical hand size - usually 13 or 14; a quad counts as 3 tiles."""
        kan_tiles = sum(1 for t in self.tiles if t.is_kan)
        return len(self.tiles) - kan_tiles // 4

    def concealed_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if not t.is_open]

    def is_closed(self) -> bool:
        return not self.open_shapes

    def drawn_tile(self) -> Tile:
        for tile in self.tiles:
            if tile.is_draw:
                return tile
        raise TileLookupError(ERR_NO_DRAWN_TILE, "Hand has no drawn tile")

    def add_tile(self, tile: Tile):
        """Add a tile, keeping canonical order."""
        self.tiles.append(tile)
        self.tiles.sort()
        self.reset_shanten()

    def remove_tile(self, tile: Tile) -> Tile:
        """Remove the first concealed tile with the same id and return it."""
        for i, hand_tile in enumerate(self.tiles):
            if hand_tile.id == tile.id and not hand_tile.is_open:
                removed = self.tiles.pop(i)
                self.reset_shanten()
                return removed

        raise TileLookupError(
            ERR_TILE_NOT_FOUND, f"No concealed {tile} in hand {self}")

    def remove_tile_by_id(self, tile_id: int) -> Tile:
        return self.remove_tile(Tile.from_id(tile_id))

    def add_open_shape(self, shape: OpenShape):
        """Lock the tiles of a declared meld.

        Each declared tile is matched to the first concealed, non-kan
        instance not already matched. Nothing is changed unless every
        tile matches.
        """
        matched: List[int] = []
        for shape_tile in shape.tiles:
            for i, tile in enumerate(self.tiles):
                if (i not in matched and tile.id == shape_tile.id
                        and not tile.is_open and not tile.is_kan):
                    matched.append(i)
                    break
            else:
                raise InvalidMeldError(
                    ERR_MELD_NOT_IN_HAND,
                    f"Meld {shape} is not backed by concealed tiles in {self}")

        for i in matched:
            tile = self.tiles[i]
            # a called tile is no longer the drawn tile
            tile.is_draw = False
            tile.is_open = True
            tile.is_chi = shape.meld_type is MeldType.CHI
            tile.is_pon = shape.meld_type is MeldType.PON
            tile.is_kan = shape.meld_type is MeldType.KAN

        self.open_shapes.append(shape)
        self.tiles.sort()
        self.reset_shanten()
        logger.debug("open shape added", shape=str(shape), meld_type=shape.meld_type)

    def shanten(self) -> int:
        """Get shanten of this hand, computing it if it isn't cached."""
        if self._shanten == SHANTEN_UNKNOWN:
            self._shanten = self._finder.shanten(self)
        return self._shanten

    def reset_shanten(self):
        """Drop cached shanten and histograms after the hand changed."""
        self._shanten = SHANTEN_UNKNOWN
        self._array_34 = None
        self._array_34_concealed = None

    def find_shanten_improving_tiles(self) -> List[ImprovingTiles]:
        """Return tiles that can be used to improve this hand.

        For 13 tile hands there is a single row with no discard.
        For 14 tile hands there is a row for every discard that doesn't
        raise shanten, best acceptance first. A complete hand has none.
        """
        hand_count = self.count_tiles()
        if hand_count not in HAND_SIZES:
            return []

        current_shanten = self.shanten()

        if hand_count == 13:
            tiles, acceptance = self._improving_tiles_13(current_shanten)
            rows = [ImprovingTiles(None, tiles, acceptance)]
        elif current_shanten <= AGARI_STATE:
            rows = []
        else:
            rows = []
            discard_ids = sorted({t.id for t in self.tiles if not t.is_open})
            for tile_id in discard_ids:
                with self._speculate():
                    self.remove_tile_by_id(tile_id)
                    # only discards that don't raise our shanten
                    if self.shanten() <= current_shanten:
                        tiles, acceptance = self._improving_tiles_13(current_shanten)
                        rows.append(ImprovingTiles(Tile(tile_id), tiles, acceptance))
            rows.sort(key=lambda row: row.acceptance, reverse=True)

        logger.debug("improving tiles searched", hand=str(self),
                     shanten=current_shanten, rows=len(rows))
        return rows

    def _improving_tiles_13(self, current_shanten: int) -> Tuple[List[Tile], int]:
        """Draws that lower shanten below current_shanten, plus their acceptance."""
        held = self.get_34_array()

        # Only the tile itself and its neighbours within two steps can
        # help a standard hand; yaochu tiles are always tried for kokushi.
        try_ids: List[int] = []
        for tile in self.concealed_tiles():
            for tile_id in (tile.id,
                            tile.prev_id(False, 1), tile.prev_id(False, 2),
                            tile.next_id(False, 1), tile.next_id(False, 2)):
                if tile_id > 0 and tile_id not in try_ids:
                    try_ids.append(tile_id)
        for tile_id in YAOCHU_IDS:
            if tile_id not in try_ids:
                try_ids.append(tile_id)

        tiles: List[Tile] = []
        acceptance = 0
        for tile_id in try_ids:
            remaining = MAX_COPIES - held[tile_id - 1]
            if remaining <= 0:
                continue

            with self._speculate():
                self.add_tile(Tile(tile_id))
                new_shanten = self.shanten()

            if new_shanten < current_shanten:
                tiles.append(Tile(tile_id))
                acceptance += remaining

        tiles.sort()
        return tiles, acceptance

    @contextmanager
    def _speculate(self):
        """Restore tiles and caches on exit, even if the block raised."""
        tiles = list(self.tiles)
        cached = (self._array_34, self._array_34_concealed, self._shanten)
        try:
            yield self
        finally:
            self.tiles = tiles
            self._array_34, self._array_34_concealed, self._shanten = cached

    def copy(self) -> 'Hand':
        """Create a deep copy for independent analysis."""
        hand = Hand([t.copy() for t in self.tiles])
        hand.open_shapes = list(self.open_shapes)
        return hand

    def to_string(self) -> str:
        """Grouped notation, e.g. '123m123p12345s22z'."""
        out = []
        suit_char = None

        for tile in self.tiles:
            if tile.type_char != suit_char:
                if suit_char is not None:
                    out.append(suit_char)
                suit_char = tile.type_char
            out.append(str(tile.value))

        if suit_char is not None:
            out.append(suit_char)

        return "".join(out)

    def to_array_of_strings(self) -> List[str]:
        """One token per tile ('m1', 'p5', ...); the drawn tile is always last."""
        tokens = []
        drawn = None

        for tile in self.tiles:
            token = f"{tile.type_char}{tile.value}"
            if tile.is_draw:
                drawn = token
            else:
                tokens.append(token)

        if drawn is not None:
            tokens.append(drawn)

        return tokens

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Hand({self.to_string()!r}, melds={len(self.open_shapes)})"

"""Open shape (副露) data structures for Chi/Pon/Kan."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from .exceptions import ERR_MALFORMED_MELD, InvalidMeldError
from .tile import Tile


class MeldType(Enum):
    CHI = "chi"  # 吃
    PON = "pon"  # 碰
    KAN = "kan"  # 杠


MELD_SIZES = {
    MeldType.CHI: 3,
    MeldType.PON: 3,
    MeldType.KAN: 4,
}


@dataclass(frozen=True)
class OpenShape:
    """A declared meld.

    Holds the declared tile values, not references into a hand. The fourth
    tile of a kan is logically redundant: the kan still counts as one set.

    Attributes:
        meld_type: Type of meld
        tiles: Declared tiles (tuple of Tile ids wrapped in Tile objects)
    """
    meld_type: MeldType
    tiles: Tuple[Tile, ...]

    def __post_init__(self):
        ids = sorted(t.id for t in self.tiles)
        expected = MELD_SIZES[self.meld_type]
        if len(ids) != expected:
            raise InvalidMeldError(
                ERR_MALFORMED_MELD,
                f"{self.meld_type.value} needs {expected} tiles, got {len(ids)}")

        if self.meld_type is MeldType.CHI:
            first = Tile(ids[0])
            if (not first.is_number_tile
                    or ids != [ids[0], first.next_id(False, 1), first.next_id(False, 2)]):
                raise InvalidMeldError(
                    ERR_MALFORMED_MELD, f"chi must be a run in one suit, got {ids}")
        elif len(set(ids)) != 1:
            raise InvalidMeldError(
                ERR_MALFORMED_MELD,
                f"{self.meld_type.value} must hold identical tiles, got {ids}")

    @classmethod
    def chi(cls, tiles: Iterable[Tile]) -> 'OpenShape':
        return cls(MeldType.CHI, tuple(Tile(t.id) for t in tiles))

    @classmethod
    def pon(cls, tile: Tile) -> 'OpenShape':
        return cls(MeldType.PON, tuple(Tile(tile.id) for _ in range(3)))

    @classmethod
    def kan(cls, tile: Tile) -> 'OpenShape':
        return cls(MeldType.KAN, tuple(Tile(tile.id) for _ in range(4)))

    @classmethod
    def from_text(cls, representation: str) -> 'OpenShape':
        """Parse a single-suit group like '345p', '777z' or '1111m'."""
        if len(representation) < 2:
            raise InvalidMeldError(
                ERR_MALFORMED_MELD, f"Bad meld representation: {representation!r}")
        suit_char = representation[-1]
        tiles = tuple(Tile.from_text(ch + suit_char) for ch in representation[:-1])
        if len(tiles) == 4:
            return cls(MeldType.KAN, tiles)
        if len(tiles) == 3 and len({t.id for t in tiles}) == 1:
            return cls(MeldType.PON, tiles)
        return cls(MeldType.CHI, tiles)

    def __str__(self):
        suit_char = self.tiles[0].type_char
        return "".join(str(t.value) for t in sorted(self.tiles)) + suit_char

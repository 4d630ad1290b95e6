"""Tile definition with dense 1..34 ids and per-instance hand flags."""

from enum import IntEnum
from typing import List

from .exceptions import (
    ERR_BAD_TILE, ERR_TILE_NOT_FOUND, ERR_TILE_OUT_OF_RANGE, ERR_UNKNOWN_SUIT,
    TileLookupError, TileParseError,
)


class TileSuit(IntEnum):
    MAN = 0   # 万子
    PIN = 1   # 筒子
    SOU = 2   # 索子
    WIND = 3  # 风牌
    DRAGON = 4  # 三元牌


# Notation letter for each suit, honors share 'z'
SUIT_CHARS = {
    TileSuit.MAN: 'm',
    TileSuit.PIN: 'p',
    TileSuit.SOU: 's',
    TileSuit.WIND: 'z',
    TileSuit.DRAGON: 'z',
}

# First id of each notation group (ids are 1-based)
SUIT_OFFSETS = {'m': 0, 'p': 9, 's': 18, 'z': 27}

MIN_ID = 1
MAX_ID = 34

# Yaochu (terminal + honor) tile indices in 34 encoding
YAOCHU_INDICES = [0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33]

# Yaochu tile ids (1-based)
YAOCHU_IDS = [i + 1 for i in YAOCHU_INDICES]

# Tile names for 34 encoding
TILE_NAMES_34 = [
    "1m", "2m", "3m", "4m", "5m", "6m", "7m", "8m", "9m",
    "1p", "2p", "3p", "4p", "5p", "6p", "7p", "8p", "9p",
    "1s", "2s", "3s", "4s", "5s", "6s", "7s", "8s", "9s",
    "東", "南", "西", "北", "白", "發", "中",
]


class Tile:
    """A tile kind (id 1..34) plus the flags it carries inside a hand.

    The id never changes after construction. The flags describe the role
    of this particular instance:
        is_draw: the tile just drawn (at most one per hand)
        is_open: locked into a declared meld
        is_chi / is_pon / is_kan: which meld kind locked it
    """
    __slots__ = ('_id', '_suit', '_number',
                 'is_draw', 'is_open', 'is_chi', 'is_pon', 'is_kan')

    def __init__(self, tile_id: int):
        if not (MIN_ID <= tile_id <= MAX_ID):
            raise TileLookupError(
                ERR_TILE_NOT_FOUND, f"tile id must be 1..34, got {tile_id}")
        self._id = tile_id
        index34 = tile_id - 1
        if index34 < 9:
            self._suit = TileSuit.MAN
            self._number = index34 + 1
        elif index34 < 18:
            self._suit = TileSuit.PIN
            self._number = index34 - 9 + 1
        elif index34 < 27:
            self._suit = TileSuit.SOU
            self._number = index34 - 18 + 1
        elif index34 < 31:
            self._suit = TileSuit.WIND
            self._number = index34 - 27 + 1  # 1=東,2=南,3=西,4=北
        else:
            self._suit = TileSuit.DRAGON
            self._number = index34 - 31 + 1  # 1=白,2=發,3=中
        self.is_draw = False
        self.is_open = False
        self.is_chi = False
        self.is_pon = False
        self.is_kan = False

    @classmethod
    def from_id(cls, tile_id: int) -> 'Tile':
        return cls(tile_id)

    @classmethod
    def from_text(cls, representation: str) -> 'Tile':
        """Parse a two character token: digit + suit letter ('5p', '7z')."""
        if len(representation) != 2 or not representation[0].isdigit():
            raise TileParseError(
                ERR_BAD_TILE, f"Bad tile representation: {representation!r}")

        value = int(representation[0])
        suit_char = representation[1]
        if suit_char not in SUIT_OFFSETS:
            raise TileParseError(
                ERR_UNKNOWN_SUIT, f"Unknown tile suit: {suit_char!r}")

        limit = 7 if suit_char == 'z' else 9
        if not (1 <= value <= limit):
            raise TileParseError(
                ERR_TILE_OUT_OF_RANGE,
                f"Tile value {value} out of range for suit {suit_char!r}")

        return cls(SUIT_OFFSETS[suit_char] + value)

    @property
    def id(self) -> int:
        return self._id

    @property
    def index34(self) -> int:
        return self._id - 1

    @property
    def suit(self) -> TileSuit:
        return self._suit

    @property
    def number(self) -> int:
        return self._number

    @property
    def is_honor(self) -> bool:
        return self._suit in (TileSuit.WIND, TileSuit.DRAGON)

    @property
    def is_terminal(self) -> bool:
        return not self.is_honor and self._number in (1, 9)

    @property
    def is_yaochu(self) -> bool:
        return self.is_honor or self.is_terminal

    @property
    def is_number_tile(self) -> bool:
        return self._suit in (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)

    @property
    def type_char(self) -> str:
        return SUIT_CHARS[self._suit]

    @property
    def value(self) -> int:
        """Digit used in notation ('z' honors run 1..7)."""
        return self._id - SUIT_OFFSETS[self.type_char]

    @property
    def name(self) -> str:
        return TILE_NAMES_34[self.index34]

    def to_id(self) -> int:
        return self._id

    def prev_id(self, wrap: bool = False, n: int = 1) -> int:
        """Id of the tile n steps below in the same suit, 0 if there is none.

        Honors are never sequence-adjacent. `wrap` is reserved; sequences
        never wrap from 1 to 9.
        """
        if not self.is_number_tile or self._number - n < 1:
            return 0
        return self._id - n

    def next_id(self, wrap: bool = False, n: int = 1) -> int:
        """Id of the tile n steps above in the same suit, 0 if there is none."""
        if not self.is_number_tile or self._number + n > 9:
            return 0
        return self._id + n

    def copy(self) -> 'Tile':
        tile = Tile(self._id)
        tile.is_draw = self.is_draw
        tile.is_open = self.is_open
        tile.is_chi = self.is_chi
        tile.is_pon = self.is_pon
        tile.is_kan = self.is_kan
        return tile

    def sort_key(self) -> tuple:
        return (self._id, self.is_draw, self.is_open,
                self.is_chi, self.is_pon, self.is_kan)

    def __str__(self):
        return f"{self.value}{self.type_char}"

    def __repr__(self):
        flags = [flag for flag in ('draw', 'open', 'chi', 'pon', 'kan')
                 if getattr(self, f'is_{flag}')]
        if flags:
            return f"Tile({self}, {'|'.join(flags)})"
        return f"Tile({self})"

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self.sort_key() == other.sort_key()
        return NotImplemented

    def __hash__(self):
        return self._id

    def __lt__(self, other):
        if isinstance(other, Tile):
            return self.sort_key() < other.sort_key()
        return NotImplemented


def make_tiles_from_string(s: str) -> List[Tile]:
    """Parse a shorthand string like '123m456p77z' into tiles, in written order.

    Unlike Hand.from_text no tile is flagged as drawn and the list is
    not sorted, so it suits discard piles and dora indicators.
    """
    tiles = []
    numbers = []
    for ch in s:
        if ch.isdigit():
            numbers.append(ch)
        else:
            if not numbers:
                raise TileParseError(ERR_BAD_TILE, f"Suit {ch!r} has no tiles in {s!r}")
            tiles.extend(Tile.from_text(n + ch) for n in numbers)
            numbers = []
    if numbers:
        raise TileParseError(ERR_BAD_TILE, f"Digits without a suit letter in {s!r}")
    return tiles


def tiles_to_34_array(tiles: List[Tile]) -> List[int]:
    """Convert list of tiles to 34-length count array."""
    arr = [0] * 34
    for t in tiles:
        arr[t.index34] += 1
    return arr

"""Table snapshot - our hand plus what is visible of the other seats."""

import json
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping

import structlog

from .exceptions import ERR_BAD_TABLE_VALUE, TableError
from .hand import Hand
from .meld import OpenShape
from .tile import Tile, make_tiles_from_string

logger = structlog.get_logger()


class Wind(IntEnum):
    EAST = 1    # 東
    SOUTH = 2   # 南
    WEST = 3    # 西
    NORTH = 4   # 北

    @property
    def kanji(self) -> str:
        return ['東', '南', '西', '北'][self.value - 1]


class Seat(Enum):
    SHIMOCHA = "shimocha"  # player to the right
    TOIMEN = "toimen"      # opposite player
    KAMICHA = "kamicha"    # player to the left


class OpponentState:
    """Visible state of one opponent.

    Attributes:
        discards: Discarded tiles, in order
        open_shapes: Melds the opponent declared
        riichi: Whether riichi has been declared
    """

    def __init__(self):
        self.discards: List[Tile] = []
        self.open_shapes: List[OpenShape] = []
        self.riichi = False

    def __repr__(self):
        discards = "".join(str(t) for t in self.discards)
        return f"OpponentState({discards}, melds={len(self.open_shapes)}, riichi={self.riichi})"


def _parse_wind(key: str, value: int) -> Wind:
    try:
        return Wind(value)
    except ValueError:
        raise TableError(
            ERR_BAD_TABLE_VALUE, f"{key} must be 1 (east) .. 4 (north), got {value}"
        ) from None


class Table:
    """Representation of the game state as seen from our seat.

    Attributes:
        my_hand: Our hand (validated)
        my_riichi: Whether we declared riichi
        opponents: Visible state per opponent seat
        prevalent_wind / my_seat_wind: Round and seat winds
        wind_round / total_round: Round counters
        dora_indicators: Revealed dora indicator tiles
        riichi_sticks_in_pot: Riichi sticks on the table
        tsumibo: Repeat counters (honba)
    """

    def __init__(self):
        self.my_hand = Hand()
        self.my_riichi = False
        self.opponents: Dict[Seat, OpponentState] = {seat: OpponentState() for seat in Seat}
        self.prevalent_wind = Wind.EAST
        self.my_seat_wind = Wind.EAST
        self.wind_round = 0
        self.total_round = 0
        self.dora_indicators: List[Tile] = []
        self.riichi_sticks_in_pot = 0
        self.tsumibo = 0

    @classmethod
    def from_map(cls, params: Mapping[str, Any]) -> 'Table':
        """Build a table from named fields.

        Hand parse errors propagate. Values of the wrong type are skipped,
        unknown keys are logged and skipped.
        """
        table = cls()
        seats = {f"{seat.value}_{field}": (seat, field)
                 for seat in Seat for field in ("discards", "open_tiles", "riichi")}

        for key, value in params.items():
            if key == "my_hand":
                if isinstance(value, str):
                    table.my_hand = Hand.from_text(value, False)
            elif key == "my_riichi":
                if isinstance(value, bool):
                    table.my_riichi = value
            elif key in ("prevalent_wind", "my_seat_wind"):
                if isinstance(value, int) and not isinstance(value, bool):
                    setattr(table, key, _parse_wind(key, value))
            elif key in ("wind_round", "total_round", "riichi_sticks_in_pot", "tsumibo"):
                if isinstance(value, int) and not isinstance(value, bool):
                    if value < 0:
                        raise TableError(
                            ERR_BAD_TABLE_VALUE, f"{key} can't be negative, got {value}")
                    setattr(table, key, value)
            elif key == "dora_indicators":
                if isinstance(value, str):
                    table.dora_indicators = make_tiles_from_string(value)
            elif key in seats:
                seat, field = seats[key]
                if field == "discards" and isinstance(value, str):
                    table.opponents[seat].discards = make_tiles_from_string(value)
                elif field == "open_tiles" and isinstance(value, list):
                    table.opponents[seat].open_shapes = [
                        OpenShape.from_text(shape) for shape in value]
                elif field == "riichi" and isinstance(value, bool):
                    table.opponents[seat].riichi = value
            else:
                logger.debug("unknown table field ignored", key=key)

        return table

    @classmethod
    def from_json(cls, text: str) -> 'Table':
        params = json.loads(text)
        if not isinstance(params, dict):
            raise TableError(ERR_BAD_TABLE_VALUE, "table JSON must be an object")
        return cls.from_map(params)

    def visible_tiles_34(self) -> List[int]:
        """Counts of every tile we can see: our hand, discards, melds, dora indicators."""
        arr = self.my_hand.get_34_array()
        visible = list(self.dora_indicators)
        for opponent in self.opponents.values():
            visible.extend(opponent.discards)
            for shape in opponent.open_shapes:
                visible.extend(shape.tiles)
        for tile in visible:
            arr[tile.index34] += 1
        return arr

    def __repr__(self):
        return (f"Table({self.my_hand}, riichi={self.my_riichi}, "
                f"{self.prevalent_wind.kanji}/{self.my_seat_wind.kanji})")

"""Shanten (向聴数) calculation.

Shanten = minimum number of tile exchanges needed to reach tenpai.
-1 means already a complete hand (agari).
0 means tenpai (one tile away).

Three hand forms are evaluated independently and the minimum wins:
standard (4 sets + 1 pair), seven pairs and thirteen orphans. The last
two only exist for fully concealed hands.
"""

from functools import lru_cache
from typing import List, Tuple

import structlog

from riichi.core.exceptions import ERR_BAD_TILE_COUNT, ShantenError
from riichi.core.tile import YAOCHU_INDICES

logger = structlog.get_logger()

AGARI_STATE = -1
TENPAI_STATE = 0
SHANTEN_NOT_APPLICABLE = 99

# Sets needed by a complete standard hand
MAX_SETS = 4

# Legal logical hand sizes (quads count as three tiles)
HAND_SIZES = (13, 14)


def shanten(tiles_34: List[int], melds: int = 0) -> int:
    """Calculate minimum shanten number across all hand forms."""
    return min(
        shanten_standard(tiles_34, melds),
        shanten_chiitoi(tiles_34, melds),
        shanten_kokushi(tiles_34, melds),
    )


def shanten_standard(tiles_34: List[int], melds: int = 0) -> int:
    """Shanten for standard form (4 mentsu + 1 jantai).

    Formula: shanten = 8 - 2 * mentsu - partial - head
    where partial counts taatsu and spare pairs, capped so that
    mentsu + partial never exceeds the 4 blocks a hand needs.
    Declared melds enter as already complete mentsu.
    """
    return _standard_cached(tuple(tiles_34), melds)


@lru_cache(maxsize=8192)
def _standard_cached(tiles_34: Tuple[int, ...], melds: int) -> int:
    tiles = list(tiles_34)
    best = [2 * (MAX_SETS - melds)]
    _search(tiles, 0, melds, 0, False, best)
    return max(best[0], AGARI_STATE)


def _standard_formula(mentsu: int, partial: int, has_head: bool) -> int:
    partial = min(partial, MAX_SETS - mentsu)
    return 8 - 2 * mentsu - partial - (1 if has_head else 0)


def _search(tiles: List[int], idx: int, mentsu: int, partial: int,
            has_head: bool, best: List[int]):
    """Peel groups off bucket by bucket, recording the best shanten in best[0]."""
    if best[0] == AGARI_STATE:
        return

    while idx < 34 and tiles[idx] == 0:
        idx += 1

    if idx >= 34:
        s = _standard_formula(mentsu, partial, has_head)
        if s < best[0]:
            best[0] = s
        return

    is_suited = idx < 27
    pos = idx % 9
    can_add_partial = (mentsu + partial) < MAX_SETS

    # Pair as head
    if not has_head and tiles[idx] >= 2:
        tiles[idx] -= 2
        _search(tiles, idx, mentsu, partial, True, best)
        tiles[idx] += 2

    # Koutsu (triplet)
    if tiles[idx] >= 3:
        tiles[idx] -= 3
        _search(tiles, idx, mentsu + 1, partial, has_head, best)
        tiles[idx] += 3

    # Shuntsu (run)
    if is_suited and pos <= 6 and tiles[idx + 1] > 0 and tiles[idx + 2] > 0:
        tiles[idx] -= 1
        tiles[idx + 1] -= 1
        tiles[idx + 2] -= 1
        _search(tiles, idx, mentsu + 1, partial, has_head, best)
        tiles[idx] += 1
        tiles[idx + 1] += 1
        tiles[idx + 2] += 1

    if can_add_partial:
        # Pair waiting for a third copy
        if tiles[idx] >= 2:
            tiles[idx] -= 2
            _search(tiles, idx, mentsu, partial + 1, has_head, best)
            tiles[idx] += 2

        # Adjacent taatsu (12, 23, ...)
        if is_suited and pos <= 7 and tiles[idx + 1] > 0:
            tiles[idx] -= 1
            tiles[idx + 1] -= 1
            _search(tiles, idx, mentsu, partial + 1, has_head, best)
            tiles[idx] += 1
            tiles[idx + 1] += 1

        # Gap taatsu (13, 24, ...)
        if is_suited and pos <= 6 and tiles[idx + 2] > 0:
            tiles[idx] -= 1
            tiles[idx + 2] -= 1
            _search(tiles, idx, mentsu, partial + 1, has_head, best)
            tiles[idx] += 1
            tiles[idx + 2] += 1

    # Leave whatever is left in this bucket as isolated tiles
    _search(tiles, idx + 1, mentsu, partial, has_head, best)


def shanten_chiitoi(tiles_34: List[int], melds: int = 0) -> int:
    """Shanten for seven pairs (七対子).

    Formula: 6 - pairs, plus one for every kind missing below seven
    distinct kinds (a triplet still only yields one pair).
    Only valid for a fully concealed hand.
    """
    if melds:
        return SHANTEN_NOT_APPLICABLE

    pairs = sum(1 for c in tiles_34 if c >= 2)
    kinds = sum(1 for c in tiles_34 if c >= 1)

    return 6 - pairs + max(0, 7 - kinds)


def shanten_kokushi(tiles_34: List[int], melds: int = 0) -> int:
    """Shanten for thirteen orphans (国士無双).

    Formula: 13 - (number of yaochu types) - (1 if any yaochu pair).
    Only valid for a fully concealed hand.
    """
    if melds:
        return SHANTEN_NOT_APPLICABLE

    types = sum(1 for idx in YAOCHU_INDICES if tiles_34[idx] >= 1)
    has_pair = any(tiles_34[idx] >= 2 for idx in YAOCHU_INDICES)

    return 13 - types - (1 if has_pair else 0)


class ShantenFinder:
    """Computes shanten for a hand or a raw 34-count histogram.

    Works on the concealed part of a hand; declared melds are fixed and
    enter the standard form as complete sets.
    """

    def shanten(self, hand) -> int:
        """Shanten of a Hand, open tiles excluded from the search."""
        tiles_34 = hand.get_34_array(remove_open_tiles=True)
        return self.calculate(tiles_34, len(hand.open_shapes))

    def calculate(self, tiles_34: List[int], melds: int = 0) -> int:
        self._check_counts(tiles_34, melds)
        return shanten(tiles_34, melds)

    def standard(self, tiles_34: List[int], melds: int = 0) -> int:
        self._check_counts(tiles_34, melds)
        return shanten_standard(tiles_34, melds)

    def chiitoitsu(self, tiles_34: List[int], melds: int = 0) -> int:
        self._check_counts(tiles_34, melds)
        return shanten_chiitoi(tiles_34, melds)

    def kokushi(self, tiles_34: List[int], melds: int = 0) -> int:
        self._check_counts(tiles_34, melds)
        return shanten_kokushi(tiles_34, melds)

    @staticmethod
    def _check_counts(tiles_34: List[int], melds: int):
        if len(tiles_34) != 34 or any(c < 0 or c > 4 for c in tiles_34):
            logger.warning("bad histogram in shanten calculation", tiles_34=list(tiles_34))
            raise ShantenError(
                ERR_BAD_TILE_COUNT, "histogram must hold 34 buckets of 0..4 tiles")

        if not (0 <= melds <= MAX_SETS):
            raise ShantenError(ERR_BAD_TILE_COUNT, f"bad meld count {melds}")

        total = sum(tiles_34) + 3 * melds
        if total not in HAND_SIZES:
            logger.warning("unexpected tile count in shanten calculation",
                           tile_count=total, melds=melds)
            raise ShantenError(
                ERR_BAD_TILE_COUNT, f"hand must hold 13 or 14 tiles, got {total}")

"""Tests for table.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import json

import pytest

from riichi.core.exceptions import InvalidMeldError, ParseError, TableError
from riichi.core.meld import MeldType
from riichi.core.table import Seat, Table, Wind


class TestWind:
    def test_kanji(self):
        assert Wind.EAST.kanji == '東'
        assert Wind.NORTH.kanji == '北'


class TestTableFromMap:
    def test_defaults(self):
        table = Table.from_map({})
        assert table.my_hand.tiles == []
        assert not table.my_riichi
        assert table.prevalent_wind is Wind.EAST
        assert table.dora_indicators == []
        assert set(table.opponents) == set(Seat)

    def test_full_table(self):
        table = Table.from_map({
            "my_hand": "237m13478s45699p1z",
            "my_riichi": True,
            "prevalent_wind": 2,
            "my_seat_wind": 4,
            "wind_round": 1,
            "total_round": 5,
            "dora_indicators": "3p",
            "riichi_sticks_in_pot": 1,
            "tsumibo": 2,
            "toimen_discards": "91m5z",
            "kamicha_riichi": True,
            "shimocha_open_tiles": ["345p", "777z"],
        })

        assert table.my_hand.to_string() == "237m45699p13478s1z"
        assert table.my_riichi
        assert table.prevalent_wind is Wind.SOUTH
        assert table.my_seat_wind is Wind.NORTH
        assert (table.wind_round, table.total_round) == (1, 5)
        assert [str(t) for t in table.dora_indicators] == ["3p"]
        assert table.riichi_sticks_in_pot == 1
        assert table.tsumibo == 2
        assert table.opponents[Seat.KAMICHA].riichi
        assert not table.opponents[Seat.TOIMEN].riichi

        shapes = table.opponents[Seat.SHIMOCHA].open_shapes
        assert [s.meld_type for s in shapes] == [MeldType.CHI, MeldType.PON]

    def test_discards_keep_order(self):
        table = Table.from_map({"toimen_discards": "91m5z1p"})
        discards = table.opponents[Seat.TOIMEN].discards
        assert [str(t) for t in discards] == ["9m", "1m", "5z", "1p"]

    def test_hand_errors_propagate(self):
        with pytest.raises(ParseError):
            Table.from_map({"my_hand": "123m123p11111s22z"})

    def test_bad_open_tiles(self):
        with pytest.raises(InvalidMeldError):
            Table.from_map({"toimen_open_tiles": ["135m"]})

    def test_wrong_types_ignored(self):
        table = Table.from_map({
            "my_hand": 12,
            "my_riichi": "yes",
            "prevalent_wind": "south",
            "wind_round": True,
            "dora_indicators": ["3p"],
            "kamicha_discards": 5,
            "kamicha_open_tiles": "345p",
        })
        assert table.my_hand.tiles == []
        assert not table.my_riichi
        assert table.prevalent_wind is Wind.EAST
        assert table.wind_round == 0
        assert table.dora_indicators == []
        assert table.opponents[Seat.KAMICHA].discards == []
        assert table.opponents[Seat.KAMICHA].open_shapes == []

    def test_unknown_keys_ignored(self):
        table = Table.from_map({"honba_color": "red", "tsumibo": 3})
        assert table.tsumibo == 3

    @pytest.mark.parametrize("value", [0, 5])
    def test_bad_wind(self, value):
        with pytest.raises(TableError):
            Table.from_map({"my_seat_wind": value})

    def test_negative_counter(self):
        with pytest.raises(TableError):
            Table.from_map({"riichi_sticks_in_pot": -1})


class TestTableJson:
    def test_from_json(self):
        text = json.dumps({"my_hand": "123m123p12345s22z", "tsumibo": 1})
        table = Table.from_json(text)
        assert table.my_hand.count_tiles() == 13
        assert table.tsumibo == 1

    def test_json_must_be_object(self):
        with pytest.raises(TableError):
            Table.from_json("[1, 2, 3]")


class TestVisibleTiles:
    def test_counts_everything_visible(self):
        table = Table.from_map({
            "my_hand": "123m123p12345s22z",
            "dora_indicators": "1m",
            "toimen_discards": "2z",
            "shimocha_open_tiles": ["777z"],
        })
        visible = table.visible_tiles_34()
        assert visible[0] == 2      # 1m in hand and as dora indicator
        assert visible[28] == 3     # 2z pair plus a discard
        assert visible[33] == 3     # 7z pon
        assert sum(visible) == 13 + 1 + 1 + 3

    def test_does_not_touch_hand_cache(self):
        table = Table.from_map({"my_hand": "123m123p12345s22z", "dora_indicators": "1m"})
        table.visible_tiles_34()
        assert table.my_hand.get_34_array()[0] == 1

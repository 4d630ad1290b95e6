"""Tests for the rich renderer and the command line entry point"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging

import pytest
from rich.console import Console

import main
from riichi.config import AnalysisConfig
from riichi.core.exceptions import HandValidationError, ShantenError
from riichi.core.hand import Hand
from riichi.core.meld import OpenShape
from riichi.core.tile import Tile
from riichi.ui.renderer import Renderer, shanten_label
from riichi.ui.tile_display import (
    hand_to_rich_text, tile_to_display_str, tile_to_rich_text, tiles_to_rich_text,
)


def make_renderer(**config):
    console = Console(record=True, width=120, color_system=None)
    return console, Renderer(console, AnalysisConfig(**config))


class TestTileDisplay:
    def test_display_names(self):
        assert tile_to_display_str(Tile.from_text("5p")) == "5p"
        assert tile_to_display_str(Tile.from_text("5z")) == "白"

    def test_rich_text(self):
        text = tile_to_rich_text(Tile.from_text("3s"))
        assert text.plain == "[3s]"
        assert "green" in str(text.style)

    def test_no_colors(self):
        text = tile_to_rich_text(Tile.from_text("3s"), colors=False)
        assert text.plain == "[3s]"
        assert not text.style

    def test_tiles_separator(self):
        tiles = [Tile.from_text("1m"), Tile.from_text("2m")]
        assert tiles_to_rich_text(tiles, separator="").plain == "[1m][2m]"

    def test_hand_drawn_tile_last(self):
        text = hand_to_rich_text(Hand.from_text("23456m123p12345s1m")).plain
        assert text.endswith("  [1m]")
        assert text.startswith("[2m]")

    def test_hand_melds_after_concealed(self):
        hand = Hand.from_text("444m123p12345s22z")
        hand.add_open_shape(OpenShape.pon(Tile.from_text("4m")))
        text = hand_to_rich_text(hand).plain
        assert text.endswith("[4m][4m][4m]")


class TestRenderer:
    def test_shanten_labels(self):
        assert shanten_label(-1) == "complete (agari)"
        assert shanten_label(0) == "tenpai"
        assert shanten_label(2) == "2-shanten"

    def test_render_13(self):
        console, renderer = make_renderer()
        hand = Hand.from_text("237m13478s45699p")
        renderer.render_analysis(hand, hand.find_shanten_improving_tiles())
        out = console.export_text()
        assert "2-shanten" in out
        assert "Improving tiles" in out
        assert "24" in out

    def test_render_14_top_rows(self):
        console, renderer = make_renderer(max_rows=2)
        hand = Hand.from_text("237m13478s45699p1z")
        renderer.render_analysis(hand, hand.find_shanten_improving_tiles())
        out = console.export_text()
        assert "[7m]" in out
        assert "2 more discards" in out

    def test_render_complete(self):
        console, renderer = make_renderer()
        hand = Hand.from_text("123456789p12344m")
        renderer.render_analysis(hand, hand.find_shanten_improving_tiles())
        out = console.export_text()
        assert "complete (agari)" in out
        assert "Nothing to improve" in out

    def test_render_error(self):
        console, renderer = make_renderer()
        renderer.render_error("123m", HandValidationError())
        out = console.export_text()
        assert "123m" in out
        assert "code 100" in out


class TestAnalyze:
    def test_analyze(self):
        hand, rows = main.analyze(" 237m13478s45699p1z ", AnalysisConfig())
        assert hand.count_tiles() == 14
        assert len(rows) == 4

    def test_strict_rejects_invalid(self):
        with pytest.raises(HandValidationError):
            main.analyze("123456m", AnalysisConfig())

    def test_lenient_still_needs_a_full_hand(self, caplog):
        with caplog.at_level(logging.WARNING):
            with pytest.raises(ShantenError):
                main.analyze("123456m", AnalysisConfig(strict_parsing=False))
        assert "unexpected tile count" in caplog.text

    def test_bad_size_rejected_before_search(self, monkeypatch):
        searched = []
        monkeypatch.setattr(Hand, "find_shanten_improving_tiles",
                            lambda self: searched.append(self) or [])
        with pytest.raises(ShantenError):
            main.analyze("123456m", AnalysisConfig(strict_parsing=False))
        assert searched == []

    def test_analyze_and_render_reports_errors(self):
        console, renderer = make_renderer()
        ok = main.analyze_and_render("123m456", AnalysisConfig(), renderer)
        assert not ok
        assert "code 10" in console.export_text()


class TestMain:
    def test_good_hands(self, capsys):
        assert main.main(["237m13478s45699p", "--no-color"]) == 0
        assert "2-shanten" in capsys.readouterr().out

    def test_bad_hand(self, capsys):
        assert main.main(["237m13478s45699p", "123x", "--no-color"]) == 1
        out = capsys.readouterr().out
        assert "2-shanten" in out
        assert "123x" in out

    def test_interactive_stops_on_empty_line(self, monkeypatch):
        answers = iter(["237m13478s45699p", ""])
        monkeypatch.setattr(Console, "input", lambda self, prompt="": next(answers))
        assert main.main(["--no-color"]) == 0

    def test_interactive_stops_on_eof(self, monkeypatch):
        def eof(self, prompt=""):
            raise EOFError

        monkeypatch.setattr(Console, "input", eof)
        assert main.main([]) == 0

"""Analysis configuration for the terminal front end."""

import argparse
from typing import List, Optional


class AnalysisConfig:
    """Analysis configuration.

    Attributes:
        strict_parsing: Reject hands that fail validation (force_return off)
        colors: Colored tile output
        max_rows: Show at most this many discard rows (None = all)
        log_level: Log level name, None to read LOG_LEVEL
    """

    def __init__(
        self,
        strict_parsing: bool = True,
        colors: bool = True,
        max_rows: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        self.strict_parsing = strict_parsing
        self.colors = colors
        self.max_rows = max_rows
        self.log_level = log_level

        if max_rows is not None and max_rows < 1:
            raise ValueError(f"max_rows must be positive, got {max_rows}")

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None):
        """Build a config and the list of hands from command line arguments."""
        parser = argparse.ArgumentParser(
            description="Shanten and tile acceptance for riichi mahjong hands.")
        parser.add_argument("hands", nargs="*",
                            help="hands in notation, e.g. 237m13478s45699p1z")
        parser.add_argument("--lenient", action="store_true",
                            help="analyze hands even if they fail validation")
        parser.add_argument("--no-color", action="store_true",
                            help="disable colored tiles")
        parser.add_argument("--top", type=int, default=None, metavar="N",
                            help="show only the N best discards")
        parser.add_argument("--log-level", default=None,
                            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
        args = parser.parse_args(argv)

        if args.top is not None and args.top < 1:
            parser.error("--top must be positive")

        config = cls(
            strict_parsing=not args.lenient,
            colors=not args.no_color,
            max_rows=args.top,
            log_level=args.log_level,
        )
        return config, args.hands

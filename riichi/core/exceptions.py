"""Typed errors raised by the hand model and the analysis algorithms.

Every error carries a numeric code next to its message so a caller
sitting above the core (the table snapshot, the CLI) can report or
translate failures without parsing strings.
"""

# Error codes
ERR_BAD_TILE = 1
ERR_UNKNOWN_SUIT = 2
ERR_TILE_OUT_OF_RANGE = 3
ERR_UNTERMINATED_RUN = 10
ERR_EMPTY_RUN = 11
ERR_BAD_CHARACTER = 12
ERR_INVALID_HAND = 100
ERR_MELD_NOT_IN_HAND = 200
ERR_MALFORMED_MELD = 201
ERR_TILE_NOT_FOUND = 300
ERR_NO_DRAWN_TILE = 301
ERR_BAD_TILE_COUNT = 400
ERR_BAD_TABLE_VALUE = 500


class RiichiError(Exception):
    """Base class for all errors raised by this package.

    Attributes:
        code: Numeric error code (see the ERR_* constants)
        message: Human-readable description
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ParseError(RiichiError):
    """Malformed tile or hand notation."""


class TileParseError(ParseError):
    """A single tile token like '5p' could not be parsed."""


class HandValidationError(ParseError):
    """Notation parsed, but the resulting hand breaks the count invariants."""

    def __init__(self, message: str = "Couldn't parse hand representation."):
        super().__init__(ERR_INVALID_HAND, message)


class InvalidMeldError(RiichiError):
    """Meld declaration is malformed or not backed by concealed tiles."""


class TileLookupError(RiichiError):
    """Requested tile does not exist (bad id, not in hand, no drawn tile)."""


class ShantenError(RiichiError):
    """Histogram handed to the shanten search is outside the legal range."""


class TableError(RiichiError):
    """Table snapshot received a value it cannot represent."""

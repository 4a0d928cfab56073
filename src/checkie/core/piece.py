"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.enums import Player

# Board-text character <-> (Player, crowned)
_CHAR_MAP: dict[str, tuple[Player, bool]] = {
    "b": (Player.BLACK, False),
    "B": (Player.BLACK, True),
    "w": (Player.WHITE, False),
    "W": (Player.WHITE, True),
}

_CHARS: dict[tuple[Player, bool], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a man or a king."""

    color: Player
    crowned: bool = False

    def __str__(self) -> str:
        """Board-text character (lowercase = man, uppercase = king)."""
        return _CHARS[(self.color, self.crowned)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        try:
            color, crowned = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, crowned)

    def crown(self) -> Piece:
        return Piece(self.color, True)

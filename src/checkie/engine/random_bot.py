"""Bot that plays a uniformly random legal move."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkie.game.interfaces import IMoveSink

_LOGGER = logging.getLogger(__name__)


class RandomBot:
    """Picks any legal move for the side to move.

    Args:
        sink: Game the bot reads from and commits moves to.
        rng: Random source; pass a seeded ``random.Random`` for repeatable games.
    """

    __slots__ = ("_sink", "_rng")

    def __init__(self, sink: IMoveSink, rng: random.Random | None = None) -> None:
        self._sink = sink
        self._rng = rng or random.Random()

    def attempt_move(self) -> bool:
        moves = self._sink.state.legal_moves()
        if not moves:
            return False
        move = self._rng.choice(moves)
        _LOGGER.debug("Selected move: %s", move)
        self._sink.commit_move(move)
        return True

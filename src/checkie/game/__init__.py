"""Game management layer: state machine, variants, persistence.

Quick start::

    from checkie.core import Coordinate, Player
    from checkie.game import Game, GameVariant

    game = Game(GameVariant.HUMAN_VS_BOT, human_player=Player.BLACK)
    game.do_move(Coordinate(2, 2))  # select
    game.do_move(Coordinate(3, 3))  # move; the bot answers before returning
"""

from checkie.game.game import Game, default_bot_factory, start_new_game
from checkie.game.interfaces import (
    BotFactory,
    BotPolicy,
    BotStrategyError,
    GameVariant,
    IBotStrategy,
    IGame,
    IMoveSink,
    MoveOutcome,
    SelectionPhase,
)
from checkie.game.persistence import PersistenceError, deserialize, serialize
from checkie.game.state import GameState, StateSnapshot

__all__ = [
    # Interfaces
    "BotFactory",
    "BotPolicy",
    "BotStrategyError",
    "GameVariant",
    "IBotStrategy",
    "IGame",
    "IMoveSink",
    "MoveOutcome",
    "SelectionPhase",
    # Concrete
    "Game",
    "GameState",
    "PersistenceError",
    "StateSnapshot",
    "default_bot_factory",
    "deserialize",
    "serialize",
    "start_new_game",
]

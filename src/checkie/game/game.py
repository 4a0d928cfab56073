"""Game: the turn-taking state machine for both game variants.

A single class covers the closed set of variants; ``GameVariant`` selects
whether a bot strategy takes the non-human side after every human move.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from checkie.core.board import Board
from checkie.core.enums import GameResult, Player
from checkie.core.move import Move, MoveRecord
from checkie.core.types import Coordinate
from checkie.game.interfaces import (
    BotFactory,
    BotPolicy,
    BotStrategyError,
    GameVariant,
    IBotStrategy,
    IGame,
    MoveOutcome,
    SelectionPhase,
)
from checkie.game.state import GameState

_LOGGER = logging.getLogger(__name__)


def default_bot_factory(sink: Game) -> IBotStrategy:
    from checkie.engine.minimax_bot import MinimaxBot

    return MinimaxBot(sink)


class Game(IGame):
    """Owns a :class:`GameState` and applies square activations to it.

    In ``HUMAN_VS_BOT`` the human is bound to ``human_player``; after the
    human part of every ``do_move`` the bot keeps moving until the turn comes
    back to the human or the bot reports it cannot move.

    A fresh game whose first mover is the bot lets it open during
    construction. Pass ``autostart=False`` to defer that to
    :meth:`play_opening`, e.g. to run it on another thread.

    Thread-safety: a game is single-writer. Callers must not touch it from
    another thread while ``do_move`` / ``undo_move`` runs.
    """

    __slots__ = ("_state", "_variant", "_human_player", "_bot", "_policy", "_sleep")

    def __init__(
        self,
        variant: GameVariant = GameVariant.HUMAN_VS_HUMAN,
        *,
        human_player: Player = Player.BLACK,
        starting_player: Player = Player.BLACK,
        board: Board | None = None,
        bot_factory: BotFactory | None = None,
        policy: BotPolicy | None = None,
        state: GameState | None = None,
        sleep: Callable[[float], None] = time.sleep,
        autostart: bool = True,
    ) -> None:
        is_fresh = state is None
        if state is None:
            state = GameState(
                board=board if board is not None else Board.initial(),
                current_player=starting_player,
            )
        self._state = state
        self._variant = variant
        self._human_player = human_player
        self._policy = policy or BotPolicy()
        self._sleep = sleep
        self._bot: IBotStrategy | None = None

        if variant is GameVariant.HUMAN_VS_BOT:
            self._bot = (bot_factory or default_bot_factory)(self)
            if is_fresh and autostart:
                self.play_opening()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def variant(self) -> GameVariant:
        return self._variant

    @property
    def human_player(self) -> Player:
        return self._human_player

    @property
    def bot(self) -> IBotStrategy | None:
        return self._bot

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current_player(self) -> Player:
        return self._state.current_player

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    @property
    def result(self) -> GameResult:
        return self._state.result

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def is_humans_turn(self) -> bool:
        if self._bot is None:
            return True
        return self._state.current_player is self._human_player

    # ── IGame impl ───────────────────────────────────────────────────────

    def do_move(self, coord: Coordinate) -> MoveOutcome:
        if self.is_game_over:
            return MoveOutcome.IGNORED
        outcome = self._do_player_move(Coordinate(*coord))
        if not self.is_humans_turn:
            _LOGGER.info("Player move done: %s", outcome.name)
            self._play_bot_turns()
        return outcome

    def undo_move(self) -> bool:
        record = self._state.undo_last_move()
        if record is None:
            _LOGGER.debug("Nothing to undo")
            return False
        _LOGGER.debug("Undid %s by %s", record.move, record.player)
        return True

    def can_undo(self) -> bool:
        return self._state.can_undo

    def is_highlighted_square(self, coord: Coordinate) -> bool:
        return self._state.is_highlighted(Coordinate(*coord))

    def undo_turn(self) -> bool:
        """Undo back to the previous point where the human was to move.

        Without a bot this is a single :meth:`undo_move`.
        """
        if not self.undo_move():
            return False
        while not self.is_humans_turn and self._state.can_undo:
            self.undo_move()
        return True

    def play_opening(self) -> bool:
        """Let the bot open a game that starts on its turn.

        Returns False (and does nothing) once any move has been played, in a
        two-player game, or when the human moves first.
        """
        if self._bot is None or self._state.history or self.is_humans_turn:
            return False
        self._play_bot_turns()
        return True

    # ── Move sink (shared by human input and bot strategies) ─────────────

    def commit_move(self, move: Move) -> MoveRecord:
        """Apply a legal move for the side to move."""
        record = self._state.apply_move(move)
        _LOGGER.debug("%s played %s", record.player, move)
        return record

    # ── Internal helpers ─────────────────────────────────────────────────

    def _do_player_move(self, coord: Coordinate) -> MoveOutcome:
        state = self._state
        if not state.board.contains(coord) or not self.is_humans_turn:
            return MoveOutcome.IGNORED

        if state.selection is None:
            piece = state.board[coord]
            if piece is None or piece.color is not state.current_player:
                return MoveOutcome.IGNORED
            if state.jump_from is not None and coord != state.jump_from:
                return MoveOutcome.IGNORED
            state.select(coord)
            return MoveOutcome.SELECTED

        if coord in state.highlighted:
            self.commit_move(Move(state.selection, coord))
            return MoveOutcome.MOVED

        state.clear_selection()
        return MoveOutcome.DESELECTED

    def _play_bot_turns(self) -> None:
        assert self._bot is not None
        played = 0
        while self._state.current_player is not self._human_player:
            if played >= self._policy.max_moves_per_turn:
                raise BotStrategyError(
                    f"Bot exceeded {self._policy.max_moves_per_turn} moves in one turn"
                )
            _LOGGER.info("Starting bot move.")
            before = self._state.ply_count
            if not self._bot.attempt_move():
                _LOGGER.info("No more valid bot moves.")
                if self._policy.no_move_delay_s > 0:
                    self._sleep(self._policy.no_move_delay_s)
                break
            if self._state.ply_count != before + 1:
                raise BotStrategyError("Bot reported a move but did not apply exactly one")
            played += 1
        _LOGGER.info("Done bot moves.")


def start_new_game(
    variant: GameVariant,
    human_player: Player | None = None,
    *,
    bot_factory: BotFactory | None = None,
    policy: BotPolicy | None = None,
    autostart: bool = True,
) -> Game:
    """Create a fresh game; *human_player* defaults to BLACK."""
    return Game(
        variant,
        human_player=human_player if human_player is not None else Player.BLACK,
        bot_factory=bot_factory,
        policy=policy,
        autostart=autostart,
    )

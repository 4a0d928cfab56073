"""Save/restore a game as an opaque byte blob.

The blob is UTF-8 JSON. Restoring builds a brand-new :class:`Game`; it never
patches an existing one and never triggers a bot move. The stored history is
replayed through the rules before a restore is accepted, so a blob either
yields a consistent game or raises :class:`PersistenceError`.
"""

from __future__ import annotations

import json
from typing import Any

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move, MoveRecord
from checkie.core.piece import Piece
from checkie.core.rules import Rules
from checkie.core.types import Coordinate
from checkie.game.game import Game
from checkie.game.interfaces import BotFactory, BotPolicy, GameVariant
from checkie.game.state import GameState

FORMAT_VERSION = 1


class PersistenceError(ValueError):
    """Raised for blobs that cannot be restored."""


# ── Encoding helpers ─────────────────────────────────────────────────────────


def _coord(c: Coordinate | None) -> list[int] | None:
    return None if c is None else [c.x, c.y]


def _piece(p: Piece | None) -> str | None:
    return None if p is None else str(p)


def _record_to_dict(r: MoveRecord) -> dict[str, Any]:
    return {
        "move": [_coord(r.move.start), _coord(r.move.end)],
        "player": r.player.name,
        "piece": _piece(r.piece),
        "next_player": r.next_player.name,
        "captured": _piece(r.captured),
        "promoted": r.promoted,
        "jump_from_before": _coord(r.jump_from_before),
        "jump_from_after": _coord(r.jump_from_after),
    }


# ── Decoding helpers ─────────────────────────────────────────────────────────


def _require(value: Any, kind: type, what: str) -> Any:
    # bool is an int subclass; a JSON true is not a square component.
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
        raise PersistenceError(f"{what} must be a {kind.__name__}, got {value!r}")
    return value


def _parse_player(raw: Any, what: str) -> Player:
    try:
        return Player[_require(raw, str, what)]
    except KeyError as exc:
        raise PersistenceError(f"Unknown {what}: {raw!r}") from exc


def _parse_coord(raw: Any, board: Board) -> Coordinate | None:
    if raw is None:
        return None
    _require(raw, list, "Square")
    if len(raw) != 2:
        raise PersistenceError(f"Square must have two components, got {raw!r}")
    coord = Coordinate(_require(raw[0], int, "Square x"), _require(raw[1], int, "Square y"))
    if not board.contains(coord):
        raise PersistenceError(f"Square {coord} is off the board")
    return coord


def _parse_piece(raw: Any) -> Piece | None:
    if raw is None:
        return None
    try:
        return Piece.from_char(_require(raw, str, "Piece"))
    except ValueError as exc:
        raise PersistenceError(str(exc)) from exc


def _record_from_dict(raw: Any, board: Board) -> MoveRecord:
    _require(raw, dict, "Move record")
    try:
        squares = _require(raw["move"], list, "Move")
        if len(squares) != 2:
            raise PersistenceError(f"Move must have two squares, got {squares!r}")
        start, end = (_parse_coord(c, board) for c in squares)
        piece = _parse_piece(raw["piece"])
        if start is None or end is None or piece is None:
            raise PersistenceError("Incomplete move record")
        return MoveRecord(
            move=Move(start, end),
            player=_parse_player(raw["player"], "player"),
            piece=piece,
            next_player=_parse_player(raw["next_player"], "next player"),
            captured=_parse_piece(raw["captured"]),
            promoted=_require(raw["promoted"], bool, "Promoted flag"),
            jump_from_before=_parse_coord(raw["jump_from_before"], board),
            jump_from_after=_parse_coord(raw["jump_from_after"], board),
        )
    except KeyError as exc:
        raise PersistenceError(f"Move record missing {exc}") from exc


def _check_history(state: GameState) -> None:
    """Replay *state*'s history from its reverted start and compare."""
    history = state.history
    if not history:
        if state.jump_from is not None:
            piece = state.board[state.jump_from]
            if piece is None or piece.color is not state.current_player:
                raise PersistenceError("Jump continuation without a jumping piece")
        return

    board = state.board
    for record in reversed(history):
        board = Rules.revert_move(board, record)

    previous: MoveRecord | None = None
    for ply, record in enumerate(history, start=1):
        if previous is not None and (
            record.player is not previous.next_player
            or record.jump_from_before != previous.jump_from_after
        ):
            raise PersistenceError(f"Move {ply} does not follow move {ply - 1}")
        try:
            board, replayed = Rules.apply_move(
                board, record.move, record.player, record.jump_from_before
            )
        except ValueError as exc:
            raise PersistenceError(f"Move {ply} does not replay: {exc}") from exc
        if replayed != record:
            raise PersistenceError(f"Move {ply} does not match its stored record")
        previous = record

    if (
        board != state.board
        or state.current_player is not history[-1].next_player
        or state.jump_from != history[-1].jump_from_after
    ):
        raise PersistenceError("Stored position does not match its history")


# ── Public API ───────────────────────────────────────────────────────────────


def serialize(game: Game) -> bytes:
    """Encode *game* (board, turn, history, variant) as bytes.

    The current selection is transient and is not stored.
    """
    state = game.state
    payload = {
        "version": FORMAT_VERSION,
        "variant": game.variant.name,
        "human_player": game.human_player.name,
        "board": state.board.to_text(),
        "current_player": state.current_player.name,
        "jump_from": _coord(state.jump_from),
        "history": [_record_to_dict(r) for r in state.history],
    }
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def deserialize(
    blob: bytes,
    *,
    bot_factory: BotFactory | None = None,
    policy: BotPolicy | None = None,
) -> Game:
    """Rebuild a :class:`Game` from :func:`serialize` output."""
    try:
        payload = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Malformed game blob: {exc}") from exc

    if not isinstance(payload, dict):
        raise PersistenceError("Game blob must be a JSON object")
    version = payload.get("version")
    if version != FORMAT_VERSION:
        raise PersistenceError(f"Unsupported game blob version: {version!r}")

    try:
        try:
            board = Board.from_text(_require(payload["board"], str, "Board"))
        except (IndexError, ValueError) as exc:
            raise PersistenceError(f"Invalid board: {exc}") from exc
        history = _require(payload["history"], list, "History")
        state = GameState(
            board=board,
            current_player=_parse_player(payload["current_player"], "current player"),
            history=[_record_from_dict(r, board) for r in history],
            jump_from=_parse_coord(payload["jump_from"], board),
        )
        variant_name = _require(payload["variant"], str, "Variant")
        human_player = _parse_player(payload["human_player"], "human player")
    except KeyError as exc:
        raise PersistenceError(f"Game blob missing {exc}") from exc

    try:
        variant = GameVariant[variant_name]
    except KeyError as exc:
        raise PersistenceError(f"Unknown variant: {variant_name!r}") from exc

    _check_history(state)

    return Game(
        variant,
        human_player=human_player,
        state=state,
        bot_factory=bot_factory,
        policy=policy,
    )

"""User-configurable settings, stored with QSettings."""

from __future__ import annotations

from dataclasses import dataclass, fields

from PyQt6.QtCore import QSettings

from checkie.engine.minimax_bot import MinimaxBot
from checkie.engine.random_bot import RandomBot
from checkie.game.interfaces import BotFactory, BotPolicy, IBotStrategy, IMoveSink

BOT_KINDS = ("minimax", "random")
MAX_BOT_DEPTH = 6


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Bot
    bot_kind: str = "minimax"
    bot_depth: int = 3
    no_move_delay_s: float = 1.0

    # Diagnostics
    log_level: str = "INFO"

    # ── QSettings round trip ─────────────────────────────────────────────

    @classmethod
    def load(cls, store: QSettings) -> AppSettings:
        s = cls()
        for f in fields(cls):
            default = getattr(s, f.name)
            value = store.value(f.name, default, type=type(default))
            setattr(s, f.name, value)
        if s.bot_kind not in BOT_KINDS:
            s.bot_kind = "minimax"
        return s

    def save(self, store: QSettings) -> None:
        for f in fields(self):
            store.setValue(f.name, getattr(self, f.name))

    # ── Derived objects ──────────────────────────────────────────────────

    def bot_policy(self) -> BotPolicy:
        return BotPolicy(no_move_delay_s=max(0.0, self.no_move_delay_s))

    def bot_factory(self) -> BotFactory:
        depth = min(max(1, self.bot_depth), MAX_BOT_DEPTH)
        if self.bot_kind == "random":
            return RandomBot

        def make_minimax(sink: IMoveSink) -> IBotStrategy:
            return MinimaxBot(sink, max_depth=depth)

        return make_minimax

"""Bot strategies and the Qt worker that runs moves off the UI thread."""

from checkie.engine.minimax_bot import MinimaxBot
from checkie.engine.qt_bridge import MoveWorker
from checkie.engine.random_bot import RandomBot

__all__ = [
    "MinimaxBot",
    "MoveWorker",
    "RandomBot",
]

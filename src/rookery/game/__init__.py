"""Game management layer: controller, players, match state.

Quick start::

    from rookery.core import Color
    from rookery.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
    ctrl.submit_text("e2e4")
"""

from rookery.game.controller import GameController, GameEvents
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.match import MatchState, MoveRecord
from rookery.game.player import AIPlayer, HumanPlayer

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "MatchState",
    "MoveRecord",
]

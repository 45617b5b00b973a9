"""Turn logic — gesture FSM, move interaction, turn sequencing.

Quick start::

    from chesstable.core import ChessPosition, Color
    from chesstable.game import TurnSequencer

    seq = TurnSequencer(
        position=ChessPosition(),
        opponent=session,          # IOpponent
        board=board_scene,         # IBoardView
        move_list=move_panel,      # IMoveListView
        human_color=Color.WHITE,
    )
    seq.start()
"""

from chesstable.game.errors import (
    ChesstableError,
    EngineDesyncError,
    EngineError,
    IllegalStateError,
    StaleMoveSetError,
)
from chesstable.game.gesture import GesturePhase, GestureState
from chesstable.game.interaction import (
    AmbiguousMove,
    GestureResolution,
    InvalidDrop,
    MoveInteractionController,
    Resolved,
    choose_first,
    prefer_piece,
)
from chesstable.game.interfaces import (
    DisambiguationHook,
    IBoardView,
    IGestureSink,
    IMoveListView,
    IOpponent,
    IPositionModel,
    OutcomeKind,
    TurnOutcome,
    TurnPhase,
)
from chesstable.game.sequencer import TurnEvents, TurnSequencer

__all__ = [
    # Interfaces
    "DisambiguationHook",
    "IBoardView",
    "IGestureSink",
    "IMoveListView",
    "IOpponent",
    "IPositionModel",
    # Values
    "AmbiguousMove",
    "GesturePhase",
    "GestureResolution",
    "InvalidDrop",
    "OutcomeKind",
    "Resolved",
    "TurnOutcome",
    "TurnPhase",
    # Concrete
    "GestureState",
    "MoveInteractionController",
    "TurnEvents",
    "TurnSequencer",
    "choose_first",
    "prefer_piece",
    # Errors
    "ChesstableError",
    "EngineDesyncError",
    "EngineError",
    "IllegalStateError",
    "StaleMoveSetError",
]

"""GestureState — pointer gesture FSM for one board and one ply.

States::

    IDLE ──hover_enter(sq)──▶ HOVERING{sq} ──drag_start(sq)──▶ DRAGGING{sq}
      ▲                            │                               │
      └────────hover_leave()───────┘                               │
      └──────────────────────────drag_stop()───────────────────────┘

The drag-lock lives on the instance: while dragging, hover events anywhere
on this board are ignored, and a leave does not clear the hover.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum, auto

from chesstable.core.types import Square


class GesturePhase(IntEnum):
    IDLE = auto()
    HOVERING = auto()
    DRAGGING = auto()


class GestureState:
    """Tracks one in-flight gesture over the *movable* origin squares."""

    __slots__ = ("_movable", "_phase", "_origin")

    def __init__(self, movable: Iterable[Square] = ()) -> None:
        self._movable = frozenset(movable)
        self._phase = GesturePhase.IDLE
        self._origin: Square | None = None

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def origin(self) -> Square | None:
        return self._origin

    @property
    def is_dragging(self) -> bool:
        return self._phase == GesturePhase.DRAGGING

    def is_movable(self, sq: Square) -> bool:
        return sq in self._movable

    def hover_enter(self, sq: Square) -> bool:
        """Start hovering *sq*. Returns ``True`` if the state changed."""
        if self._phase == GesturePhase.DRAGGING or sq not in self._movable:
            return False
        if self._phase == GesturePhase.HOVERING and self._origin == sq:
            return False
        self._phase = GesturePhase.HOVERING
        self._origin = sq
        return True

    def hover_leave(self) -> bool:
        if self._phase != GesturePhase.HOVERING:
            return False
        self._set_idle()
        return True

    def drag_start(self, sq: Square) -> bool:
        if self._phase != GesturePhase.HOVERING or self._origin != sq:
            return False
        self._phase = GesturePhase.DRAGGING
        return True

    def drag_stop(self) -> bool:
        if self._phase != GesturePhase.DRAGGING:
            return False
        self._set_idle()
        return True

    def reset(self) -> None:
        self._set_idle()

    def _set_idle(self) -> None:
        self._phase = GesturePhase.IDLE
        self._origin = None

    def __repr__(self) -> str:
        if self._origin is None:
            return f"GestureState({self._phase.name})"
        return f"GestureState({self._phase.name}, origin={self._origin})"

"""Pure-Python opponent search (negamax + alpha-beta) over python-chess."""

from __future__ import annotations

from time import perf_counter

import chess

from chesstable.core.position import ChessPosition
from chesstable.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000
_QUIESCENCE_MAX_DEPTH = 8

_PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}

# Small bonus for occupying the four central squares and their ring.
_CENTER = chess.SquareSet(chess.BB_CENTER)
_CENTER_RING = chess.SquareSet(
    chess.BB_C3 | chess.BB_D3 | chess.BB_E3 | chess.BB_F3
    | chess.BB_C6 | chess.BB_D6 | chess.BB_E6 | chess.BB_F6
    | chess.BB_C4 | chess.BB_C5 | chess.BB_F4 | chess.BB_F5
)


def _never_cancelled() -> bool:
    return False


class PythonSearchEngine(IEngine):
    """Iterative-deepening searcher with a capture-only quiescence stage."""

    __slots__ = ("_cancel_check", "_deadline", "_nodes")

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    def search(
        self,
        position: ChessPosition,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        board = position.board.copy()
        root_moves = list(board.legal_moves)
        if not root_moves:
            if board.is_check():
                return SearchResult(None, -_MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        ordered_root = self._order_moves(board, root_moves)
        best_move = ordered_root[0]
        best_score = self._static_eval(board)
        completed_depth = 0

        for depth in range(1, limits.max_depth + 1):
            if self._should_stop():
                break

            score, move = self._search_root(board, ordered_root, depth)
            if self._should_stop() or move is None:
                break

            best_move = move
            best_score = score
            completed_depth = depth
            ordered_root = [move] + [m for m in ordered_root if m != move]

        return SearchResult(
            position.to_move(best_move),
            best_score,
            completed_depth,
            self._nodes,
        )

    def _search_root(
        self,
        board: chess.Board,
        root_moves: list[chess.Move],
        depth: int,
    ) -> tuple[int, chess.Move | None]:
        best_score = -_INF_SCORE
        best_move: chess.Move | None = None
        alpha = -_INF_SCORE

        for move in root_moves:
            if self._should_stop():
                break
            board.push(move)
            score = -self._negamax(board, depth - 1, -_INF_SCORE, -alpha, ply=1)
            board.pop()

            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        return best_score, best_move

    def _negamax(
        self,
        board: chess.Board,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        if self._should_stop():
            return self._static_eval(board)

        self._nodes += 1
        if board.is_insufficient_material() or board.halfmove_clock >= 100:
            return 0
        if depth <= 0:
            return self._quiescence(board, alpha, beta, ply, 0)

        legal = list(board.legal_moves)
        if not legal:
            return -_MATE_SCORE + ply if board.is_check() else 0

        best_score = -_INF_SCORE
        for move in self._order_moves(board, legal):
            board.push(move)
            score = -self._negamax(board, depth - 1, -beta, -alpha, ply + 1)
            board.pop()

            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if alpha >= beta or self._should_stop():
                break

        return best_score

    def _quiescence(
        self,
        board: chess.Board,
        alpha: int,
        beta: int,
        ply: int,
        q_depth: int,
    ) -> int:
        self._nodes += 1
        stand_pat = self._static_eval(board)
        if stand_pat >= beta:
            return beta
        alpha = max(alpha, stand_pat)
        if q_depth >= _QUIESCENCE_MAX_DEPTH or self._should_stop():
            return alpha

        captures = [m for m in board.legal_moves if board.is_capture(m)]
        for move in self._order_moves(board, captures):
            board.push(move)
            score = -self._quiescence(board, -beta, -alpha, ply + 1, q_depth + 1)
            board.pop()

            if score >= beta:
                return beta
            alpha = max(alpha, score)

        return alpha

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline

    @staticmethod
    def _order_moves(board: chess.Board, moves: list[chess.Move]) -> list[chess.Move]:
        def score(move: chess.Move) -> int:
            value = 0
            if move.promotion is not None:
                value += 20_000 + _PIECE_VALUES[move.promotion]
            if board.is_capture(move):
                victim = board.piece_type_at(move.to_square) or chess.PAWN
                attacker = board.piece_type_at(move.from_square) or chess.PAWN
                value += 10_000 + 10 * _PIECE_VALUES[victim] - _PIECE_VALUES[attacker]
            if board.is_castling(move):
                value += 120
            return value

        return sorted(moves, key=score, reverse=True)

    @staticmethod
    def _static_eval(board: chess.Board) -> int:
        """Material plus a small centralisation term, side-to-move relative."""
        total = 0
        for sq, piece in board.piece_map().items():
            value = _PIECE_VALUES[piece.piece_type]
            if piece.piece_type != chess.KING:
                if sq in _CENTER:
                    value += 20
                elif sq in _CENTER_RING:
                    value += 8
            total += value if piece.color == chess.WHITE else -value
        return total if board.turn == chess.WHITE else -total

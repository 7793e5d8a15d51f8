import logging
from dataclasses import dataclass
from typing import List

import chess
import numpy as np

from minimax_bot.game import Game

logger = logging.getLogger(__name__)

MAX_LEVEL = 6
DEFAULT_LEVEL = 3
WIN_SCORE = 100000.0

# Indexed by piece_type - 1: P, N, B, R, Q, K
PIECE_VALUES = np.array([100, 320, 330, 500, 900, 20000], dtype=np.float32)
CENTER_WEIGHTS = np.array([1, 2, 1, 0, 0, 0], dtype=np.float32)

_ranks, _files = np.indices((8, 8))
# 0 on the rim, 30 on the four center squares
CENTER_TABLE = (10 * (3.5 - np.maximum(np.abs(_ranks - 3.5), np.abs(_files - 3.5)))).astype(np.float32)


def board_to_planes(board: chess.Board) -> np.ndarray:
    """Convert board to piece planes of shape (12, 8, 8).
    Order: P,N,B,R,Q,K for white then same for black.
    """
    planes = np.zeros((12, 8, 8), dtype=np.float32)
    for square, piece in board.piece_map().items():
        plane = piece.piece_type - 1 + (0 if piece.color == chess.WHITE else 6)
        row = 7 - (square // 8)
        col = square % 8
        planes[plane, row, col] = 1.0
    return planes


@dataclass(frozen=True)
class ChessState:
    """A chess position identified by its FEN. Move history is not kept.

    The FEN includes the halfmove and fullmove counters, so the same placement
    reached with different clocks is a different state and does not share a
    transposition table entry.
    """

    fen: str

    @classmethod
    def from_fen(cls, fen: str) -> 'ChessState':
        board = chess.Board(fen)
        if not board.is_valid():
            raise ValueError(f'illegal position: {fen!r}')
        return cls(board.fen())

    @classmethod
    def initial(cls) -> 'ChessState':
        return cls(chess.STARTING_FEN)

    def board(self) -> chess.Board:
        return chess.Board(self.fen)


class ChessGame(Game):
    """Chess rules from python-chess, scored for one side.

    - color: the side the engine decides for; decisions are only meaningful
      from positions where color is to move, since the root maximizes
    - level: intelligence level, the ply at which search stops
    """

    def __init__(self, color: chess.Color = chess.WHITE, level: int = DEFAULT_LEVEL):
        if not 1 <= level <= MAX_LEVEL:
            raise ValueError(f'level must be between 1 and {MAX_LEVEL}, got {level}')
        self.color = color
        self.level = level

    def actions(self, state: ChessState) -> List[chess.Move]:
        board = state.board()
        if board.is_game_over():
            return []
        return list(board.legal_moves)

    def parse_action(self, state: ChessState, uci: str) -> chess.Move:
        """Parse a UCI move and check it is one of actions(state)."""
        move = chess.Move.from_uci(uci)
        if move not in self.actions(state):
            raise ValueError(f'illegal move {uci!r} in {state.fen}')
        return move

    def result(self, state: ChessState, action: chess.Move) -> ChessState:
        board = state.board()
        board.push(action)
        return ChessState(board.fen())

    def is_terminal(self, state: ChessState) -> bool:
        return state.board().is_game_over()

    def utility(self, state: ChessState) -> float:
        board = state.board()
        if board.is_checkmate():
            # The side to move is the one mated
            return -WIN_SCORE if board.turn == self.color else WIN_SCORE
        return 0.0

    def should_cut_off(self, depth: int) -> bool:
        return depth >= self.level

    def evaluate(self, state: ChessState) -> float:
        """Material plus centralization; positive means advantage for self.color."""
        planes = board_to_planes(state.board())
        counts = planes.sum(axis=(1, 2))
        material = counts[:6] @ PIECE_VALUES - counts[6:] @ PIECE_VALUES
        weighted = CENTER_WEIGHTS[:, None, None] * CENTER_TABLE
        positional = np.sum(planes[:6] * weighted) - np.sum(planes[6:] * weighted)
        score = float(material + positional)
        return score if self.color == chess.WHITE else -score

"""Board helpers: collide, merge, sweep, ghost

Boards are immutable (a tuple of row tuples); helpers that change the
board return a new one.
"""
from typing import Optional, Tuple
from tetris_config import COLS, ROWS
from tetris_piece import Piece

Row = Tuple[Optional[str], ...]
Board = Tuple[Row, ...]

EMPTY_ROW: Row = (None,) * COLS

def empty_board() -> Board:
    return (EMPTY_ROW,) * ROWS

def collide(board: Board, piece: Piece) -> bool:
    for bx,by in piece.cells():
        if bx<0 or bx>=COLS or by>=ROWS: return True
        if by>=0 and board[by][bx]: return True
    return False

def merge(board: Board, piece: Piece) -> Board:
    rows = [list(r) for r in board]
    for bx,by in piece.cells():
        if by>=0: rows[by][bx]=piece.t
    return tuple(tuple(r) for r in rows)

def sweep(board: Board) -> Tuple[Board, int]:
    """Drop full rows; return the new board and how many were cleared."""
    kept = [r for r in board if not all(r)]
    c = ROWS - len(kept)
    return (EMPTY_ROW,)*c + tuple(kept), c

def ghost_y(board: Board, piece: Piece) -> int:
    t = piece
    while not collide(board, t.moved(dy=1)):
        t = t.moved(dy=1)
    return t.y

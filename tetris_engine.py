"""
Board engine ("tetrion"): the board, the falling piece, the preview and the
hold slot, as one immutable value.

Every operation returns an ``EngineResult``. ``changed`` says whether the
operation had any effect; when it is False the very same tetrion comes back.
The game controller branches on that flag, so it is computed explicitly at
each call site instead of being derived from a comparison.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional

from tetris_board import Board, collide, empty_board, ghost_y, merge, sweep
from tetris_config import CONFIG, HARD_DROP_PER_CELL, SCORE_TABLE, SOFT_DROP_PER_CELL
from tetris_piece import Piece, try_rotate
from tetris_reward import Reward
from tetris_rng import NESRandom


class EngineResult(NamedTuple):
    tetrion: "Tetrion"
    reward: Optional[Reward]
    changed: bool


@dataclass(frozen=True)
class Tetrion:
    board: Board = field(default_factory=empty_board)
    falling_piece: Optional[Piece] = None
    next_type: str = "T"
    hold_type: Optional[str] = None
    hold_used: bool = False   # one hold per locked piece
    rng: NESRandom = field(default_factory=lambda: NESRandom(0), compare=False, repr=False)

    @classmethod
    def create(cls, seed: Optional[int] = None) -> "Tetrion":
        """Empty board with the first preview piece already rolled."""
        if seed is None:
            seed = CONFIG["NES_SEED"]
        rng = NESRandom(seed, CONFIG["NES_FIRST_PIECE_AVOID_SZO"])
        return cls(next_type=rng.next_piece(), rng=rng)

    # ---------- queries ----------
    @property
    def has_falling_piece(self) -> bool:
        return self.falling_piece is not None

    @property
    def can_move_down(self) -> bool:
        p = self.falling_piece
        return p is not None and not collide(self.board, p.moved(dy=1))

    # ---------- helpers ----------
    def _unchanged(self, reward: Optional[Reward] = None) -> EngineResult:
        return EngineResult(self, reward if reward is not None else Reward(), False)

    def _shift(self, dx: int, dy: int, points: int = 0) -> EngineResult:
        p = self.falling_piece
        if p is None:
            return self._unchanged()
        t = p.moved(dx, dy)
        if collide(self.board, t):
            return self._unchanged()
        return EngineResult(replace(self, falling_piece=t), Reward(points=points), True)

    def _rotate(self, cw: bool) -> EngineResult:
        p = self.falling_piece
        if p is None:
            return self._unchanged()
        t = try_rotate(self.board, p, cw)
        if t is None:
            return self._unchanged()
        return EngineResult(replace(self, falling_piece=t), Reward(), True)

    def _lock(self, piece: Piece, level: int, points: int = 0) -> EngineResult:
        board, cleared = sweep(merge(self.board, piece))
        if cleared:
            points += SCORE_TABLE[cleared] * level
        tetrion = replace(self, board=board, falling_piece=None, hold_used=False)
        return EngineResult(tetrion, Reward(points=points, lines=cleared), True)

    # ---------- operations ----------
    def spawn(self) -> EngineResult:
        """Bring the preview piece into play; unchanged if its spawn spot is blocked."""
        piece = Piece.spawn(self.next_type)
        if collide(self.board, piece):
            return EngineResult(self, None, False)
        rng = self.rng.fork()
        tetrion = replace(self, falling_piece=piece, next_type=rng.next_piece(), rng=rng)
        return EngineResult(tetrion, None, True)

    def move_left(self, level: int = 1) -> EngineResult:
        return self._shift(-1, 0)

    def move_right(self, level: int = 1) -> EngineResult:
        return self._shift(1, 0)

    def move_down(self, level: int = 1) -> EngineResult:
        return self._shift(0, 1)

    def soft_drop(self, level: int = 1) -> EngineResult:
        return self._shift(0, 1, SOFT_DROP_PER_CELL)

    def rotate_left(self, level: int = 1) -> EngineResult:
        return self._rotate(cw=False)

    def rotate_right(self, level: int = 1) -> EngineResult:
        return self._rotate(cw=True)

    def firm_drop(self, level: int = 1) -> EngineResult:
        """Slide to the landing row but leave the piece in play."""
        p = self.falling_piece
        if p is None:
            return self._unchanged()
        y = ghost_y(self.board, p)
        if y == p.y:
            return self._unchanged()
        return EngineResult(replace(self, falling_piece=p.moved(dy=y - p.y)), Reward(), True)

    def hard_drop(self, level: int = 1) -> EngineResult:
        """Slide to the landing row and lock immediately."""
        p = self.falling_piece
        if p is None:
            return self._unchanged()
        y = ghost_y(self.board, p)
        return self._lock(p.moved(dy=y - p.y), level, (y - p.y) * HARD_DROP_PER_CELL)

    def hold(self, level: int = 1) -> EngineResult:
        """Swap the falling piece with the held one.

        With an empty hold slot the piece is stored and nothing is left
        falling, so the controller goes back to spawning.
        """
        p = self.falling_piece
        if p is None or self.hold_used:
            return self._unchanged()
        if self.hold_type is None:
            return EngineResult(replace(self, falling_piece=None, hold_type=p.t, hold_used=True), Reward(), True)
        swapped = Piece.spawn(self.hold_type)
        if collide(self.board, swapped):
            return self._unchanged()
        return EngineResult(replace(self, falling_piece=swapped, hold_type=p.t, hold_used=True), Reward(), True)

    def lock(self, level: int = 1) -> EngineResult:
        """Fix the falling piece to the board and clear any full rows."""
        if self.falling_piece is None:
            return self._unchanged()
        return self._lock(self.falling_piece, level)

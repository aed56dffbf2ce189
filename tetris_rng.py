"""NES-style randomizer module"""
import copy
import time
from typing import Optional

class NESRandom:
    """
    Approximation of NES Tetris piece randomization: a 32-bit LCG mapped to
    the seven tetrominoes, one 50% reroll when the roll repeats the previous
    piece, and an optional rule forbidding S/Z/O as the very first piece.

    Instances are mutable; snapshot holders call ``fork()`` and roll on the
    copy so earlier snapshots keep their sequence.
    """
    PIECES = ["I","J","L","O","S","T","Z"]
    def __init__(self, seed: Optional[int], avoid_szo_first: bool=True):
        if seed is None:
            seed = time.time_ns() & 0xFFFFFFFF
        self.state = seed & 0xFFFFFFFF
        self.prev_index: Optional[int] = None
        self.avoid_szo_first = avoid_szo_first

    def fork(self) -> "NESRandom":
        return copy.copy(self)

    def _lcg_next(self):
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self):
        return (self._lcg_next() >> 16) & 0x7FFF

    def _rand_choice7(self):
        return self._rand() % 7

    def next_piece(self) -> str:
        cand = self._rand_choice7()
        if self.prev_index is None and self.avoid_szo_first:
            bad = {self.PIECES.index("S"), self.PIECES.index("Z"), self.PIECES.index("O")}
            while cand in bad:
                cand = self._rand_choice7()
        if self.prev_index is not None and cand == self.prev_index:
            if (self._rand() & 1) == 1:
                cand = self._rand_choice7()
        self.prev_index = cand
        return self.PIECES[cand]

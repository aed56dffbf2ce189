"""Piece model, shapes, SRS rotation"""
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from tetris_config import COLS

Shape = Tuple[Tuple[int, ...], ...]

SHAPES: Dict[str, Shape] = {
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
    "O": ((1,1),(1,1)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
}

def rotate_cw(m: Shape) -> Shape: return tuple(tuple(r) for r in zip(*m[::-1]))
def rotate_ccw(m: Shape) -> Shape: return tuple(tuple(c) for c in zip(*m))[::-1]

JLSTZ_KICKS: Dict[Tuple[int,int], List[Tuple[int,int]]] = {
    (0,1):[(0,0),(-1,0),(-1,1),(0,-2),(-1,-2)],
    (1,0):[(0,0),(1,0),(1,-1),(0,2),(1,2)],
    (1,2):[(0,0),(1,0),(1,-1),(0,2),(1,2)],
    (2,1):[(0,0),(-1,0),(-1,1),(0,-2),(-1,-2)],
    (2,3):[(0,0),(1,0),(1,1),(0,-2),(1,-2)],
    (3,2):[(0,0),(-1,0),(-1,-1),(0,2),(-1,2)],
    (3,0):[(0,0),(-1,0),(-1,-1),(0,2),(-1,2)],
    (0,3):[(0,0),(1,0),(1,1),(0,-2),(1,-2)],
}
I_KICKS: Dict[Tuple[int,int], List[Tuple[int,int]]] = {
    (0,1):[(0,0),(-2,0),(1,0),(-2,-1),(1,2)],
    (1,0):[(0,0),(2,0),(-1,0),(2,1),(-1,-2)],
    (1,2):[(0,0),(-1,0),(2,0),(-1,2),(2,-1)],
    (2,1):[(0,0),(1,0),(-2,0),(1,-2),(-2,1)],
    (2,3):[(0,0),(2,0),(-1,0),(2,1),(-1,-2)],
    (3,2):[(0,0),(-2,0),(1,0),(-2,-1),(1,2)],
    (3,0):[(0,0),(1,0),(-2,0),(1,-2),(-2,1)],
    (0,3):[(0,0),(-1,0),(2,0),(-1,2),(2,-1)],
}

@dataclass(frozen=True)
class Piece:
    t: str
    shape: Shape
    state: int  # rotation state 0=spawn,1=R,2=2,3=L
    x: int
    y: int

    @staticmethod
    def spawn(t: str) -> "Piece":
        s = SHAPES[t]
        w = len(s[0])
        empty = 0
        for r in s:
            if all(v==0 for v in r): empty+=1
            else: break
        # Allow some spawning above top for tall pieces
        return Piece(t, s, 0, (COLS-w)//2, -min(empty,2))

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return replace(self, x=self.x+dx, y=self.y+dy)

    def cells(self) -> List[Tuple[int,int]]:
        """Board (x, y) of every block, including rows above the top."""
        return [(self.x+x, self.y+y) for y,row in enumerate(self.shape) for x,v in enumerate(row) if v]

# rotation

def try_rotate(board, piece: Piece, cw: bool = True) -> Optional[Piece]:
    """Rotate with SRS kicks; return the kicked piece or None if every test collides."""
    old = piece.state
    new = (old + (1 if cw else -1)) % 4
    ns = rotate_cw(piece.shape) if cw else rotate_ccw(piece.shape)
    kicks = (I_KICKS if piece.t=="I" else JLSTZ_KICKS).get((old,new),[(0,0)])
    from tetris_board import collide
    for dx,dy in kicks:
        test = Piece(piece.t, ns, new, piece.x+dx, piece.y+dy)
        if not collide(board,test): return test
    return None

"""Outcome of a single board mutation."""
from dataclasses import dataclass

@dataclass(frozen=True)
class Reward:
    points: int = 0
    lines: int = 0

    def __str__(self) -> str:
        return f"Reward (points: {self.points}, lines: {self.lines})"

"""Level/lines/score progression."""
from dataclasses import dataclass
from typing import Optional

from tetris_config import LINES_PER_LEVEL
from tetris_reward import Reward

@dataclass(frozen=True)
class Progress:
    """Cumulative progress for one game.

    The level starts at 1 and goes up one step for every ``LINES_PER_LEVEL``
    cleared lines, so it never drops below 1.
    """
    level: int = 1
    lines: int = 0
    score: int = 0

    def add(self, reward: Optional[Reward]) -> "Progress":
        """Return a new progress with the reward's lines and points added."""
        if reward is None:
            return self
        lines = self.lines + reward.lines
        return Progress(
            level=lines // LINES_PER_LEVEL + 1,
            lines=lines,
            score=self.score + reward.points,
        )

"""
Pytest fixtures for the game controller tests.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

import pytest

from tetris_engine import EngineResult
from tetris_game import Game
from tetris_reward import Reward


class RecordingSound:
    """Sound player stand-in that remembers every cue."""

    def __init__(self):
        self.cues: List[str] = []

    def play(self, cue: str) -> None:
        self.cues.append(cue)


@dataclass(frozen=True)
class FakeTetrion:
    """Board engine with scripted outcomes.

    Each knob decides how the matching operation reports back; a
    successful operation always returns a new instance.
    """
    spawn_ok: bool = True
    fall_ok: bool = True
    falling: bool = False
    can_fall: bool = False
    command_changed: bool = True
    command_clears_piece: bool = False
    lock_reward: Reward = Reward()
    command_reward: Reward = Reward()
    last_level: Optional[int] = None

    @property
    def has_falling_piece(self) -> bool:
        return self.falling

    @property
    def can_move_down(self) -> bool:
        return self.can_fall

    def spawn(self) -> EngineResult:
        if not self.spawn_ok:
            return EngineResult(self, None, False)
        return EngineResult(replace(self, falling=True), None, True)

    def move_down(self, level: int = 1) -> EngineResult:
        if not self.fall_ok:
            return EngineResult(self, Reward(), False)
        return EngineResult(replace(self, last_level=level), Reward(), True)

    def lock(self, level: int = 1) -> EngineResult:
        return EngineResult(replace(self, falling=False, last_level=level), self.lock_reward, True)

    def _command(self, level: int) -> EngineResult:
        if not self.command_changed:
            return EngineResult(self, Reward(), False)
        tetrion = replace(self, falling=not self.command_clears_piece, last_level=level)
        return EngineResult(tetrion, self.command_reward, True)

    move_left = move_right = soft_drop = _command
    rotate_left = rotate_right = _command
    firm_drop = hard_drop = hold = _command


@pytest.fixture
def sound() -> RecordingSound:
    return RecordingSound()


@pytest.fixture
def make_game(sound):
    """Build a game around a FakeTetrion; extra keywords go to Game."""
    def _make(tetrion: Optional[FakeTetrion] = None, **kwargs) -> Game:
        return Game(tetrion=tetrion or FakeTetrion(), sound=sound, **kwargs)
    return _make

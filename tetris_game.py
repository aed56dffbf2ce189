"""
Game controller
===============

The game is a state machine that drives a tetrion. It is advanced by calling
``tick`` repeatedly from the host loop with the elapsed milliseconds and,
optionally, the player's command. Each call returns a new ``Game``; snapshots
are never modified in place, so replaying the same ticks from the same start
gives the same sequence of snapshots.

-------------------------------------------------------------
STATES
-------------------------------------------------------------

  • SPAWNING : waiting SPAWN_DELAY_MS before bringing in the next piece
  • IDLE     : a piece is falling under gravity
  • LOCKING  : the piece is grounded; LOCK_DELAY_MS until it is fixed
  • FINISHED : a spawn was blocked; nothing leaves this state

At most one transition fires per tick, in this order: spawn, gravity, lock,
player command.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from tetris_config import CONFIG
from tetris_engine import EngineResult, Tetrion
from tetris_progress import Progress
from tetris_reward import Reward
from tetris_sound import SoundPlayer

logger = logging.getLogger(__name__)


class GameState(Enum):
    SPAWNING = "spawning"
    IDLE = "idle"
    LOCKING = "locking"
    FINISHED = "finished"


class Command(str, Enum):
    """Player actions accepted by ``Game.tick``."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    SOFT_DROP = "soft_drop"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    FIRM_DROP = "firm_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"


# Command -> board engine operation (called with the current level)
DISPATCH: Dict[Command, Callable[[Tetrion, int], EngineResult]] = {
    Command.MOVE_LEFT: lambda t, level: t.move_left(level),
    Command.MOVE_RIGHT: lambda t, level: t.move_right(level),
    Command.MOVE_DOWN: lambda t, level: t.move_down(level),
    Command.SOFT_DROP: lambda t, level: t.soft_drop(level),
    Command.ROTATE_LEFT: lambda t, level: t.rotate_left(level),
    Command.ROTATE_RIGHT: lambda t, level: t.rotate_right(level),
    Command.FIRM_DROP: lambda t, level: t.firm_drop(level),
    Command.HARD_DROP: lambda t, level: t.hard_drop(level),
    Command.HOLD: lambda t, level: t.hold(level),
}

COMMAND_CUES: Dict[Command, str] = {
    Command.MOVE_LEFT: "move",
    Command.MOVE_RIGHT: "move",
    Command.MOVE_DOWN: "move",
    Command.SOFT_DROP: "move",
    Command.ROTATE_LEFT: "rotate",
    Command.ROTATE_RIGHT: "rotate",
    Command.FIRM_DROP: "drop",
    Command.HARD_DROP: "drop",
    Command.HOLD: "hold",
}

assert set(DISPATCH) == set(Command) == set(COMMAND_CUES)


def gravity_delay(level: int) -> int:
    """Milliseconds between gravity steps: 1000 at level 1, shrinking logarithmically."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return round(-333.54 * math.log(level) + 999.98)


def select_cue(default: str, reward: Optional[Reward], level_up: bool) -> str:
    """Level-up beats a line clear, which beats the action's own cue."""
    if level_up:
        return "level-up"
    if reward is not None and reward.lines > 0:
        return "clear-line"
    return default


@dataclass(frozen=True)
class Game:
    muted: bool = False
    tetrion: Tetrion = field(default_factory=Tetrion.create)
    progress: Progress = field(default_factory=Progress)
    sound: SoundPlayer = field(default_factory=SoundPlayer, compare=False, repr=False)
    time: int = 0
    state: GameState = GameState.SPAWNING
    paused: bool = False
    spawn_timer: int = 0
    lock_timer: int = 0
    gravity_timer: int = 0
    reward: Optional[Reward] = None

    @property
    def level(self) -> int:
        return self.progress.level

    @property
    def lines(self) -> int:
        return self.progress.lines

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def is_idle(self) -> bool:
        return self.state is GameState.IDLE

    @property
    def is_spawning(self) -> bool:
        return self.state is GameState.SPAWNING

    @property
    def is_locking(self) -> bool:
        return self.state is GameState.LOCKING

    @property
    def over(self) -> bool:
        return self.state is GameState.FINISHED

    @property
    def gravity_delay(self) -> int:
        return gravity_delay(self.level)

    def tick(self, delta: int, command: Optional[Union[Command, str]] = None) -> "Game":
        """Advance the clock by ``delta`` ms and apply at most one transition.

        Raises ValueError for a negative delta or an unknown command.
        """
        if self.paused:
            return self
        if delta < 0:
            raise ValueError(f"delta must be non-negative, got {delta}")
        if command is not None:
            command = Command(command)

        time = self.time + delta

        if self.is_spawning and time - self.spawn_timer >= CONFIG["SPAWN_DELAY_MS"]:
            result = self.tetrion.spawn()
            if not result.changed:
                logger.info("Spawn blocked at %d ms, game over (score %d)", time, self.score)
                self._play("game-over")
                return replace(self, time=time, state=GameState.FINISHED, reward=None)
            logger.debug("Spawned at %d ms", time)
            return replace(self, time=time, state=GameState.IDLE, tetrion=result.tetrion,
                           gravity_timer=time, reward=None)

        if self.is_idle and time - self.gravity_timer >= self.gravity_delay:
            result = self.tetrion.move_down()
            # Played even when the piece could not move.
            self._play("move")
            if not result.changed:
                logger.debug("Piece grounded at %d ms, locking", time)
                return replace(self, time=time, state=GameState.LOCKING, gravity_timer=time,
                               lock_timer=time, reward=result.reward)
            return replace(self, time=time, tetrion=result.tetrion, gravity_timer=time,
                           reward=result.reward)

        if self.is_locking and time - self.lock_timer >= CONFIG["LOCK_DELAY_MS"]:
            result = self.tetrion.lock(self.level)
            progress = self.progress.add(result.reward)
            self._play(select_cue("lock", result.reward, progress.level > self.level))
            logger.debug("Locked at %d ms: %s", time, result.reward)
            return replace(self, time=time, state=GameState.SPAWNING, tetrion=result.tetrion,
                           progress=progress, spawn_timer=time, reward=result.reward)

        if (self.is_idle or self.is_locking) and command is not None:
            return self._dispatch(command, time)

        return replace(self, time=time, reward=None)

    def _dispatch(self, command: Command, time: int) -> "Game":
        result = DISPATCH[command](self.tetrion, self.level)
        progress = self.progress.add(result.reward)
        if result.changed:
            self._play(select_cue(COMMAND_CUES[command], result.reward, progress.level > self.level))

        changes = dict(time=time, tetrion=result.tetrion, progress=progress, reward=result.reward)
        if not result.tetrion.has_falling_piece:
            logger.debug("%s left no falling piece, spawning", command.value)
            changes.update(state=GameState.SPAWNING, spawn_timer=time)
        elif self.is_locking and result.tetrion.can_move_down:
            logger.debug("%s freed the piece, locking aborted", command.value)
            changes.update(state=GameState.IDLE, gravity_timer=time)
        return replace(self, **changes)

    def pause(self) -> "Game":
        """Pauses/unpauses the game."""
        return replace(self, paused=not self.paused)

    def mute(self) -> "Game":
        """Mutes/unmutes the game audio."""
        return replace(self, muted=not self.muted)

    def _play(self, cue: str) -> None:
        if not self.muted:
            self.sound.play(cue)

    def __str__(self) -> str:
        return (f"Game (state: {self.state.value}, lines: {self.lines}, level: {self.level}, "
                f"score: {self.score}, reward: {self.reward})")


def replay(game: Game, steps: Iterable[Tuple[int, Optional[Command]]]) -> Iterator[Game]:
    """Yield the snapshot after each ``(delta, command)`` step."""
    for delta, command in steps:
        game = game.tick(delta, command)
        yield game

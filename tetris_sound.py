"""Sound cues played through pygame.mixer.

Playback is fire-and-forget: a missing audio device, a missing file or a
bad cue name is logged and otherwise ignored.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from tetris_config import CONFIG

logger = logging.getLogger(__name__)

CUES = ("move", "rotate", "drop", "lock", "hold", "clear-line", "level-up", "game-over")


class SoundPlayer:
    """Loads ``<cue>.wav`` from a directory on first use and plays it."""

    def __init__(self, sound_dir: Optional[Path] = None, volume: Optional[float] = None):
        self.sound_dir = Path(sound_dir if sound_dir is not None else CONFIG["SOUND_DIR"])
        self.volume = CONFIG["SOUND_VOLUME"] if volume is None else volume
        self._sounds: Optional[Dict[str, pygame.mixer.Sound]] = None

    def _load(self) -> Dict[str, pygame.mixer.Sound]:
        sounds: Dict[str, pygame.mixer.Sound] = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio unavailable, sound disabled: %s", e)
            return sounds
        for cue in CUES:
            path = self.sound_dir / f"{cue}.wav"
            if not path.exists():
                logger.debug("No sound file for cue %r at %s", cue, path)
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
            except pygame.error as e:
                logger.warning("Failed to load %s: %s", path, e)
                continue
            sound.set_volume(self.volume)
            sounds[cue] = sound
        return sounds

    def play(self, cue: str) -> None:
        if cue not in CUES:
            logger.warning("Unknown sound cue %r", cue)
            return
        if self._sounds is None:
            self._sounds = self._load()
        sound = self._sounds.get(cue)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.warning("Failed to play %r: %s", cue, e)

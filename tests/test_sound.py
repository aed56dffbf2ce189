import logging

import pygame
import pytest

import tetris_sound
from tetris_sound import SoundPlayer


class FakeSound:
    played = []

    def __init__(self, path, fail=False):
        self.path = path
        self.fail = fail
        self.volume = None

    def set_volume(self, volume):
        self.volume = volume

    def play(self):
        if self.fail:
            raise pygame.error("device lost")
        FakeSound.played.append(self.path)


@pytest.fixture
def mixer(monkeypatch):
    FakeSound.played = []
    monkeypatch.setattr(tetris_sound.pygame.mixer, "get_init", lambda: (44100, -16, 2))
    monkeypatch.setattr(tetris_sound.pygame.mixer, "Sound", FakeSound)
    return FakeSound


def test_plays_matching_file(tmp_path, mixer):
    (tmp_path / "move.wav").write_bytes(b"")
    player = SoundPlayer(sound_dir=tmp_path, volume=0.3)
    player.play("move")
    assert mixer.played == [str(tmp_path / "move.wav")]
    assert player._sounds["move"].volume == 0.3


def test_missing_file_is_silent(tmp_path, mixer):
    SoundPlayer(sound_dir=tmp_path).play("lock")
    assert mixer.played == []


def test_unknown_cue_is_logged(tmp_path, mixer, caplog):
    with caplog.at_level(logging.WARNING, logger="tetris_sound"):
        SoundPlayer(sound_dir=tmp_path).play("kaboom")
    assert "Unknown sound cue" in caplog.text


def test_load_failure_is_logged(tmp_path, monkeypatch, caplog):
    (tmp_path / "drop.wav").write_bytes(b"not audio")

    def broken(path):
        raise pygame.error("bad file")

    monkeypatch.setattr(tetris_sound.pygame.mixer, "get_init", lambda: (44100, -16, 2))
    monkeypatch.setattr(tetris_sound.pygame.mixer, "Sound", broken)
    with caplog.at_level(logging.WARNING, logger="tetris_sound"):
        SoundPlayer(sound_dir=tmp_path).play("drop")
    assert "Failed to load" in caplog.text


def test_playback_failure_is_logged(tmp_path, monkeypatch, caplog):
    (tmp_path / "hold.wav").write_bytes(b"")
    monkeypatch.setattr(tetris_sound.pygame.mixer, "get_init", lambda: (44100, -16, 2))
    monkeypatch.setattr(tetris_sound.pygame.mixer, "Sound", lambda path: FakeSound(path, fail=True))
    with caplog.at_level(logging.WARNING, logger="tetris_sound"):
        SoundPlayer(sound_dir=tmp_path).play("hold")
    assert "Failed to play" in caplog.text


def test_audio_device_unavailable(tmp_path, monkeypatch, caplog):
    def no_device():
        raise pygame.error("No available audio device")

    monkeypatch.setattr(tetris_sound.pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(tetris_sound.pygame.mixer, "init", no_device)
    player = SoundPlayer(sound_dir=tmp_path)
    with caplog.at_level(logging.WARNING, logger="tetris_sound"):
        player.play("move")
        player.play("move")
    assert caplog.text.count("Audio unavailable") == 1

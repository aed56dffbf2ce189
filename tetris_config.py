"""Tunable gameplay numbers, read at call time so tests and hosts can tweak them."""
from pathlib import Path

COLS, ROWS = 10, 20

# Scoring & level progression
LINES_PER_LEVEL = 10
SCORE_TABLE = {1: 40, 2: 100, 3: 300, 4: 1200}   # NES-like line clear points (multiplied by level)
SOFT_DROP_PER_CELL = 1
HARD_DROP_PER_CELL = 2

CONFIG = {
    # Timing (ms)
    "SPAWN_DELAY_MS": 100,    # Wait between a lock and the next piece
    "LOCK_DELAY_MS": 1000,    # How long a grounded piece can be moved/rotated before it locks

    # NES Randomizer specifics
    "NES_FIRST_PIECE_AVOID_SZO": True,
    "NES_SEED": None,         # If None, seeded from the clock; set int for reproducibility

    # Audio
    "SOUND_DIR": Path(__file__).parent / "sounds",
    "SOUND_VOLUME": 0.5,
}

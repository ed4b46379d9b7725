"""
Core picker infrastructure: paths, limits, initialization.
"""

import os
from pathlib import Path

# Picker data lives at user level, not with the package
PICKER_DIR = Path(os.environ.get("RANDOM_PICKER_DIR", Path.home() / ".random-picker"))
STORE_PATH = PICKER_DIR / "store.json"

# History keeps only the most recent definitions
HISTORY_LIMIT = 100

# Rank gap between neighbouring entries, large enough that usage tuning
# by a host never reorders them
RANK_STEP = 10000

# Weights and counts are signed 64-bit integers
INT64_MAX = 2**63 - 1

# Repeat cap sentinel: sample with replacement
NO_REPEAT_LIMIT = -1


def init_picker() -> Path:
    """Create the picker data directory and return the store path."""
    STORE_PATH.parent.mkdir(parents=True, exist_ok=True)
    return STORE_PATH

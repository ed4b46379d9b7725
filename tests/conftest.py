"""Test fixtures for random-picker."""

import random

import pytest


@pytest.fixture(autouse=True)
def isolated_picker_dir(tmp_path, monkeypatch):
    """Use isolated temp directory for each test."""
    picker_dir = tmp_path / "picker"
    picker_dir.mkdir()

    monkeypatch.setenv("RANDOM_PICKER_DIR", str(picker_dir))

    import random_picker.core
    monkeypatch.setattr(random_picker.core, "PICKER_DIR", picker_dir)
    monkeypatch.setattr(random_picker.core, "STORE_PATH", picker_dir / "store.json")

    yield picker_dir


@pytest.fixture
def rng():
    """Seeded generator so draws are repeatable."""
    return random.Random(1234)


class FixedRandom:
    """Returns preset draw points instead of random ones."""

    def __init__(self, *points):
        self.points = list(points)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.points.pop(0)


@pytest.fixture
def fixed_random():
    return FixedRandom

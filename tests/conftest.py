import random
import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Add src to sys.path so we can import glitch_text
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


class ScriptedRandom:
    """
    Random source that replays fixed floats and always picks the first item.

    Lets tests pin the exact number of marks drawn per side.
    """

    def __init__(self, floats: List[float]):
        self._floats = list(floats)
        self.random_calls = 0
        self.choice_calls = 0

    def random(self) -> float:
        value = self._floats[self.random_calls % len(self._floats)]
        self.random_calls += 1
        return value

    def choice(self, seq: Sequence[int]) -> int:
        self.choice_calls += 1
        return seq[0]


# Common test fixtures
@pytest.fixture
def seeded_rng():
    """Return a seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    """Return a factory for ScriptedRandom sources."""
    return ScriptedRandom


@pytest.fixture
def tables():
    """Return the shared mark tables."""
    from glitch_text.marks import get_mark_tables
    return get_mark_tables()

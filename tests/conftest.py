import os
import random
import sys

import pytest

# Ensure the repository root (containing the flat packages) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


class PickRng:
    """Stands in for random.Random, handing out chosen values in order."""

    def __init__(self, *picks):
        self.picks = list(picks)

    def choice(self, seq):
        value = self.picks.pop(0)
        assert value in seq, f"{value} is not a candidate"
        return value


@pytest.fixture()
def pick_rng():
    return PickRng


@pytest.fixture()
def rng():
    return random.Random(1234)

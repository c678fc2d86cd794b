import random

import matplotlib
import pytest

matplotlib.use("Agg")


@pytest.fixture
def rng():
    return random.Random(1234)

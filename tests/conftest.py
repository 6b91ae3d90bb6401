import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure the repository root is on sys.path so tests can import curvedna without
# requiring an editable install. This matches the lightweight CI setup that only
# installs test tooling.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from curvedna.utils.step_params import DINUCLEOTIDES, StepParameterTable, StepParams  # noqa: E402


def make_uniform_table(rise=3.4, twist=0.59, wedge=0.0, direction=0.0):
    """Table giving every dinucleotide the same parameters (angles in radians)."""
    params = StepParams(rise, twist, wedge, direction)
    return StepParameterTable({code: params for code in DINUCLEOTIDES}, name="uniform")


@pytest.fixture
def uniform_table():
    return make_uniform_table


@pytest.fixture
def straight_table():
    return make_uniform_table(rise=3.4, twist=0.59, wedge=0.0, direction=0.0)


@pytest.fixture
def random_table():
    rng = np.random.default_rng(0)
    params = {
        code: StepParams(
            rise_per_residue=float(rng.uniform(3.2, 3.6)),
            twist=float(rng.uniform(0.5, 0.7)),
            wedge=float(rng.uniform(0.0, 0.15)),
            direction=float(rng.uniform(-3.1, 3.1)),
        )
        for code in DINUCLEOTIDES
    }
    return StepParameterTable(params, name="random")

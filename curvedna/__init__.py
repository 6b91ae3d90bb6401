"""
curvedna: helical path reconstruction and curvature analysis for DNA sequences.

Each dinucleotide step is modelled as a rigid-body transform built from its
rise, twist, wedge and direction; composing the steps places every base pair
in a global frame, from which curvature and bending profiles are derived.
"""

from .__version__ import __version__

# Core functionality
from .core.base_pair import BasePairFrame, build_step_transform
from .core.sequence import SequencePath, parse_sequence, read_sequence_file
from .exceptions import (
    CurveDNAError,
    EmptySequenceError,
    ParameterTableError,
    UnknownStepError,
    UnreadableInputError,
)

# Utilities
from .utils.report_writer import ReportWriter
from .utils.step_params import StepParameterTable, StepParams, default_step_table, load_step_table


def get_version() -> str:
    """Return package version."""
    return __version__


__all__ = [
    "__version__",
    "get_version",
    "BasePairFrame",
    "build_step_transform",
    "SequencePath",
    "parse_sequence",
    "read_sequence_file",
    "StepParams",
    "StepParameterTable",
    "default_step_table",
    "load_step_table",
    "ReportWriter",
    "CurveDNAError",
    "EmptySequenceError",
    "ParameterTableError",
    "UnknownStepError",
    "UnreadableInputError",
]

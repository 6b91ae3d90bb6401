"""
Core modules for curvedna helical path reconstruction.
"""

from . import geometry
from .base_pair import BasePairFrame, build_step_transform
from .sequence import (
    NORMAL_BRACKET,
    ParsedSequence,
    SequencePath,
    parse_sequence,
    read_sequence_file,
)

__all__ = [
    "BasePairFrame",
    "build_step_transform",
    "NORMAL_BRACKET",
    "ParsedSequence",
    "SequencePath",
    "parse_sequence",
    "read_sequence_file",
    "geometry",
]

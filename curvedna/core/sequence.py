# curvedna/core/sequence.py
"""
Sequence parsing and helical path reconstruction.

A :class:`SequencePath` turns a base sequence into one :class:`BasePairFrame`
per dinucleotide step, places every step in a common global frame and derives
curvature and bending profiles from the per-step helix-axis normals.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from ..exceptions import EmptySequenceError, UnreadableInputError
from .base_pair import BasePairFrame

if TYPE_CHECKING:
    from ..utils.step_params import StepParameterTable

__all__ = [
    "NORMAL_BRACKET",
    "VALID_BASES",
    "ParsedSequence",
    "SequencePath",
    "parse_sequence",
    "read_sequence_file",
]

logger = logging.getLogger(__name__)

VALID_BASES = frozenset("ACGT")

# Half-width of the window used to average local normals before curvature
NORMAL_BRACKET = 5


class ParsedSequence(NamedTuple):
    """Dinucleotide codes read from a base stream plus skipped characters."""

    codes: List[str]
    warnings: List[Tuple[int, str]]
    base_count: int


def parse_sequence(stream: Union[str, Iterable[str]]) -> ParsedSequence:
    """Read a stream of bases into consecutive dinucleotide codes.

    Bases are case-insensitive; whitespace is skipped silently and any other
    character is skipped and reported as a ``(position, character)`` warning,
    where position is the 0-based offset in the stream.

    Args:
        stream: A string or an iterable of text chunks (e.g. an open file)

    Returns:
        ParsedSequence with one code per consecutive pair of valid bases

    Raises:
        EmptySequenceError: If fewer than two valid bases are found
    """
    if isinstance(stream, str):
        stream = (stream,)

    codes = []
    warnings = []
    base_count = 0
    previous = None
    position = 0

    for chunk in stream:
        for c in chunk:
            upper_c = c.upper()
            if upper_c in VALID_BASES:
                if previous is not None:
                    codes.append(previous + upper_c)
                previous = upper_c
                base_count += 1
            elif not c.isspace():
                warnings.append((position, c))
            position += 1

    if base_count < 2:
        raise EmptySequenceError(
            f"Input does not contain a meaningful sequence ({base_count} valid bases)"
        )

    return ParsedSequence(codes, warnings, base_count)


def read_sequence_file(filename: Union[str, Path]) -> ParsedSequence:
    """Parse a sequence file.

    The file is decoded byte-per-character, so stray non-ASCII bytes become
    ordinary invalid-character warnings.

    Raises:
        UnreadableInputError: If the file cannot be opened or read
        EmptySequenceError: If fewer than two valid bases are found
    """
    try:
        with open(filename, "r", encoding="latin-1") as f:
            return parse_sequence(f)
    except OSError as e:
        raise UnreadableInputError(f"File '{filename}' is unreadable: {e}") from e


class SequencePath:
    """Helical path of a DNA molecule, one rigid step per dinucleotide."""

    def __init__(self, name: str = "sequence") -> None:
        self.name = str(name)
        self.steps: List[BasePairFrame] = []
        self.warnings: List[Tuple[int, str]] = []
        self.perfect_length = 0.0
        self.bounding_box: Optional[np.ndarray] = None

    @classmethod
    def from_string(
        cls, sequence: str, table: StepParameterTable, name: str = "sequence"
    ) -> "SequencePath":
        path = cls(name)
        path.populate(parse_sequence(sequence), table)
        return path

    @classmethod
    def from_file(cls, filename: Union[str, Path], table: StepParameterTable) -> "SequencePath":
        path = cls(str(filename))
        path.populate(read_sequence_file(filename), table)
        return path

    @property
    def is_empty(self) -> bool:
        return not self.steps

    def __len__(self) -> int:
        return len(self.steps)

    def populate(self, parsed: ParsedSequence, table: StepParameterTable) -> None:
        """Build one frame per dinucleotide code and place them all.

        Raises:
            RuntimeError: If the path has already been populated
            UnknownStepError: If the table has no entry for a code
        """
        if not self.is_empty:
            raise RuntimeError(f"Sequence path '{self.name}' is already populated")

        for position, c in parsed.warnings:
            logger.warning(f"Invalid character {c!r} at position {position} in '{self.name}'")

        steps = []
        perfect_length = 0.0
        for code in parsed.codes:
            params = table[code]
            steps.append(BasePairFrame(code, params))
            perfect_length += params.rise_per_residue

        self.steps = steps
        self.warnings = list(parsed.warnings)
        self.perfect_length = perfect_length
        self._place_steps()

        logger.info(
            f"Built {len(self.steps)} base-pair steps for '{self.name}' "
            f"(perfect length {self.perfect_length:.3f})"
        )

    def _place_steps(self) -> None:
        frame = np.eye(4)
        min_coords = np.full(3, np.inf)
        max_coords = np.full(3, -np.inf)

        for step in self.steps:
            # Place with the frame accumulated so far...
            step.place(frame)
            min_coords = np.minimum(min_coords, step.global_center)
            max_coords = np.maximum(max_coords, step.global_center)
            # ...then advance it for the next step
            frame = frame @ step.inverse_step_transform

        self.bounding_box = max_coords - min_coords

    def _check_bracket(self, bracket: int) -> None:
        if isinstance(bracket, bool) or not isinstance(bracket, (int, np.integer)) or bracket < 1:
            raise ValueError(f"bracket must be a positive integer, got {bracket!r}")

    def compute_curvature(self, bracket: int) -> None:
        """Curvature from normals averaged over ``2 * NORMAL_BRACKET + 1`` steps.

        Does nothing when the path has fewer than ``2 * bracket`` steps.
        """
        self._check_bracket(bracket)
        n = len(self.steps)
        if n < 2 * bracket:
            return

        for step in self.steps:
            step.avg_normal = None
            step.curvature = None

        # Endpoints carry half weight; the denominator stays 2 * NORMAL_BRACKET
        offsets = range(-NORMAL_BRACKET, NORMAL_BRACKET + 1)
        weights = [0.5 if abs(j) == NORMAL_BRACKET else 1.0 for j in offsets]
        for i in range(NORMAL_BRACKET, n - NORMAL_BRACKET):
            avg_normal = np.zeros(3)
            for j, factor in zip(offsets, weights):
                avg_normal += factor * self.steps[i + j].local_normal
            self.steps[i].avg_normal = avg_normal / (2 * NORMAL_BRACKET)

        reach = bracket + NORMAL_BRACKET
        for i in range(reach, n - reach):
            before = self.steps[i - bracket].avg_normal
            after = self.steps[i + bracket].avg_normal
            self.steps[i].curvature = _angle(before, after)

    def compute_bending(self, bracket: int) -> None:
        """Bending from raw local normals ``bracket`` steps either side.

        Does nothing when the path has fewer than ``2 * bracket`` steps.
        """
        self._check_bracket(bracket)
        n = len(self.steps)
        if n < 2 * bracket:
            return

        for step in self.steps:
            step.bending = None

        for i in range(bracket, n - bracket):
            before = self.steps[i - bracket].local_normal
            after = self.steps[i + bracket].local_normal
            self.steps[i].bending = _angle(before, after)

    def curvature_profile(self) -> List[Tuple[int, float]]:
        return [(i, s.curvature) for i, s in enumerate(self.steps) if s.curvature is not None]

    def bending_profile(self) -> List[Tuple[int, float]]:
        return [(i, s.bending) for i, s in enumerate(self.steps) if s.bending is not None]

    def centers(self) -> np.ndarray:
        """(N,3) array of global base-pair centres."""
        return np.array([step.global_center for step in self.steps])

    @property
    def end_to_end_distance(self) -> float:
        if self.is_empty:
            raise RuntimeError(f"Sequence path '{self.name}' is empty")
        return float(np.linalg.norm(self.steps[-1].global_center - self.steps[0].global_center))

    @property
    def contour_ratio(self) -> float:
        """End-to-end distance relative to the straight contour length."""
        return self.end_to_end_distance / self.perfect_length

    def __repr__(self) -> str:
        return f"SequencePath(name={self.name!r}, steps={len(self.steps)})"


def _angle(u: np.ndarray, v: np.ndarray) -> float:
    # Rounding noise on (anti)parallel vectors must stay inside the arccos domain
    return float(np.arccos(np.clip(np.dot(u, v), -1.0, 1.0)))

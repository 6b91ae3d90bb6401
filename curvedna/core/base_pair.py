# curvedna/core/base_pair.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from .geometry import apply, rotate_x, rotate_z, translate

if TYPE_CHECKING:
    from ..utils.step_params import StepParams

__all__ = [
    "BasePairFrame",
    "build_step_transform",
    "BASE_CENTER",
    "BASE_PHOSPHATE_53",
    "BASE_PHOSPHATE_35",
    "HELIX_AXIS",
]


def _frozen(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


# Body-fixed landmarks in homogeneous coordinates
BASE_CENTER = _frozen([0.0, 0.0, 0.0, 1.0])
BASE_PHOSPHATE_53 = _frozen([-0.0975688, 0.9258795, 0.18, 1.0])
BASE_PHOSPHATE_35 = _frozen([-0.0975688, -0.9258795, 0.18, 1.0])
# Helix axis as a homogeneous direction (w = 0, unaffected by translation)
HELIX_AXIS = _frozen([0.0, 0.0, 1.0, 0.0])


def build_step_transform(params: StepParams) -> Tuple[np.ndarray, np.ndarray]:
    """Build the rigid motion from one base pair's frame to the next.

    The wedge is applied halfway through the twist, about an axis rotated by
    ``direction`` away from the local y axis, with half of the rise on either
    side. Every operation acts in the frame reached so far.

    Args:
        params: Step parameters with angles in radians

    Returns:
        Tuple of (transform, inverse) 4x4 matrices
    """
    half_rise = params.rise_per_residue / 2.0
    half_twist = params.twist / 2.0

    m = np.eye(4)
    m = translate(m, (0.0, 0.0, half_rise))
    m = rotate_z(m, half_twist)
    m = rotate_z(m, params.direction - np.pi / 2.0)
    m = rotate_x(m, -params.wedge)
    m = rotate_z(m, np.pi / 2.0 - params.direction)
    m = rotate_z(m, half_twist)
    m = translate(m, (0.0, 0.0, half_rise))

    return m, np.linalg.inv(m)


class BasePairFrame:
    """One dinucleotide step: its rigid transform and, once placed, its global landmarks."""

    def __init__(self, code: str, params: StepParams) -> None:
        self.code = code
        self.params = params
        self.step_transform, self.inverse_step_transform = build_step_transform(params)

        self.global_center: Optional[np.ndarray] = None
        self.global_phosphate_53: Optional[np.ndarray] = None
        self.global_phosphate_35: Optional[np.ndarray] = None
        self.local_normal: Optional[np.ndarray] = None

        self.avg_normal: Optional[np.ndarray] = None
        self.curvature: Optional[float] = None
        self.bending: Optional[float] = None

    @property
    def is_placed(self) -> bool:
        return self.global_center is not None

    def place(self, frame: np.ndarray) -> None:
        """Map the body-fixed landmarks and helix axis through ``frame``.

        Raises:
            RuntimeError: If the frame has already been placed
        """
        if self.is_placed:
            raise RuntimeError(f"Base pair step {self.code} is already placed")

        self.global_center = apply(frame, BASE_CENTER)
        self.global_phosphate_53 = apply(frame, BASE_PHOSPHATE_53)
        self.global_phosphate_35 = apply(frame, BASE_PHOSPHATE_35)

        normal = apply(frame, HELIX_AXIS)
        self.local_normal = normal / np.linalg.norm(normal)

    def __repr__(self) -> str:
        return f"BasePairFrame(code={self.code!r}, placed={self.is_placed})"

# curvedna/core/geometry/transforms.py
from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = [
    "translation",
    "rotation_x",
    "rotation_z",
    "translate",
    "rotate_x",
    "rotate_z",
    "apply",
]


def translation(offset: Sequence[float]) -> np.ndarray:
    """Homogeneous 4x4 translation matrix."""
    m = np.eye(4)
    m[:3, 3] = offset
    return m


def rotation_x(angle: float) -> np.ndarray:
    """Homogeneous rotation matrix around X axis (angle in radians)."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(angle: float) -> np.ndarray:
    """Homogeneous rotation matrix around Z axis (angle in radians)."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


# Incremental builders: the new operation is expressed in the frame reached so
# far, so it right-multiplies the accumulated matrix.
def translate(matrix: np.ndarray, offset: Sequence[float]) -> np.ndarray:
    return matrix @ translation(offset)


def rotate_x(matrix: np.ndarray, angle: float) -> np.ndarray:
    return matrix @ rotation_x(angle)


def rotate_z(matrix: np.ndarray, angle: float) -> np.ndarray:
    return matrix @ rotation_z(angle)


def apply(matrix: np.ndarray, point: np.ndarray) -> np.ndarray:
    """Map a homogeneous point or direction and drop the w component."""
    return (matrix @ point)[:3]

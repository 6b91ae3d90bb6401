"""
Rigid-body geometry helpers for helical path reconstruction.

This module provides:
- Homogeneous 4x4 translation and rotation builders
- Incremental (body-frame) composition in the glm style
"""

from .transforms import (
    apply,
    rotate_x,
    rotate_z,
    rotation_x,
    rotation_z,
    translate,
    translation,
)

__all__ = [
    "apply",
    "rotate_x",
    "rotate_z",
    "rotation_x",
    "rotation_z",
    "translate",
    "translation",
]

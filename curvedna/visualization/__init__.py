"""
Plotting helpers for curvature and bending profiles.
"""

from .plot_profiles import plot_profiles

__all__ = ["plot_profiles"]

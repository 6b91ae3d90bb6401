"""
plot_profiles.py - Curvature and bending profiles along a DNA path

Usage:
    from curvedna.visualization import plot_profiles
    plot_profiles(path, "sequence.png")
"""

import logging

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

__all__ = ["plot_profiles"]

logger = logging.getLogger(__name__)


def _profile_degrees(profile):
    if not profile:
        return np.array([], dtype=int), np.array([])
    idx, values = zip(*profile)
    return np.array(idx), np.degrees(values)


def plot_profiles(path, output_file, dpi=150):
    """Save a two-panel plot of curvature and bending (degrees) vs. step index"""
    fig, (ax_crv, ax_bnd) = plt.subplots(2, 1, figsize=(10, 6), sharex=True)

    for ax, profile, label, color in (
        (ax_crv, path.curvature_profile(), "Curvature", "#2166ac"),
        (ax_bnd, path.bending_profile(), "Bending", "#b2182b"),
    ):
        idx, values = _profile_degrees(profile)
        if len(idx):
            ax.plot(idx, values, color=color, linewidth=1.5)
        else:
            ax.text(0.5, 0.5, "no data (sequence too short)", transform=ax.transAxes,
                    ha="center", va="center", color="gray")
        ax.set_ylabel(f"{label} (°)")
        ax.grid(True, alpha=0.3)

    ax_bnd.set_xlabel("Base-pair step")
    ax_bnd.set_xlim(0, max(len(path.steps) - 1, 1))
    fig.suptitle(
        f"{path.name}  (end-to-end {path.end_to_end_distance:.1f}, "
        f"contour {path.perfect_length:.1f})"
    )
    fig.tight_layout()
    fig.savefig(output_file, dpi=dpi)
    plt.close(fig)

    logger.info(f"Saved profile plot to {output_file}")
    return output_file

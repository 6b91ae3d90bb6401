# curvedna/utils/report_writer.py
"""Plain-text reports for a reconstructed DNA path."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    from ..core.sequence import SequencePath

__all__ = ["ReportWriter", "OUTPUT_FORMATS", "mgl_line"]

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("crv", "bnd", "mgl", "pdb")

# Point styles for the .mgl point cloud: (radius, color)
MGL_CENTER_STYLE = (0.15, "blue")
MGL_PHOSPHATE_STYLE = (0.4, "red")
MGL_BOX_SCALE = 1.5


def mgl_line(point: Sequence[float], radius: float, color: str) -> str:
    return f"{point[0]:g} {point[1]:g} {point[2]:g} @ {radius:g} C[{color}]\n"


class ReportWriter:
    """Writes ``<name>.crv``, ``.bnd``, ``.mgl`` and ``.pdb`` files for a path.

    Files are written next to the input (``<name>.<ext>``) unless an output
    directory is given, in which case only the input's file name is kept.
    """

    def __init__(self, path: SequencePath, output_dir: Optional[Union[str, Path]] = None) -> None:
        self.path = path
        self.output_dir = Path(output_dir) if output_dir else None

    def output_file(self, extension: str) -> Path:
        target = Path(f"{self.path.name}.{extension}")
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            target = self.output_dir / target.name
        return target

    def _write_profile(self, extension: str, profile: Iterable) -> Path:
        filename = self.output_file(extension)
        with open(filename, "w") as f:
            for idx, value in profile:
                f.write(f"{idx} {value:g}\n")
        logger.info(f"Wrote {filename}")
        return filename

    def write_curvature(self) -> Path:
        """One ``<index> <curvature>`` line per step with a curvature value."""
        return self._write_profile("crv", self.path.curvature_profile())

    def write_bending(self) -> Path:
        """One ``<index> <bending>`` line per step with a bending value."""
        return self._write_profile("bnd", self.path.bending_profile())

    def write_mgl(self) -> Path:
        """Point cloud of centres and phosphates with a scaled bounding-box header."""
        filename = self.output_file("mgl")
        box = MGL_BOX_SCALE * np.asarray(self.path.bounding_box)
        with open(filename, "w") as f:
            f.write(f".Box:{box[0]:g},{box[1]:g},{box[2]:g}\n")
            for step in self.path.steps:
                f.write(mgl_line(step.global_center, *MGL_CENTER_STYLE))
                f.write(mgl_line(step.global_phosphate_53, *MGL_PHOSPHATE_STYLE))
                f.write(mgl_line(step.global_phosphate_35, *MGL_PHOSPHATE_STYLE))
        logger.info(f"Wrote {filename}")
        return filename

    def write_pdb(self) -> Path:
        """Coarse-grained PDB: one pseudo-atom per centre and phosphate."""
        filename = self.output_file("pdb")
        with open(filename, "w") as f:
            f.write("REMARK   Generated by curvedna\n")
            f.write("REMARK   Coarse-grained path: C = base-pair centre, P = phosphate\n")

            atom_index = 0
            for res_id, step in enumerate(self.path.steps, start=1):
                res_name = f"D{step.code[0]}"
                for name, element, coord in (
                    ("C", "C", step.global_center),
                    ("P53", "P", step.global_phosphate_53),
                    ("P35", "P", step.global_phosphate_35),
                ):
                    atom_index += 1
                    name = f" {name:<3}" if len(name) < 4 else f"{name:<4}"
                    f.write(
                        f"ATOM  {atom_index % 100000:>5} {name} {res_name:>3} "
                        f"A{res_id % 10000:>4}    "
                        f"{coord[0]:>8.3f}{coord[1]:>8.3f}{coord[2]:>8.3f}"
                        f"  1.00  0.00          {element:>2}\n"
                    )
            f.write("END\n")
        logger.info(f"Wrote {filename}")
        return filename

    def end_to_end_line(self) -> str:
        return f"{self.path.name} {self.path.end_to_end_distance:g} {self.path.perfect_length:g}"

    def write(self, outputs: Iterable[str] = ("crv", "bnd", "mgl")) -> Dict[str, Path]:
        """Write the requested formats.

        Raises:
            ValueError: If an unknown output format is requested
        """
        outputs = list(outputs)
        unknown = [o for o in outputs if o not in OUTPUT_FORMATS]
        if unknown:
            raise ValueError(f"Unknown output format(s): {unknown}. Must be in {OUTPUT_FORMATS}")

        writers = {
            "crv": self.write_curvature,
            "bnd": self.write_bending,
            "mgl": self.write_mgl,
            "pdb": self.write_pdb,
        }
        return {fmt: writers[fmt]() for fmt in outputs}

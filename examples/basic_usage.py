#!/usr/bin/env python3
"""
Basic usage example for curvedna
"""

import os
import sys

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from curvedna import ReportWriter, SequencePath, default_step_table

# Phased A-tracts (one every ~10 bp) produce a strongly curved molecule
PHASED_A_TRACTS = "GCAAAAAATGCAAAAAATGCAAAAAATGCAAAAAATGCAAAAAATGC"
MIXED = "GCATGCATGCATGCATGCATGCATGCATGCATGCATGCATGCATGC"


def run_basic_analysis(output_dir="results/basic_example"):
    """Compare a curved and a straight-ish sequence."""
    table = default_step_table()
    print(f"Using step parameter table: {table.name}")

    for name, sequence in [("phased", PHASED_A_TRACTS), ("mixed", MIXED)]:
        path = SequencePath.from_string(sequence, table, name=name)
        path.compute_curvature(5)
        path.compute_bending(5)

        curvature = [value for _, value in path.curvature_profile()]
        print(f"\n{name}: {len(path.steps)} steps")
        print(f"  End-to-end distance: {path.end_to_end_distance:.2f}")
        print(f"  Perfect length: {path.perfect_length:.2f}")
        print(f"  Contour ratio: {path.contour_ratio:.3f}")
        if curvature:
            print(f"  Max curvature: {max(curvature):.4f} rad")

        written = ReportWriter(path, output_dir=output_dir).write(["crv", "bnd", "mgl"])
        for fmt, filename in written.items():
            print(f"  {fmt}: {filename}")


if __name__ == "__main__":
    run_basic_analysis()

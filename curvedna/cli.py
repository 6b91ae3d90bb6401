"""
Command-line interface for curvedna
"""

import argparse
import copy
import logging
import sys

from .__version__ import __version__
from .core.sequence import SequencePath
from .exceptions import CurveDNAError
from .utils.config_parser import (
    DEFAULT_CONFIG,
    create_example_config,
    load_config,
    print_run_summary,
    validate_config,
)
from .utils.report_writer import OUTPUT_FORMATS, ReportWriter
from .utils.step_params import default_step_table, load_step_table

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="curvedna",
        description="Reconstruct the helical path of a DNA sequence and compute "
        "curvature and bending profiles.",
        epilog="Example: %(prog)s seq.txt --curvature-bracket 10 --outputs crv bnd mgl",
    )
    parser.add_argument("sequences", nargs="*", help="Sequence file(s) (A, C, G, T)")
    parser.add_argument("--config", help="YAML or JSON run configuration")
    parser.add_argument("--params", dest="parameter_table", help="Step-parameter table file")
    parser.add_argument(
        "--angle-unit",
        choices=["degrees", "radians"],
        help="Unit of the angle columns in --params (default: degrees)",
    )
    parser.add_argument("--curvature-bracket", type=int, help="Curvature window half-width")
    parser.add_argument("--bending-bracket", type=int, help="Bending window half-width")
    parser.add_argument(
        "--outputs", nargs="*", choices=OUTPUT_FORMATS, help="Output files to write"
    )
    parser.add_argument("-o", "--output-dir", help="Directory for output files")
    parser.add_argument(
        "--plot", action="store_true", default=None, help="Save a profile plot (PNG)"
    )
    parser.add_argument(
        "--create-config", metavar="FILE", help="Write an example configuration and exit"
    )
    parser.add_argument("--dry-run", action="store_true", help="Print settings and exit")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args):
    """Merge config file values with command-line overrides."""
    config = load_config(args.config) if args.config else copy.deepcopy(DEFAULT_CONFIG)

    overrides = {
        "parameter_table": args.parameter_table,
        "angle_unit": args.angle_unit,
        "curvature_bracket": args.curvature_bracket,
        "bending_bracket": args.bending_bracket,
        "outputs": args.outputs,
        "output_dir": args.output_dir,
        "plot": args.plot,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value

    validate_config(config)
    return config


def run(sequence_file, table, config):
    """Build, analyse and report one sequence file. Returns the SequencePath."""
    path = SequencePath.from_file(sequence_file, table)
    path.compute_curvature(config["curvature_bracket"])
    path.compute_bending(config["bending_bracket"])

    writer = ReportWriter(path, output_dir=config.get("output_dir"))
    writer.write(config["outputs"])
    if config.get("plot"):
        from .visualization import plot_profiles

        plot_profiles(path, writer.output_file("png"))

    print(writer.end_to_end_line())
    return path


def main(argv=None):
    """Main entry point for curvedna command"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if args.create_config:
        create_example_config(args.create_config)
        return 0

    try:
        config = resolve_config(args)
        if config["parameter_table"]:
            table = load_step_table(config["parameter_table"], angle_unit=config["angle_unit"])
        else:
            table = default_step_table()

        if args.dry_run:
            print_run_summary(config, table.name)
            return 0

        if not args.sequences:
            parser.error("at least one sequence file is required")

        for sequence_file in args.sequences:
            logger.debug(f"Processing {sequence_file}")
            run(sequence_file, table, config)
    except (CurveDNAError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Utility modules for curvedna.

This module provides various utilities:
- Dinucleotide step-parameter tables
- Report writers (.crv, .bnd, .mgl, .pdb)
- Configuration parsing
"""

from .config_parser import create_example_config, load_config, save_config
from .report_writer import OUTPUT_FORMATS, ReportWriter
from .step_params import StepParameterTable, StepParams, default_step_table, load_step_table

__all__ = [
    "StepParams",
    "StepParameterTable",
    "default_step_table",
    "load_step_table",
    "ReportWriter",
    "OUTPUT_FORMATS",
    "load_config",
    "save_config",
    "create_example_config",
]

# curvedna/utils/config_parser.py
"""Configuration file parser for curvedna runs."""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .report_writer import OUTPUT_FORMATS

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "save_config",
    "validate_config",
    "print_run_summary",
    "create_example_config",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "parameter_table": None,
    "angle_unit": "degrees",
    "curvature_bracket": 5,
    "bending_bracket": 5,
    "outputs": ["crv", "bnd", "mgl"],
    "output_dir": None,
    "plot": False,
}


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file.

    Missing keys are filled in from :data:`DEFAULT_CONFIG`.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            if config_path.suffix in [".yaml", ".yml"]:
                loaded = yaml.safe_load(f)
            elif config_path.suffix == ".json":
                loaded = json.load(f)
            else:
                raise ValueError(f"Unsupported config format: {config_path.suffix}")
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse configuration {config_path}: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration must be a mapping: {config_path}")

    config = copy.deepcopy(DEFAULT_CONFIG)
    config.update(loaded)

    # Validate configuration
    validate_config(config)

    # Expand paths
    config = _expand_paths(config)

    return config


def save_config(config: Dict[str, Any], output_path: str) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        output_path: Path to save configuration
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown configuration field(s): {', '.join(unknown)}")

    if config.get("angle_unit") not in ["degrees", "radians"]:
        raise ValueError(
            f"Invalid angle_unit: {config.get('angle_unit')}. Must be one of ['degrees', 'radians']"
        )

    for field in ["curvature_bracket", "bending_bracket"]:
        value = config.get(field)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Invalid type for {field}: expected int")
        if value < 1:
            raise ValueError(f"{field} out of range: {value} must be >= 1")

    outputs = config.get("outputs")
    if not isinstance(outputs, list):
        raise ValueError("Invalid type for outputs: expected list")
    for fmt in outputs:
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output format: {fmt}. Must be one of {list(OUTPUT_FORMATS)}")

    for field in ["parameter_table", "output_dir"]:
        value = config.get(field)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Invalid type for {field}: expected str")

    if not isinstance(config.get("plot"), bool):
        raise ValueError("Invalid type for plot: expected bool")


def _expand_paths(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand relative paths to absolute paths.

    Args:
        config: Configuration dictionary

    Returns:
        Configuration with expanded paths
    """
    path_fields = ["parameter_table", "output_dir"]

    for field in path_fields:
        if field in config and config[field]:
            config[field] = os.path.abspath(os.path.expanduser(config[field]))

    return config


def print_run_summary(config: Dict[str, Any], table_name: Optional[str] = None) -> None:
    """Print the settings a run will use.

    Args:
        config: Configuration dictionary
        table_name: Name of the step-parameter table in use
    """
    print("\n" + "=" * 60)
    print("CURVEDNA RUN SETTINGS")
    print("=" * 60)
    print(f"Step parameter table: {table_name or config.get('parameter_table') or 'bundled'}")
    print(f"Angle unit (table file): {config['angle_unit']}")
    print(f"Curvature bracket: {config['curvature_bracket']} steps")
    print(f"Bending bracket: {config['bending_bracket']} steps")
    print(f"Outputs: {', '.join(config['outputs']) or 'none'}")
    print(f"Output directory: {config.get('output_dir') or 'next to input'}")
    print("=" * 60)


# Example configuration template
EXAMPLE_CONFIG = """# curvedna Configuration File

# Step-parameter table (JSON, YAML or whitespace table); null uses the bundled
# wedge-model table
parameter_table: null
angle_unit: degrees  # unit of the angle columns in parameter_table

# Window half-widths in base-pair steps
curvature_bracket: 5
bending_bracket: 5

# Output settings: any of crv, bnd, mgl, pdb
outputs:
  - crv
  - bnd
  - mgl
output_dir: null  # null writes next to each input file
plot: false  # save a curvature/bending profile PNG
"""


def create_example_config(output_path: str = "example_config.yaml") -> None:
    """Create an example configuration file.

    Args:
        output_path: Path to save example config
    """
    with open(output_path, "w") as f:
        f.write(EXAMPLE_CONFIG)
    print(f"Created example configuration: {output_path}")

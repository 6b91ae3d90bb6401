# curvedna/utils/step_params.py
"""Dinucleotide step-parameter tables (rise, twist, wedge, direction)."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from itertools import product
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Union

import pandas as pd
import yaml

from ..exceptions import ParameterTableError, UnknownStepError

__all__ = [
    "StepParams",
    "StepParameterTable",
    "BASES",
    "DINUCLEOTIDES",
    "DEFAULT_TABLE_PATH",
    "default_step_table",
    "load_step_table",
]

logger = logging.getLogger(__name__)

BASES = "ACGT"
DINUCLEOTIDES = tuple(a + b for a, b in product(BASES, repeat=2))
ANGLE_UNITS = ("degrees", "radians")

DEFAULT_TABLE_PATH = Path(__file__).resolve().parent.parent / "data" / "bolshoy_1991.json"

# Column aliases accepted in tabular files
_COLUMN_ALIASES = {
    "step": "step",
    "code": "step",
    "dinucleotide": "step",
    "rise": "rise_per_residue",
    "rise_per_residue": "rise_per_residue",
    "twist": "twist",
    "wedge": "wedge",
    "direction": "direction",
}
_FIELDS = ("rise_per_residue", "twist", "wedge", "direction")


@dataclass(frozen=True)
class StepParams:
    """Structural parameters of one dinucleotide step.

    Attributes:
        rise_per_residue: Axial translation per step (Å)
        twist: Rotation about the helix axis (radians)
        wedge: Rotation about the bending axis (radians)
        direction: Azimuth of the wedge rotation axis (radians)
    """

    rise_per_residue: float
    twist: float
    wedge: float
    direction: float

    @classmethod
    def from_degrees(
        cls, rise_per_residue: float, twist: float, wedge: float, direction: float
    ) -> "StepParams":
        return cls(
            float(rise_per_residue),
            math.radians(twist),
            math.radians(wedge),
            math.radians(direction),
        )


class StepParameterTable(Mapping):
    """Read-only lookup from a dinucleotide code to its :class:`StepParams`."""

    def __init__(self, params: Mapping[str, StepParams], name: str = "custom") -> None:
        self._params: Dict[str, StepParams] = {}
        for code, step in params.items():
            key = _normalize_code(code)
            if key in self._params:
                raise ParameterTableError(f"Duplicate dinucleotide step '{key}' in table '{name}'")
            self._params[key] = step
        self.name = name

    @classmethod
    def from_degrees(
        cls, rows: Mapping[str, Mapping[str, float]], name: str = "custom"
    ) -> "StepParameterTable":
        """Build a table from ``code -> {field: value}`` rows with angles in degrees."""
        return _table_from_rows(rows, "degrees", name)

    def __getitem__(self, code: str) -> StepParams:
        try:
            return self._params[str(code).upper()]
        except KeyError:
            raise UnknownStepError(
                f"No step parameters for dinucleotide '{code}' in table '{self.name}'"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def codes(self) -> List[str]:
        return sorted(self._params)

    def missing_codes(self) -> List[str]:
        return [code for code in DINUCLEOTIDES if code not in self._params]

    def __repr__(self) -> str:
        return f"StepParameterTable(name={self.name!r}, steps={len(self)})"


def _normalize_code(code) -> str:
    key = str(code).strip().upper()
    if len(key) != 2 or any(base not in BASES for base in key):
        raise ParameterTableError(f"Invalid dinucleotide code: {code!r}")
    return key


def _to_radians(value: float, angle_unit: str) -> float:
    return math.radians(value) if angle_unit == "degrees" else float(value)


def _table_from_rows(
    rows: Mapping[str, Mapping[str, float]], angle_unit: str, name: str
) -> StepParameterTable:
    if angle_unit not in ANGLE_UNITS:
        raise ParameterTableError(f"Invalid angle unit: {angle_unit}. Must be one of {ANGLE_UNITS}")

    params = {}
    for code, row in rows.items():
        if not isinstance(row, Mapping):
            raise ParameterTableError(f"Step '{code}' must map field names to values")
        values = {}
        for field, value in row.items():
            column = _COLUMN_ALIASES.get(str(field).strip().lower())
            if column is None or column == "step":
                continue
            values[column] = value
        missing = [f for f in _FIELDS if f not in values]
        if missing:
            raise ParameterTableError(f"Step '{code}' is missing fields: {', '.join(missing)}")
        try:
            numbers = {f: float(values[f]) for f in _FIELDS}
        except (TypeError, ValueError) as e:
            raise ParameterTableError(f"Step '{code}' has a non-numeric value: {e}") from e
        if not all(math.isfinite(v) for v in numbers.values()):
            raise ParameterTableError(f"Step '{code}' has a non-finite value")

        params[code] = StepParams(
            rise_per_residue=numbers["rise_per_residue"],
            twist=_to_radians(numbers["twist"], angle_unit),
            wedge=_to_radians(numbers["wedge"], angle_unit),
            direction=_to_radians(numbers["direction"], angle_unit),
        )

    table = StepParameterTable(params, name=name)
    missing_codes = table.missing_codes()
    if missing_codes:
        raise ParameterTableError(
            f"Table '{name}' is incomplete, missing steps: {', '.join(missing_codes)}"
        )
    return table


def _read_tabular(path: Path) -> Dict[str, Dict[str, float]]:
    """Read a whitespace- or comma-delimited table with a header row."""
    sep = "," if path.suffix == ".csv" else r"\s+"
    try:
        df = pd.read_csv(path, sep=sep, comment="#", engine="python")
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ParameterTableError(f"Cannot parse step table {path}: {e}") from e

    df.columns = [_COLUMN_ALIASES.get(str(c).strip().lower(), str(c)) for c in df.columns]
    if "step" not in df.columns:
        raise ParameterTableError(f"Step table {path} has no 'step' column")

    records = [(record.pop("step"), record) for record in df.to_dict(orient="records")]
    return _normalize_rows(records, path)


def _normalize_rows(rows, path: Path) -> Dict[str, Dict[str, float]]:
    """Key rows by upper-case code, rejecting codes that repeat after normalisation."""
    if isinstance(rows, Mapping):
        rows = rows.items()

    normalized = {}
    for code, row in rows:
        key = _normalize_code(code)
        if key in normalized:
            raise ParameterTableError(f"Duplicate dinucleotide step '{key}' in {path}")
        normalized[key] = row
    return normalized


def load_step_table(
    table_path: Union[str, Path], angle_unit: str = "degrees"
) -> StepParameterTable:
    """Load a step-parameter table from JSON, YAML or a plain-text table.

    Args:
        table_path: Path to the table file
        angle_unit: Unit of the angle columns ('degrees' or 'radians'). A JSON or
            YAML document may override it with a top-level ``angle_unit`` key.

    Returns:
        StepParameterTable with all angles in radians

    Raises:
        FileNotFoundError: If the table file doesn't exist
        ParameterTableError: If the table is malformed or incomplete
    """
    table_path = Path(table_path)

    if not table_path.exists():
        raise FileNotFoundError(f"Step parameter table not found: {table_path}")

    if table_path.suffix in [".json", ".yaml", ".yml"]:
        with open(table_path, "r") as f:
            try:
                if table_path.suffix == ".json":
                    document = json.load(f)
                else:
                    document = yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise ParameterTableError(f"Cannot parse step table {table_path}: {e}") from e

        if not isinstance(document, dict):
            raise ParameterTableError(f"Step table {table_path} must be a mapping")
        if "steps" in document:
            angle_unit = document.get("angle_unit", angle_unit)
            rows = document["steps"]
        else:
            rows = document
        if not isinstance(rows, dict):
            raise ParameterTableError(f"Step table {table_path} must map codes to parameters")
        rows = _normalize_rows(rows, table_path)
    else:
        rows = _read_tabular(table_path)

    table = _table_from_rows(rows, angle_unit, name=table_path.name)
    logger.info(f"Loaded {len(table)} dinucleotide steps from {table_path}")
    return table


def default_step_table() -> StepParameterTable:
    """Return the bundled wedge-model table."""
    return load_step_table(DEFAULT_TABLE_PATH)

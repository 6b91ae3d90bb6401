# curvedna/exceptions.py
"""Errors raised while building a DNA path from a sequence."""

__all__ = [
    "CurveDNAError",
    "UnreadableInputError",
    "EmptySequenceError",
    "UnknownStepError",
    "ParameterTableError",
]


class CurveDNAError(Exception):
    """Base class for all curvedna errors."""


class UnreadableInputError(CurveDNAError, OSError):
    """The sequence file could not be opened or read."""


class EmptySequenceError(CurveDNAError, ValueError):
    """The input holds fewer than two valid bases."""


class UnknownStepError(CurveDNAError, KeyError):
    """A dinucleotide code has no entry in the step-parameter table."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class ParameterTableError(CurveDNAError, ValueError):
    """A step-parameter table file is malformed or incomplete."""

"""
pdfxy_lib/errors.py: Exception types raised by the layout analysis.
"""


class PdfxyError(Exception):
    """Base class for all errors raised by pdfxy_lib."""


class ValidationError(PdfxyError, ValueError):
    """Malformed input rejected before it reaches the partitioning engine.

    Args:
        label (str): A short machine-readable reason, e.g. "non-finite geometry".
        message (str): A human-readable description.
    """

    def __init__(self, label, message=None):
        super().__init__(message or label)
        self.label = label


class IndexOutOfRangeError(PdfxyError, IndexError):
    """An index passed to ElementSet.cut() or ElementSet.swap() is out of range."""


class StaleViewError(PdfxyError, RuntimeError):
    """An ElementSet view was used after its parent set was mutated."""

"""
pdfxy_lib/fontmetrics.py: Vertical metrics of the standard 14 PDF fonts.

The metrics come from the AFM tables bundled with pdfminer.six. The resource
is created once by the caller (FontMetrics.load()) and passed to the glyph
extractor, which uses it to tighten glyph boxes to the font's ascent and
descent instead of a full em above the descent line.
"""
import logging
import re
from dataclasses import dataclass

from pdfminer.fontmetrics import FONT_METRICS

log_extract = logging.getLogger("pdfxy.extract")

_SUBSET_PREFIX = re.compile(r"^[A-Z]{6}\+")


@dataclass(frozen=True)
class VerticalMetrics:
    """Ascent and descent of a font, in em units."""

    ascent: float
    descent: float

    @property
    def height(self) -> float:
        return self.ascent - self.descent


def base_font_name(fontname: str) -> str:
    """Strips the subset tag (e.g. 'ABCDEF+') from a font name."""
    return _SUBSET_PREFIX.sub("", fontname or "")


class FontMetrics:
    """A read-only table of VerticalMetrics keyed by base font name."""

    def __init__(self, table=None):
        self._table = dict(table or {})

    @classmethod
    def load(cls):
        """Builds the table from pdfminer's standard 14 font metrics."""
        table = {}
        for name, (descriptor, _widths) in FONT_METRICS.items():
            ascent, descent = descriptor.get("Ascent"), descriptor.get("Descent")
            if ascent is None or descent is None or ascent <= descent:
                continue
            table[name] = VerticalMetrics(ascent / 1000, descent / 1000)
        log_extract.debug("Loaded vertical metrics of %d fonts.", len(table))
        return cls(table)

    def __len__(self):
        return len(self._table)

    def __contains__(self, fontname):
        return base_font_name(fontname) in self._table

    def get(self, fontname):
        """Returns the VerticalMetrics of a font, or None if it is unknown."""
        return self._table.get(base_font_name(fontname))

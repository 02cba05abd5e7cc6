"""
pdfxy_lib/stats.py: Frequency statistics over sets of positioned glyphs.

The statistics drive the lane heuristics of the XY-cut tokenizers (dominant
font size, whitespace width, line gap) and are attached to every output
block as metadata.
"""
import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from .constants import STATS_PRECISION

log_stats = logging.getLogger("pdfxy.stats")


def quantize(value, precision=STATS_PRECISION):
    """Floors a float to the given number of decimal places."""
    factor = 10**precision
    # Gaps come from subtractions: 1.0 - 0.9 must still floor to 0.1.
    return math.floor(value * factor + 1e-9) / factor


class FrequencyCounter:
    """Counts occurrences of values; floats are quantized before counting.

    Ties in most_frequent() are resolved in favour of the value that was
    added first, since Counter keeps insertion order and max() returns the
    first maximal item.
    """

    def __init__(self, values=None, precision=STATS_PRECISION):
        self.precision = precision
        self._counter = Counter()
        for value in values or []:
            self.add(value)

    def add(self, value):
        if value is None:
            return
        if isinstance(value, float):
            value = quantize(value, self.precision)
        self._counter[value] += 1

    def __len__(self):
        return len(self._counter)

    def count(self, value):
        if isinstance(value, float):
            value = quantize(value, self.precision)
        return self._counter.get(value, 0)

    def most_frequent(self):
        """Returns the most frequent value, or None if nothing was counted."""
        if not self._counter:
            return None
        return max(self._counter.items(), key=lambda item: item[1])[0]


def most_frequent_value(values, precision=STATS_PRECISION):
    """One-shot helper: the most frequent (quantized) value, or None."""
    return FrequencyCounter(values, precision).most_frequent()


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Read-only aggregate over a set of glyphs. Any field may be None."""

    font: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[tuple] = None
    whitespace_width: Optional[float] = None
    line_gap: Optional[float] = None


def horizontal_gaps(elements, precision=STATS_PRECISION):
    """Yields the 'whitespace-like' horizontal distances between neighbours.

    Elements are sorted by their left edge. For every element with both a
    previous and a next neighbour, the distances to both are computed
    (floored, negative distances count as 0) and the one that is strictly
    larger than the other is yielded.
    """
    ordered = sorted(elements, key=lambda e: (e.rect.min_x, e.order))
    for i in range(1, len(ordered) - 1):
        prev, curr, nxt = ordered[i - 1].rect, ordered[i].rect, ordered[i + 1].rect
        left = max(quantize(curr.min_x - prev.max_x, precision), 0)
        right = max(quantize(nxt.min_x - curr.max_x, precision), 0)
        if left > right:
            yield left
        elif right > left:
            yield right


def estimate_whitespace_width(elements, precision=STATS_PRECISION):
    """The most frequent whitespace-like gap, or None if there is none."""
    return most_frequent_value(list(horizontal_gaps(elements, precision)), precision)


def vertical_gaps(elements, precision=STATS_PRECISION):
    """Yields the positive gaps between horizontal bands, top to bottom.

    A band is a maximal run of elements whose y-extents overlap when the
    elements are scanned from the top of the page downwards.
    """
    ordered = sorted(elements, key=lambda e: (-e.rect.max_y, e.order))
    band_bottom = None
    for element in ordered:
        if band_bottom is None:
            band_bottom = element.rect.min_y
            continue
        if element.rect.max_y < band_bottom:
            gap = quantize(band_bottom - element.rect.max_y, precision)
            if gap > 0:
                yield gap
            band_bottom = element.rect.min_y
        else:
            band_bottom = min(band_bottom, element.rect.min_y)


def estimate_line_gap(elements, precision=STATS_PRECISION):
    """The most frequent gap between consecutive text bands, or None."""
    return most_frequent_value(list(vertical_gaps(elements, precision)), precision)


def compute_statistics(elements) -> StatisticsSnapshot:
    """Computes the StatisticsSnapshot of a set of glyphs."""
    elements = [e for e in elements if e is not None]
    fonts, sizes, colors = FrequencyCounter(), FrequencyCounter(), FrequencyCounter()
    for e in elements:
        fonts.add(e.font)
        sizes.add(float(e.font_size) if e.font_size is not None else None)
        colors.add(e.color)
    snapshot = StatisticsSnapshot(
        font=fonts.most_frequent(),
        font_size=sizes.most_frequent(),
        color=colors.most_frequent(),
        whitespace_width=estimate_whitespace_width(elements),
        line_gap=estimate_line_gap(elements),
    )
    log_stats.debug("Statistics over %d glyphs: %s", len(elements), snapshot)
    return snapshot

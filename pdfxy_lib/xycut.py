"""
pdfxy_lib/xycut.py: The generic XY-cut partitioning engine.

The engine recursively splits a set of glyphs along empty vertical lanes
(left/right) or, if none is accepted, along empty horizontal lanes
(top/bottom), until a set cannot be divided any further. Every indivisible
set is packed into a leaf Block. Lane sizes, lane acceptance and packing are
supplied by an XYCutConfig, so that words, lines and paragraphs share the
same engine.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable

from .element_set import ElementSet

log_xycut = logging.getLogger("pdfxy.xycut")

VERTICAL, HORIZONTAL = "vertical", "horizontal"


@dataclass(frozen=True)
class XYCutConfig:
    """The pluggable strategy of a tokenizer.

    lane_width(set) -> float and lane_height(set) -> float give the minimum
    size of a lane; the is_valid_* predicates receive the (before, overlap,
    after) subsets of a candidate lane; pack(page_num, glyphs) builds a Block.
    """

    lane_width: Callable
    is_valid_vertical_lane: Callable
    lane_height: Callable
    is_valid_horizontal_lane: Callable
    pack: Callable
    name: str = "xycut"


@dataclass(frozen=True)
class LaneCandidate:
    """An empty strip between two consecutive glyphs of a sorted set.

    For a vertical lane, (lo, hi) is an x-range and `before` holds the glyphs
    left of it; for a horizontal lane, (lo, hi) is a y-range and `before`
    holds the glyphs above it. `overlap` holds the glyphs reaching into the
    lane, `after` the glyphs right of / below it.
    """

    axis: str
    lo: float
    hi: float
    before: list
    overlap: list
    after: list

    @property
    def center(self):
        return (self.lo + self.hi) / 2


@dataclass(frozen=True)
class Cut:
    """An accepted lane, as recorded by a CutTrace."""

    depth: int
    axis: str
    lo: float
    hi: float
    first_size: int
    second_size: int


@dataclass
class CutTrace:
    """Collects the cuts taken by a partition() call and its deepest level."""

    cuts: list[Cut] = field(default_factory=list)
    max_depth: int = 0

    def visit(self, depth):
        self.max_depth = max(self.max_depth, depth)


def _vertical_key(glyph):
    return glyph.rect.min_x, glyph.order


def _horizontal_key(glyph):
    return -glyph.rect.max_y, glyph.order


def vertical_lanes(glyphs, min_width):
    """Yields the vertical lanes of glyphs sorted by their left edge, left to right."""
    for i in range(1, len(glyphs)):
        lo, hi = glyphs[i - 1].rect.max_x, glyphs[i].rect.min_x
        width = hi - lo
        if width <= 0 or width < min_width:
            continue
        head = glyphs[:i]
        yield LaneCandidate(
            VERTICAL,
            lo,
            hi,
            before=[g for g in head if g.rect.max_x <= lo],
            overlap=[g for g in head if g.rect.max_x > lo],
            after=glyphs[i:],
        )


def horizontal_lanes(glyphs, min_height):
    """Yields the horizontal lanes of glyphs sorted by their top edge, top to bottom."""
    for i in range(1, len(glyphs)):
        lo, hi = glyphs[i].rect.max_y, glyphs[i - 1].rect.min_y
        height = hi - lo
        if height <= 0 or height < min_height:
            continue
        head = glyphs[:i]
        yield LaneCandidate(
            HORIZONTAL,
            lo,
            hi,
            before=[g for g in head if g.rect.min_y >= hi],
            overlap=[g for g in head if g.rect.min_y < hi],
            after=glyphs[i:],
        )


def _split_sides(lane):
    """Assigns the overlap of a lane to the side holding each glyph's center."""
    first, moved = list(lane.before), []
    for glyph in lane.overlap:
        if lane.axis == VERTICAL:
            goes_first = glyph.rect.center_x < lane.center
        else:
            goes_first = glyph.rect.center_y > lane.center
        (first if goes_first else moved).append(glyph)
    return first, moved + list(lane.after)


def _try_lanes(current, lanes, is_valid):
    """Cuts `current` at the first valid lane; returns the halves or None."""
    for lane in lanes:
        if not is_valid(lane.before, lane.overlap, lane.after):
            continue
        # `before` always holds the glyph bounding the lane, so no side is empty.
        first, second = _split_sides(lane)
        current.reorder(first + second)
        return lane, current.cut(len(first))
    return None


def _find_cut(current, config):
    current.sort(key=_vertical_key)
    lanes = vertical_lanes(current.to_list(), config.lane_width(current))
    found = _try_lanes(current, lanes, config.is_valid_vertical_lane)
    if found:
        return found
    current.sort(key=_horizontal_key)
    lanes = horizontal_lanes(current.to_list(), config.lane_height(current))
    return _try_lanes(current, lanes, config.is_valid_horizontal_lane)


def partition(elements, config, page_num=None, trace=None):
    """Splits a set of glyphs into leaf Blocks in reading order.

    Args:
        elements (ElementSet | iterable): The glyphs to partition. An
            ElementSet is reordered in place; any other iterable is copied.
        config (XYCutConfig): The tokenizer strategy.
        page_num (int): Passed through to config.pack().
        trace (CutTrace): Optional collector of the accepted cuts.
    Returns:
        list[Block]: Left blocks before right blocks, upper before lower.
    """
    working = elements if isinstance(elements, ElementSet) else ElementSet.of(elements)
    if working.is_empty():
        return []

    blocks = []
    # An explicit stack keeps deep cut chains clear of the recursion limit.
    stack = [(working, 1)]
    while stack:
        current, depth = stack.pop()
        if trace is not None:
            trace.visit(depth)
        found = _find_cut(current, config) if len(current) > 1 else None
        if found is None:
            blocks.append(config.pack(page_num, current.to_list()))
            continue
        lane, (first, second) = found
        log_xycut.debug(
            "[%s] %s cut at (%.2f, %.2f): %d | %d glyphs (depth %d).",
            config.name,
            lane.axis,
            lane.lo,
            lane.hi,
            len(first),
            len(second),
            depth,
        )
        if trace is not None:
            trace.cuts.append(
                Cut(depth, lane.axis, lane.lo, lane.hi, len(first), len(second))
            )
        stack.append((second, depth + 1))
        stack.append((first, depth + 1))
    return blocks

"""
pdfxy_lib/tokenizers.py: Word, line and paragraph configurations of the
XY-cut engine.

The three configurations share xycut.partition() unmodified. Packing builds
the block hierarchy bottom-up: a paragraph block is packed from the lines
found inside it, and a line block from the words found inside it.
"""
import logging
import math
import re

from .constants import (
    COLUMN_GAP_FACTOR,
    DEFAULT_FONT_SIZE,
    LINE_LANE_HEIGHT,
    LINE_WHITESPACE_FACTOR,
    PARAGRAPH_FALLBACK_FACTOR,
    PARAGRAPH_GAP_FACTOR,
    PARAGRAPH_GAP_MIN_EXTRA,
    WORD_LANE_WIDTH,
)
from .models import Block
from .stats import estimate_line_gap, estimate_whitespace_width, most_frequent_value
from .xycut import XYCutConfig, partition

log_tokenize = logging.getLogger("pdfxy.tokenize")


# --- SHARED LANE HEURISTICS ---
def _no_overlap(before, overlap, after):
    return not overlap


def _never(before, overlap, after):
    return False


def _clear_vertical_lane(min_width):
    """Accepts a lane whose overlapping glyphs still leave a clear strip.

    Glyph boxes rarely end at exactly the same x, so a glyph reaching a
    little into the lane must not hide a column gap.
    """

    def is_valid(before, overlap, after):
        if not overlap:
            return True
        near = max(g.rect.max_x for g in overlap)
        far = min(g.rect.min_x for g in after)
        return far - near >= min_width([*before, *overlap, *after])

    return is_valid


def _clear_horizontal_lane(min_height):
    """The horizontal counterpart of _clear_vertical_lane()."""

    def is_valid(before, overlap, after):
        if not overlap:
            return True
        near = min(g.rect.min_y for g in overlap)
        far = max(g.rect.max_y for g in after)
        return near - far >= min_height([*before, *overlap, *after])

    return is_valid


def dominant_font_size(glyphs):
    """The most frequent font size of the glyphs, or DEFAULT_FONT_SIZE."""
    size = most_frequent_value(
        [float(g.font_size) for g in glyphs if g.font_size is not None]
    )
    return size if size else DEFAULT_FONT_SIZE


def column_gap(glyphs):
    """Minimum width of a vertical lane that separates two columns of text."""
    glyphs = list(glyphs)
    font_size = dominant_font_size(glyphs)
    gap = COLUMN_GAP_FACTOR * font_size
    whitespace = estimate_whitespace_width(glyphs)
    # A "whitespace" wider than an em is itself a column gap, not a word space.
    if whitespace is not None and whitespace < font_size:
        gap = max(gap, LINE_WHITESPACE_FACTOR * whitespace)
    return gap


def paragraph_gap(glyphs):
    """Minimum height of a horizontal lane that separates two paragraphs.

    The lane must be clearly taller than the dominant gap between lines. It
    never needs to exceed PARAGRAPH_FALLBACK_FACTOR font sizes, which is
    also the threshold when no line gap can be measured.
    """
    glyphs = list(glyphs)
    fallback = PARAGRAPH_FALLBACK_FACTOR * dominant_font_size(glyphs)
    line_gap = estimate_line_gap(glyphs)
    if line_gap is None:
        return fallback
    gap = max(line_gap * PARAGRAPH_GAP_FACTOR, line_gap + PARAGRAPH_GAP_MIN_EXTRA)
    return min(gap, fallback)


# --- TEXT ASSEMBLY ---
_HYPHENATED = re.compile(r"\w-$")


def dehyphenate(lines):
    """Joins line texts into one paragraph text.

    A line ending in a hyphenated word fragment is glued to the next line
    (without the hyphen) if the next line starts with a lowercase letter.
    """
    text = ""
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if not text:
            text = line
        elif _HYPHENATED.search(text) and line[0].islower():
            text = text[:-1] + line
        else:
            text += " " + line
    return text


def _flatten(blocks):
    return tuple(g for block in blocks for g in block.elements)


# --- PACKING ---
def pack_word(page_num, glyphs):
    glyphs = sorted(glyphs, key=lambda g: (g.rect.min_x, g.order))
    return Block(page_num, tuple(glyphs), "".join(g.text for g in glyphs), kind="word")


def pack_line(page_num, glyphs):
    words = partition(glyphs, WORD_CONFIG, page_num)
    return Block(
        page_num,
        _flatten(words),
        " ".join(w.text for w in words),
        kind="line",
        children=tuple(words),
    )


def pack_paragraph(page_num, glyphs):
    lines = partition(glyphs, LINE_CONFIG, page_num)
    return Block(
        page_num,
        _flatten(lines),
        dehyphenate(line.text for line in lines),
        kind="paragraph",
        children=tuple(lines),
    )


# --- CONFIGURATIONS ---
WORD_CONFIG = XYCutConfig(
    lane_width=lambda glyphs: WORD_LANE_WIDTH,
    is_valid_vertical_lane=_no_overlap,
    lane_height=lambda glyphs: math.inf,
    is_valid_horizontal_lane=_never,
    pack=pack_word,
    name="words",
)

LINE_CONFIG = XYCutConfig(
    lane_width=column_gap,
    is_valid_vertical_lane=_clear_vertical_lane(column_gap),
    lane_height=lambda glyphs: LINE_LANE_HEIGHT,
    is_valid_horizontal_lane=_clear_horizontal_lane(lambda glyphs: LINE_LANE_HEIGHT),
    pack=pack_line,
    name="lines",
)

PARAGRAPH_CONFIG = XYCutConfig(
    lane_width=column_gap,
    is_valid_vertical_lane=_clear_vertical_lane(column_gap),
    lane_height=paragraph_gap,
    is_valid_horizontal_lane=_clear_horizontal_lane(paragraph_gap),
    pack=pack_paragraph,
    name="paragraphs",
)


def tokenize_words(glyphs, page_num=None, trace=None):
    """Splits the glyphs of one text line into words, left to right."""
    return partition(glyphs, WORD_CONFIG, page_num, trace)


def tokenize_lines(glyphs, page_num=None, trace=None):
    """Splits glyphs into text lines (each with its words as children)."""
    return partition(glyphs, LINE_CONFIG, page_num, trace)


def tokenize_paragraphs(glyphs, page_num=None, trace=None):
    """Splits the glyphs of a page into paragraphs, lines and words."""
    paragraphs = partition(glyphs, PARAGRAPH_CONFIG, page_num, trace)
    log_tokenize.debug(
        "Page %s: %d paragraphs, %d lines.",
        page_num,
        len(paragraphs),
        sum(len(p.children) for p in paragraphs),
    )
    return paragraphs

"""
pdfxy_lib/models.py: Data models for positioned glyphs and the text blocks
produced by the layout analysis.
"""
import logging
import math
import unicodedata
from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from .constants import DIACRITIC_CATEGORIES, DIACRITICS
from .stats import compute_statistics

log_diacritics = logging.getLogger("pdfxy.diacritics")


# --- GEOMETRY ---
@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in PDF user space (y grows upwards)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    def is_finite(self) -> bool:
        return all(
            math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y)
        )

    def union(self, other: "Rect") -> "Rect":
        """Returns the smallest rectangle enclosing this and the other one."""
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    @staticmethod
    def union_of(rects) -> "Rect":
        rects = [r for r in rects if r is not None]
        if not rects:
            return Rect(0, 0, 0, 0)
        return Rect(
            min(r.min_x for r in rects),
            min(r.min_y for r in rects),
            max(r.max_x for r in rects),
            max(r.max_y for r in rects),
        )

    def as_tuple(self):
        return self.min_x, self.min_y, self.max_x, self.max_y


def compute_bbox(elements) -> Rect:
    """Computes a bounding box enclosing all given positioned elements."""
    return Rect.union_of(getattr(e, "rect", None) for e in elements if e is not None)


# --- GLYPHS ---
@dataclass
class Glyph:
    """A single positioned character as emitted by the PDF content stream.

    `order` is the extraction-order number: the position of the glyph in the
    content stream of its page. It is the tiebreak whenever geometry alone
    cannot decide an order.
    """

    text: str
    rect: Rect
    font: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[tuple] = None
    page_num: int = 1
    order: int = 0

    def is_diacritic(self) -> bool:
        """Returns True if this glyph is a free-standing diacritic mark."""
        if self.text is None or len(self.text) != 1:
            return False
        return unicodedata.category(self.text) in DIACRITIC_CATEGORIES

    def merge_diacritic(self, diacritic: "Glyph") -> str:
        """Appends the combining form of a diacritic and grows the box.

        Returns the appended combining text ("" if nothing was merged).
        """
        if diacritic is None or not diacritic.is_diacritic():
            return ""
        combining = resolve_diacritic(diacritic.text)
        self.text += combining
        self.rect = self.rect.union(diacritic.rect)
        log_diacritics.debug(
            "Merged diacritic U+%04X into '%s' (order %d).",
            ord(diacritic.text),
            self.text,
            self.order,
        )
        return combining

    def __repr__(self):
        return f"Glyph({self.text!r}, {self.rect.as_tuple()}, order={self.order})"


def resolve_diacritic(text: str) -> str:
    """Maps a diacritic glyph's text to its combining form."""
    if not text:
        return ""
    code_point = ord(text[0])
    if code_point in DIACRITICS:
        return DIACRITICS[code_point]
    return unicodedata.normalize("NFKC", text).strip()


# --- BLOCKS ---
@dataclass(frozen=True)
class Block:
    """A leaf of the XY-cut partitioning: a word, a line or a paragraph.

    Blocks own their glyph tuple and are never mutated after creation. The
    statistics summary is computed on first access and cached.
    """

    page_num: Optional[int]
    elements: tuple
    text: str
    kind: str = "block"
    rect: Rect = None
    children: tuple = field(default_factory=tuple)

    def __post_init__(self):
        if self.rect is None:
            object.__setattr__(self, "rect", compute_bbox(self.elements))

    @cached_property
    def statistics(self):
        return compute_statistics(self.elements)

    def __len__(self):
        return len(self.elements)

    def __repr__(self):
        return f"Block({self.kind}, {self.text!r}, {self.rect.as_tuple()})"


# --- DOCUMENT ---
class Page:
    """The glyphs of a single PDF page, in extraction order."""

    def __init__(self, page_num, glyphs=None, width=0.0, height=0.0):
        self.page_num = page_num
        self.glyphs: list[Glyph] = list(glyphs or [])
        self.width, self.height = width, height

    def __repr__(self):
        return f"Page({self.page_num}, {len(self.glyphs)} glyphs)"


class Document:
    """A parsed PDF: its pages in ascending page-number order."""

    def __init__(self, pages=None, path=None):
        self.path = path
        # Null pages sort last and are rejected by the normalizer.
        self.pages: list[Page] = sorted(
            pages or [], key=lambda p: (p is None, getattr(p, "page_num", 0))
        )

    @property
    def num_glyphs(self):
        return sum(len(p.glyphs) for p in self.pages)

"""
pdfxy_lib/normalizer.py: Character normalization that must run before the
layout analysis.

Two stages, each consuming the whole document and returning a report:
- filter_glyphs(): drops degenerate glyphs and rejects malformed ones.
- merge_diacritics(): fuses free-standing diacritic marks into their base
  character, so that every glyph handed to the tokenizers is one grapheme.
"""
import logging
import math
from dataclasses import dataclass, field

from .errors import ValidationError

log_filter = logging.getLogger("pdfxy.filter")
log_diacritics = logging.getLogger("pdfxy.diacritics")


@dataclass(frozen=True)
class Rejection:
    """A glyph that was rejected because its data is malformed."""

    page_num: int
    order: int | None
    reason: str


@dataclass
class FilterReport:
    """Counters of a filter_glyphs() run."""

    processed: int = 0
    filtered: int = 0
    rejections: list[Rejection] = field(default_factory=list)

    @property
    def rejected(self) -> int:
        return len(self.rejections)

    @property
    def kept(self) -> int:
        return self.processed - self.filtered - self.rejected


@dataclass
class MergeReport:
    """Counters of a merge_diacritics() run."""

    processed: int = 0
    merged: int = 0


def _check_document(document):
    if document is None:
        raise ValidationError("null document", "Cannot normalize a null document.")
    for page in document.pages:
        if page is None:
            raise ValidationError("null page", "Document contains a null page.")


def find_malformation(glyph):
    """Returns a label describing why a glyph is malformed, or None."""
    rect = glyph.rect
    if rect is None:
        return "missing geometry"
    if not rect.is_finite():
        return "non-finite geometry"
    if glyph.font_size is not None and not math.isfinite(glyph.font_size):
        return "non-finite font size"
    return None


def is_filter_glyph(glyph) -> bool:
    """True if the glyph carries no usable content (but is well-formed)."""
    if glyph is None:
        return True
    if glyph.rect.width <= 0 or glyph.rect.height <= 0:
        return True
    text = glyph.text
    return text is None or not text.strip()


def filter_glyphs(document, strict=False) -> FilterReport:
    """Removes degenerate and malformed glyphs from every page in place.

    Args:
        document (Document): The document to filter.
        strict (bool): Raise a ValidationError on the first malformed glyph
            instead of recording it as a rejection.
    Returns:
        FilterReport: processed/filtered counts and labeled rejections.
    """
    _check_document(document)
    report = FilterReport()
    log_filter.debug("Process: Filtering glyphs.")
    for page in document.pages:
        kept = []
        for glyph in page.glyphs:
            report.processed += 1
            if glyph is None:
                report.filtered += 1
                continue
            reason = find_malformation(glyph)
            if reason:
                if strict:
                    raise ValidationError(
                        reason,
                        f"Page {page.page_num}, glyph {glyph.order}: {reason}.",
                    )
                log_filter.warning(
                    "Rejected glyph %d on page %d: %s.", glyph.order, page.page_num, reason
                )
                report.rejections.append(Rejection(page.page_num, glyph.order, reason))
                continue
            if is_filter_glyph(glyph):
                report.filtered += 1
                continue
            kept.append(glyph)
        page.glyphs = kept
    log_filter.debug("# processed glyphs: %d", report.processed)
    log_filter.debug("# filtered glyphs : %d", report.filtered)
    log_filter.debug("# rejected glyphs : %d", report.rejected)
    return report


def merge_diacritics(document) -> MergeReport:
    """Merges every diacritic into the glyph that precedes it in extraction order.

    A diacritic that is the first glyph of its page has no base and stays a
    standalone glyph. Several diacritics in a row all merge into the same base.
    """
    _check_document(document)
    report = MergeReport()
    for page in document.pages:
        merged = []
        for glyph in sorted(page.glyphs, key=lambda g: g.order):
            report.processed += 1
            if merged and glyph.is_diacritic() and not merged[-1].is_diacritic():
                merged[-1].merge_diacritic(glyph)
                report.merged += 1
                continue
            merged.append(glyph)
        page.glyphs = merged
    log_diacritics.debug(
        "Merged %d of %d glyphs as diacritics.", report.merged, report.processed
    )
    return report

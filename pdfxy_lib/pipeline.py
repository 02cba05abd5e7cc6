"""
pdfxy_lib/pipeline.py: Runs the normalization stages and the tokenizers over
a whole document.

Each stage consumes the whole document before the next one starts. Pages are
processed in ascending page-number order and reported in that order.
"""
import logging
from dataclasses import dataclass, field

from .normalizer import FilterReport, MergeReport, filter_glyphs, merge_diacritics
from .tokenizers import tokenize_paragraphs

log = logging.getLogger("pdfxy.pipeline")


@dataclass
class PageResult:
    """The paragraphs of one page; lines and words hang below them."""

    page_num: int
    paragraphs: list = field(default_factory=list)

    @property
    def lines(self):
        return [line for p in self.paragraphs for line in p.children]

    @property
    def words(self):
        return [word for line in self.lines for word in line.children]

    def get_text(self):
        return "\n\n".join(p.text for p in self.paragraphs)


@dataclass
class PipelineReport:
    """Diagnostics of a pipeline run, in page order."""

    filter: FilterReport
    merge: MergeReport
    block_counts: dict = field(default_factory=dict)


@dataclass
class PipelineResult:
    pages: list[PageResult]
    report: PipelineReport

    def get_text(self):
        return "\n\n".join(p.get_text() for p in self.pages if p.paragraphs)


def process_page(page) -> PageResult:
    """Tokenizes the (already normalized) glyphs of a single page."""
    paragraphs = tokenize_paragraphs(page.glyphs, page.page_num)
    return PageResult(page.page_num, paragraphs)


def process_document(document, strict=False) -> PipelineResult:
    """Normalizes a document and splits every page into text blocks.

    Args:
        document (Document): The parsed document; its pages are modified in
            place by the normalization stages.
        strict (bool): Raise on malformed glyphs instead of reporting them.
    Returns:
        PipelineResult: Per-page paragraphs and the stage reports.
    """
    log.info("--- Stage 1: Filtering glyphs ---")
    filter_report = filter_glyphs(document, strict=strict)
    log.info(
        "Kept %d of %d glyphs (%d filtered, %d rejected).",
        filter_report.kept,
        filter_report.processed,
        filter_report.filtered,
        filter_report.rejected,
    )

    log.info("--- Stage 2: Merging diacritics ---")
    merge_report = merge_diacritics(document)
    log.info("Merged %d diacritics.", merge_report.merged)

    log.info("--- Stage 3: Tokenizing paragraphs, lines and words ---")
    report = PipelineReport(filter_report, merge_report)
    pages = []
    for page in sorted(document.pages, key=lambda p: p.page_num):
        result = process_page(page)
        counts = {
            "paragraphs": len(result.paragraphs),
            "lines": len(result.lines),
            "words": len(result.words),
        }
        report.block_counts[page.page_num] = counts
        log.info(
            "Page %d: %d paragraphs, %d lines, %d words.",
            page.page_num,
            counts["paragraphs"],
            counts["lines"],
            counts["words"],
        )
        pages.append(result)
    return PipelineResult(pages, report)

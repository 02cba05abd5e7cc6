"""
pdfxy_lib/extractor.py: Turns a PDF file into positioned glyphs per page.

Pages are interpreted without pdfminer's own layout analysis (laparams=None),
so the LTChar objects arrive in content-stream order. That order is recorded
on every glyph as its extraction-order number.
"""
import logging
import os

from pdfminer.converter import PDFPageAggregator
from pdfminer.layout import LTChar
from pdfminer.pdfinterp import PDFPageInterpreter, PDFResourceManager
from pdfminer.pdfpage import PDFPage

from .models import Document, Glyph, Page, Rect

log_extract = logging.getLogger("pdfxy.extract")


def normalize_color(color):
    """Converts a pdfminer color value into a hashable tuple (or None)."""
    if color is None:
        return None
    if isinstance(color, (int, float)):
        return (float(color),)
    try:
        return tuple(float(c) for c in color)
    except (TypeError, ValueError):
        # Pattern colors are names, not component lists.
        return (str(color),)


class GlyphExtractor:
    """Extracts Glyph objects from every page of a PDF.

    Args:
        pdf_path (str): The file path to the PDF.
        font_metrics (FontMetrics): Optional vertical metrics used to tighten
            the glyph boxes of known fonts.
    """

    def __init__(self, pdf_path, font_metrics=None):
        self.pdf_path = pdf_path
        self.font_metrics = font_metrics
        if not os.path.exists(self.pdf_path):
            raise FileNotFoundError(f"PDF file not found: {self.pdf_path}")

    def extract(self, pages_to_process=None) -> Document:
        """Parses the PDF into a Document.

        Args:
            pages_to_process (set[int] | None): 1-based page numbers to keep,
                or None for all pages.
        """
        pages = []
        for page_num, layout in self._iter_layouts(pages_to_process):
            page = self.build_page(page_num, layout)
            log_extract.info("Page %d: %d glyphs.", page_num, len(page.glyphs))
            pages.append(page)
        return Document(pages, path=self.pdf_path)

    def _iter_layouts(self, pages_to_process=None):
        """Yields (page number, LTPage) in ascending page order."""
        resource_manager = PDFResourceManager(caching=True)
        device = PDFPageAggregator(resource_manager, laparams=None)
        interpreter = PDFPageInterpreter(resource_manager, device)
        with open(self.pdf_path, "rb") as fp:
            for page_num, pdf_page in enumerate(PDFPage.get_pages(fp), start=1):
                if pages_to_process and page_num not in pages_to_process:
                    continue
                interpreter.process_page(pdf_page)
                yield page_num, device.get_result()

    def build_page(self, page_num, layout) -> Page:
        """Converts all LTChar objects of a page layout into glyphs."""
        glyphs = [
            self.build_glyph(char, page_num, order)
            for order, char in enumerate(self._find_elements_by_type(layout, LTChar))
        ]
        return Page(
            page_num,
            glyphs,
            width=getattr(layout, "width", 0.0),
            height=getattr(layout, "height", 0.0),
        )

    def build_glyph(self, char, page_num, order) -> Glyph:
        """Converts a single LTChar into a Glyph."""
        rect = Rect(char.x0, char.y0, char.x1, char.y1)
        font_size = char.size
        metrics = self.font_metrics.get(char.fontname) if self.font_metrics else None
        if metrics and char.upright and rect.height > 0:
            # pdfminer boxes span one em upwards from the descent line.
            font_size = rect.height
            rect = Rect(
                rect.min_x, rect.min_y, rect.max_x, rect.min_y + metrics.height * font_size
            )
        graphicstate = getattr(char, "graphicstate", None)
        return Glyph(
            text=char.get_text(),
            rect=rect,
            font=char.fontname,
            font_size=font_size,
            color=normalize_color(getattr(graphicstate, "ncolor", None)),
            page_num=page_num,
            order=order,
        )

    def _find_elements_by_type(self, obj, t):
        """Recursively finds all layout elements of a specific type, in order."""
        e = []
        if isinstance(obj, t):
            e.append(obj)
        if hasattr(obj, "_objs"):
            for child in obj:
                e.extend(self._find_elements_by_type(child, t))
        return e

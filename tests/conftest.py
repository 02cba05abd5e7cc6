import pytest

from pdfxy_lib.models import Document, Glyph, Page, Rect


def make_glyph(text, x0, y0, x1, y1, order=0, font_size=10.0, font="Helvetica", page_num=1):
    return Glyph(
        text=text,
        rect=Rect(x0, y0, x1, y1),
        font=font,
        font_size=font_size,
        color=(0.0,),
        page_num=page_num,
        order=order,
    )


def make_line(text, x, y, order=0, char_width=5.0, height=10.0, page_num=1):
    """One glyph per character; a space advances x without emitting a glyph."""
    glyphs = []
    for ch in text:
        if ch != " ":
            glyphs.append(
                make_glyph(ch, x, y, x + char_width, y + height, order, page_num=page_num)
            )
            order += 1
        x += char_width
    return glyphs


@pytest.fixture
def glyph():
    return make_glyph


@pytest.fixture
def line():
    return make_line


@pytest.fixture
def document():
    def _document(*pages):
        return Document([Page(num, glyphs) for num, glyphs in pages])

    return _document

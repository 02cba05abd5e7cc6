import pytest

from pdfxy_lib.tokenizers import (
    column_gap,
    dehyphenate,
    dominant_font_size,
    paragraph_gap,
    tokenize_lines,
    tokenize_paragraphs,
    tokenize_words,
)
from pdfxy_lib.xycut import CutTrace


def test_words_split_at_any_positive_gap(line):
    words = tokenize_words(line("ab cd", 0, 0))

    assert [w.text for w in words] == ["ab", "cd"]
    assert all(w.kind == "word" for w in words)


def test_lines_carry_their_words(line):
    glyphs = line("ab cd", 0, 100) + line("ef", 0, 80, order=4)
    lines = tokenize_lines(glyphs, page_num=3)

    assert [l.text for l in lines] == ["ab cd", "ef"]
    assert [[w.text for w in l.children] for l in lines] == [["ab", "cd"], ["ef"]]
    assert lines[0].page_num == 3
    assert lines[0].kind == "line"


def test_descender_reaching_into_the_line_gap(glyph):
    glyphs = [
        glyph("g", 0, 97, 5, 110, 0),
        glyph("a", 5, 100, 10, 110, 1),
        glyph("b", 0, 85, 5, 95, 2),
    ]
    lines = tokenize_lines(glyphs)

    assert [l.text for l in lines] == ["ga", "b"]


def test_paragraphs_split_at_large_vertical_gaps(line):
    glyphs = (
        line("ab", 0, 100, order=0)
        + line("cd", 0, 88, order=2)
        + line("ef", 0, 70, order=4)
        + line("gh", 0, 58, order=6)
    )
    paragraphs = tokenize_paragraphs(glyphs)

    assert [p.text for p in paragraphs] == ["ab cd", "ef gh"]
    assert [len(p.children) for p in paragraphs] == [2, 2]
    assert all(p.kind == "paragraph" for p in paragraphs)


def test_columns_are_read_one_after_the_other(line):
    glyphs = (
        line("ab cd", 0, 100, order=0)
        + line("ef", 0, 88, order=4)
        + line("gh", 60, 100, order=6)
        + line("ij", 60, 88, order=8)
    )
    trace = CutTrace()
    paragraphs = tokenize_paragraphs(glyphs, trace=trace)

    assert [p.text for p in paragraphs] == ["ab cd ef", "gh ij"]
    assert trace.cuts[0].axis == "vertical"


def test_paragraph_text_is_dehyphenated(line):
    glyphs = line("exam-", 0, 100) + line("ple", 0, 88, order=5)
    (paragraph,) = tokenize_paragraphs(glyphs)

    assert paragraph.text == "example"
    assert [l.text for l in paragraph.children] == ["exam-", "ple"]


def test_every_glyph_ends_up_in_exactly_one_word(line):
    glyphs = line("the quick", 0, 100) + line("brown fox", 0, 88, order=8)
    paragraphs = tokenize_paragraphs(glyphs)
    words = [w for p in paragraphs for l in p.children for w in l.children]

    orders = sorted(g.order for w in words for g in w.elements)
    assert orders == sorted(g.order for g in glyphs)


@pytest.mark.parametrize(
    "lines, expected",
    [
        (["This is an exam-", "ple of text"], "This is an example of text"),
        (["well-", "Known"], "well- Known"),
        (["a -", "b"], "a - b"),
        (["one", "", "  two "], "one two"),
        ([], ""),
    ],
)
def test_dehyphenate(lines, expected):
    assert dehyphenate(lines) == expected


def test_lane_thresholds_follow_the_font_size(line, glyph):
    assert dominant_font_size([]) == 10.0
    # No line gap to measure: fall back to 1.5 font sizes.
    assert paragraph_gap(line("ab", 0, 0)) == pytest.approx(15.0)
    # Word gaps of 6pt (narrower than an em) widen the column gap to 3 spaces.
    assert column_gap(line("ab cd ef", 0, 0, char_width=6.0)) == pytest.approx(18.0)
    big = [glyph("x", i * 30, 0, i * 30 + 20, 20, i, font_size=20.0) for i in range(3)]
    assert column_gap(big) == pytest.approx(30.0)

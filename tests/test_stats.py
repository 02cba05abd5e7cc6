import pytest

from pdfxy_lib.models import Block
from pdfxy_lib.stats import (
    FrequencyCounter,
    compute_statistics,
    estimate_line_gap,
    estimate_whitespace_width,
    most_frequent_value,
    quantize,
)


@pytest.mark.parametrize(
    "value, expected",
    [(2.06, 2.0), (2.19, 2.1), (1.0 - 0.9, 0.1), (3.0, 3.0), (-0.25, -0.3)],
)
def test_quantize_floors_to_one_decimal(value, expected):
    assert quantize(value) == pytest.approx(expected)


def test_most_frequent_gap():
    assert most_frequent_value([2.0, 2.0, 5.0]) == 2.0


def test_quantized_values_share_a_bucket():
    counter = FrequencyCounter([2.01, 2.04, 5.0])

    assert counter.count(2.0) == 2
    assert counter.most_frequent() == 2.0


def test_most_frequent_of_nothing_is_none():
    assert FrequencyCounter().most_frequent() is None
    assert most_frequent_value([]) is None


def test_ties_go_to_the_first_value_counted():
    assert most_frequent_value(["Times", "Helvetica", "Helvetica", "Times"]) == "Times"


def test_none_values_are_ignored():
    counter = FrequencyCounter([None, "a", None])

    assert len(counter) == 1
    assert counter.most_frequent() == "a"


def test_whitespace_width_from_word_gaps(line):
    glyphs = line("ab cd ef", 0, 0)

    assert estimate_whitespace_width(glyphs) == 5.0


def test_whitespace_width_needs_both_neighbours(glyph):
    assert estimate_whitespace_width([glyph("a", 0, 0, 5, 10)]) is None
    assert estimate_whitespace_width([glyph("a", 0, 0, 5, 10), glyph("b", 9, 0, 14, 10)]) is None


def test_line_gap_is_the_dominant_band_distance(line):
    glyphs = (
        line("ab", 0, 100, order=0)
        + line("cd", 0, 88, order=2)
        + line("ef", 0, 70, order=4)
        + line("gh", 0, 58, order=6)
    )

    assert estimate_line_gap(glyphs) == 2.0


def test_line_gap_of_a_single_band_is_none(line):
    assert estimate_line_gap(line("abc", 0, 0)) is None


def test_compute_statistics(glyph):
    glyphs = [
        glyph("a", 0, 0, 5, 10, 0, font_size=10.0, font="Times"),
        glyph("b", 5, 0, 10, 10, 1, font_size=12.0, font="Times"),
        glyph("c", 15, 0, 20, 10, 2, font_size=12.0, font="Courier"),
    ]
    snapshot = compute_statistics(glyphs)

    assert snapshot.font == "Times"
    assert snapshot.font_size == 12.0
    assert snapshot.color == (0.0,)
    assert snapshot.whitespace_width == 5.0
    assert snapshot.line_gap is None


def test_empty_statistics_are_absent():
    snapshot = compute_statistics([])

    assert snapshot.font is None
    assert snapshot.font_size is None
    assert snapshot.whitespace_width is None


def test_block_statistics_are_cached(glyph, mocker):
    spy = mocker.patch("pdfxy_lib.models.compute_statistics", wraps=compute_statistics)
    block = Block(1, (glyph("a", 0, 0, 5, 10),), "a")

    assert block.statistics is block.statistics
    spy.assert_called_once()

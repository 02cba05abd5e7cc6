import copy
import dataclasses

import pytest

from pdfxy_lib.element_set import ElementSet
from pdfxy_lib.tokenizers import WORD_CONFIG, pack_word
from pdfxy_lib.xycut import (
    HORIZONTAL,
    VERTICAL,
    CutTrace,
    XYCutConfig,
    horizontal_lanes,
    partition,
    vertical_lanes,
)


def _orders(blocks):
    return [[g.order for g in block.elements] for block in blocks]


def _config(lane_width=1.0, lane_height=1.0, valid=lambda *sides: True):
    return XYCutConfig(
        lane_width=lambda glyphs: lane_width,
        is_valid_vertical_lane=valid,
        lane_height=lambda glyphs: lane_height,
        is_valid_horizontal_lane=valid,
        pack=pack_word,
        name="test",
    )


@pytest.fixture
def two_words(glyph):
    return [
        glyph("c", 0, 0, 5, 10, 0),
        glyph("1", 5, 0, 10, 10, 1),
        glyph("c", 20, 0, 25, 10, 2),
        glyph("2", 25, 0, 30, 10, 3),
    ]


def test_two_words(two_words):
    config = dataclasses.replace(WORD_CONFIG, lane_width=lambda glyphs: 1.0)
    blocks = partition(two_words, config)

    assert _orders(blocks) == [[0, 1], [2, 3]]
    assert [b.text for b in blocks] == ["c1", "c2"]


def test_singleton(glyph):
    g = glyph("x", 0, 0, 5, 10)
    trace = CutTrace()
    blocks = partition([g], WORD_CONFIG, trace=trace)

    assert len(blocks) == 1
    assert blocks[0].elements == (g,)
    # A single glyph is packed without attempting a cut.
    assert trace.cuts == []
    assert trace.max_depth == 1


def test_empty_input_yields_no_blocks():
    assert partition([], WORD_CONFIG) == []
    assert partition(ElementSet(), WORD_CONFIG) == []


def test_partition_covers_every_glyph_exactly_once(line):
    glyphs = (
        line("the quick brown", 0, 100, order=0)
        + line("fox jumps", 0, 85, order=13)
        + line("over it", 100, 100, order=21)
    )
    blocks = partition(glyphs, _config(lane_width=4.0, lane_height=2.0))

    partitioned = [g for block in blocks for g in block.elements]
    assert sorted(g.order for g in partitioned) == sorted(g.order for g in glyphs)
    assert len(partitioned) == len(glyphs)
    assert all(len(block) > 0 for block in blocks)


def test_partition_is_deterministic(line):
    glyphs = line("ab cd", 0, 50) + line("ef gh", 0, 20, order=4) + line("ij", 60, 50, order=8)
    config = _config(lane_width=2.0, lane_height=2.0)
    first_trace, second_trace = CutTrace(), CutTrace()

    first = partition(copy.deepcopy(glyphs), config, trace=first_trace)
    second = partition(list(reversed(copy.deepcopy(glyphs))), config, trace=second_trace)

    assert _orders(first) == _orders(second)
    assert [b.rect for b in first] == [b.rect for b in second]
    assert first_trace.cuts == second_trace.cuts


def test_left_before_right_and_top_before_bottom(line):
    glyphs = line("cd", 0, 0, order=0) + line("ab", 0, 20, order=2) + line("ef", 40, 0, order=4)
    blocks = partition(glyphs, _config(lane_width=10.0, lane_height=5.0))

    # Left column first, and within it the upper line.
    assert [b.text for b in blocks] == ["ab", "cd", "ef"]


def test_depth_is_bounded_by_the_set_size(glyph):
    glyphs = [glyph(str(i % 10), i * 10, 0, i * 10 + 5, 10, i) for i in range(12)]
    trace = CutTrace()
    blocks = partition(glyphs, WORD_CONFIG, trace=trace)

    assert len(blocks) == 12
    assert len(trace.cuts) == 11
    assert trace.max_depth <= len(glyphs)
    assert all(cut.axis == VERTICAL for cut in trace.cuts)


def test_deep_cut_chains_do_not_recurse(glyph):
    glyphs = [glyph("x", i * 2, 0, i * 2 + 1, 1, i) for i in range(1500)]
    trace = CutTrace()
    blocks = partition(glyphs, WORD_CONFIG, trace=trace)

    assert len(blocks) == 1500
    assert trace.max_depth == 1500


def test_word_config_rejects_lanes_with_overlap(glyph):
    glyphs = [
        glyph("W", 0, 0, 12, 10, 0),
        glyph("x", 1, 0, 3, 10, 1),
        glyph("y", 20, 0, 25, 10, 2),
    ]

    # The lane (3, 20) is reached into by W, so the word config keeps one block.
    assert _orders(partition(glyphs, WORD_CONFIG)) == [[0, 1, 2]]


def test_overlap_rejoins_the_side_of_its_center(glyph):
    glyphs = [
        glyph("W", 0, 0, 12, 10, 0),
        glyph("x", 1, 0, 3, 10, 1),
        glyph("y", 20, 0, 25, 10, 2),
    ]
    blocks = partition(glyphs, _config())

    assert _orders(blocks) == [[0, 1], [2]]


def test_overlap_centered_beyond_the_lane_moves_to_the_far_side(glyph):
    glyphs = [
        glyph("Z", 0, 0, 30, 10, 0),
        glyph("a", 1, 0, 2, 10, 1),
        glyph("b", 10, 0, 12, 10, 2),
    ]
    blocks = partition(glyphs, _config())

    assert _orders(blocks) == [[1], [0, 2]]


def test_vertical_lanes_split_the_prefix(glyph):
    glyphs = [
        glyph("W", 0, 0, 12, 10, 0),
        glyph("x", 1, 0, 3, 10, 1),
        glyph("y", 20, 0, 25, 10, 2),
    ]
    (lane,) = vertical_lanes(glyphs, 1.0)

    assert (lane.axis, lane.lo, lane.hi) == (VERTICAL, 3, 20)
    assert [g.text for g in lane.before] == ["x"]
    assert [g.text for g in lane.overlap] == ["W"]
    assert [g.text for g in lane.after] == ["y"]


def test_horizontal_lanes_respect_the_minimum_height(line):
    glyphs = line("a", 0, 20) + line("b", 0, 8, order=1) + line("c", 0, -10, order=2)
    lanes = list(horizontal_lanes(glyphs, 5.0))

    # Only the gap between "b" and "c" (8pt) is tall enough.
    assert [(lane.axis, lane.lo, lane.hi) for lane in lanes] == [(HORIZONTAL, 0, 8)]


def test_partition_reorders_an_element_set_in_place(two_words):
    elements = ElementSet.of(list(reversed(two_words)))
    partition(elements, WORD_CONFIG)

    assert [g.order for g in elements] == [0, 1, 2, 3]

"""
pdfxy_lib/constants.py: Tunable thresholds for the layout analysis and the
legacy diacritic table used by the normalizer.
"""

# --- STATISTICS ---

# Number of decimal places kept when a float is used as a counter key.
STATS_PRECISION = 1

# --- XY-CUT LANES ---

# Any positive horizontal gap is a word boundary candidate.
WORD_LANE_WIDTH = 0.1

# Any positive vertical gap is a line boundary candidate.
LINE_LANE_HEIGHT = 0.1

# A vertical lane separating columns must be at least this many font sizes
# wide, or this many whitespace widths, whichever is larger.
COLUMN_GAP_FACTOR = 1.5
LINE_WHITESPACE_FACTOR = 3.0

# Paragraph breaks are vertical gaps clearly larger than the usual line gap,
# capped at PARAGRAPH_FALLBACK_FACTOR font sizes.
PARAGRAPH_GAP_FACTOR = 1.5
PARAGRAPH_GAP_MIN_EXTRA = 1.0
PARAGRAPH_FALLBACK_FACTOR = 1.5

# Used when no font size could be determined for a set of glyphs.
DEFAULT_FONT_SIZE = 10.0

# --- DIACRITICS ---

# Spacing diacritics that NFKC normalization does not map to their
# combining counterpart, e.g. GRAVE ACCENT -> COMBINING GRAVE ACCENT.
DIACRITICS = {
    0x0060: "\u0300",
    0x02CB: "\u0300",
    0x0027: "\u0301",
    0x02B9: "\u0301",
    0x02CA: "\u0301",
    0x005E: "\u0302",
    0x02C6: "\u0302",
    0x007E: "\u0303",
    0x02C9: "\u0304",
    0x00B0: "\u030A",
    0x02BA: "\u030B",
    0x02C7: "\u030C",
    0x02C8: "\u030D",
    0x0022: "\u030E",
    0x02BB: "\u0312",
    0x02BC: "\u0313",
    0x0486: "\u0313",
    0x055A: "\u0313",
    0x02BD: "\u0314",
    0x0485: "\u0314",
    0x0559: "\u0314",
    0x02D4: "\u031D",
    0x02D5: "\u031E",
    0x02D6: "\u031F",
    0x02D7: "\u0320",
    0x02B2: "\u0321",
    0x02CC: "\u0329",
    0x02B7: "\u032B",
    0x02CD: "\u0331",
    0x005F: "\u0332",
    0x204E: "\u0359",
}

# Unicode general categories of free-standing diacritic marks.
DIACRITIC_CATEGORIES = {"Mn", "Sk", "Lm"}

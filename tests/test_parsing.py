"""Tests for tile and pattern parsing."""

import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.parsing import ParseError, parse_pattern, parse_tile_blocks


GOOD = """Tile 17:
#..
.#.
..#

Tile 0042:
###
...
###
"""


def test_parses_blocks_in_order():
    blocks = parse_tile_blocks(GOOD)
    assert [tile_id for tile_id, _ in blocks] == [17, 42]
    pixels = blocks[0][1]
    assert pixels.to_lines() == ["#..", ".#.", "..#"]


def test_tolerates_missing_blank_line_and_trailing_space():
    text = "Tile 1:  \n#..\n...\n...\nTile 2:\n...\n...\n..#"
    assert [tile_id for tile_id, _ in parse_tile_blocks(text)] == [1, 2]


@pytest.mark.parametrize("text,line", [
    ("Tile x:\n#..\n...\n...\n", 1),
    ("Tile 1:\n#..\n.o.\n...\n", 3),
    ("Tile 1:\n#..\n....\n...\n", 3),
    ("Tile 1:\n#..\n...\n", 1),
    ("Tile 1:\n", 1),
    ("#..\n", 1),
])
def test_malformed_tiles(text, line):
    with pytest.raises(ParseError) as info:
        parse_tile_blocks(text)
    assert info.value.line_number == line


def test_duplicate_ids():
    with pytest.raises(ParseError, match="duplicate"):
        parse_tile_blocks(GOOD + "\nTile 17:\n...\n...\n...\n")


def test_mixed_tile_sizes():
    with pytest.raises(ParseError):
        parse_tile_blocks(GOOD + "\nTile 5:\n....\n....\n....\n....\n")


def test_empty_input():
    with pytest.raises(ParseError):
        parse_tile_blocks("\n\n")


def test_pattern_pads_short_rows():
    pattern = parse_pattern("  #\n#\n.#.#\n")
    assert (pattern.width, pattern.height) == (4, 3)
    assert pattern.to_lines() == ["..#.", "#...", ".#.#"]


def test_pattern_errors():
    with pytest.raises(ParseError):
        parse_pattern("")
    with pytest.raises(ParseError):
        parse_pattern(["...", "   "])
    with pytest.raises(ParseError):
        parse_pattern(["#x#"])

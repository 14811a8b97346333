"""Text parsing for tile sets and marker patterns."""

import re
from typing import Iterable, List, Tuple, Union

from .grid import Grid


TILE_HEADER = re.compile(r'^Tile (\d+):$')

ON, OFF = '#', '.'


class ParseError(ValueError):
    """Malformed tile or pattern text. line_number is 1-based when known."""

    def __init__(self, message: str, line_number: int = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def parse_tile_blocks(text: str) -> List[Tuple[int, Grid]]:
    """
    Parse repeated "Tile <id>:" blocks of '#'/'.' rows.

    Args:
        text: Whole input, blocks separated by blank lines

    Returns:
        List of (tile_id, pixel grid) in input order

    Raises:
        ParseError: On a bad header, invalid character, ragged or
            non-square block, mixed tile sizes or duplicate ids
    """
    lines = text.splitlines()
    blocks = []
    seen_ids = {}
    tile_size = None
    i = 0

    while i < len(lines):
        line = lines[i].rstrip()
        if not line:
            i += 1
            continue

        match = TILE_HEADER.match(line)
        if match is None:
            raise ParseError(f"expected 'Tile <id>:' header, got {line!r}", i + 1)
        tile_id = int(match.group(1))
        if tile_id in seen_ids:
            raise ParseError(f"duplicate tile id {tile_id} (first seen on line {seen_ids[tile_id]})", i + 1)
        seen_ids[tile_id] = i + 1
        header_line = i + 1
        i += 1

        rows = []
        while i < len(lines) and lines[i].strip() and not TILE_HEADER.match(lines[i].rstrip()):
            row = lines[i].rstrip()
            bad = set(row) - {ON, OFF}
            if bad:
                raise ParseError(f"invalid character(s) {''.join(sorted(bad))!r} in tile {tile_id}", i + 1)
            if rows and len(row) != len(rows[0]):
                raise ParseError(
                    f"tile {tile_id} row has {len(row)} pixels, expected {len(rows[0])}", i + 1
                )
            rows.append(row)
            i += 1

        if not rows:
            raise ParseError(f"tile {tile_id} has no pixel rows", header_line)
        size = len(rows[0])
        if len(rows) != size:
            raise ParseError(
                f"tile {tile_id} is truncated: {len(rows)} rows of {size} pixels", header_line
            )
        if size < 3:
            raise ParseError(f"tile {tile_id} is too small ({size}x{size})", header_line)
        if tile_size is None:
            tile_size = size
        elif size != tile_size:
            raise ParseError(
                f"tile {tile_id} is {size}x{size}, other tiles are {tile_size}x{tile_size}", header_line
            )

        pixels = Grid.new_with(size, size, lambda x, y: rows[y][x] == ON)
        blocks.append((tile_id, pixels))

    if not blocks:
        raise ParseError("no tiles found")
    return blocks


def parse_pattern(source: Union[str, Iterable[str]]) -> Grid:
    """
    Parse a marker pattern. '#' is on, '.' or ' ' is off.

    Short rows are padded with off cells, so trailing spaces stripped by an
    editor do not change the pattern.
    """
    if isinstance(source, str):
        rows = source.split('\n')
    else:
        rows = list(source)
    rows = [row.rstrip('\r\n') for row in rows]

    while rows and not rows[-1]:
        rows.pop()
    while rows and not rows[0]:
        rows.pop(0)
    if not rows:
        raise ParseError("empty pattern")

    for number, row in enumerate(rows, start=1):
        bad = set(row) - {ON, OFF, ' '}
        if bad:
            raise ParseError(f"invalid character(s) {''.join(sorted(bad))!r} in pattern", number)

    width = max(len(row) for row in rows)
    pattern = Grid.new_with(width, len(rows), lambda x, y: x < len(rows[y]) and rows[y][x] == ON)
    if pattern.count() == 0:
        raise ParseError("pattern has no '#' cells")
    return pattern

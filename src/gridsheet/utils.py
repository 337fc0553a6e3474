import re
from collections import namedtuple

from .errors import MalformedAddress

# Columns are a single lowercase letter; 'aa' and beyond are not addressable.
FIRST_COLUMN = 'a'
LAST_COLUMN = 'z'
MAX_COLUMNS = ord(LAST_COLUMN) - ord(FIRST_COLUMN) + 1

_CELL_RE = re.compile(r'^([A-Za-z]+)([0-9]+)\Z')

Address = namedtuple('Address', ['column', 'row'])


def split_cell(cell_ref):
    """Splits a cell key such as 'b12' into Address(column='b', row=12).

    Raises:
        MalformedAddress: if the key is not one letter run followed by one
            digit run, the column is not a single letter 'a'-'z', or the
            row is not a positive integer.
    """
    if not isinstance(cell_ref, str):
        raise MalformedAddress(cell_ref, "not a string")
    m = _CELL_RE.match(cell_ref)
    if not m:
        raise MalformedAddress(cell_ref)
    col, row = m.groups()
    if len(col) != 1 or not FIRST_COLUMN <= col <= LAST_COLUMN:
        raise MalformedAddress(cell_ref, "columns are single lowercase letters a-z")
    row = int(row)
    if row < 1:
        raise MalformedAddress(cell_ref, "rows start at 1")
    return Address(col, row)


def validate_cell_ref(cell_ref):
    split_cell(cell_ref)


def format_cell(col, row):
    """Builds the key for a column letter and a 1-based row: ('b', 3) -> 'b3'."""
    if not isinstance(col, str) or len(col) != 1 or not FIRST_COLUMN <= col <= LAST_COLUMN:
        raise MalformedAddress(f"{col}{row}", "columns are single lowercase letters a-z")
    if isinstance(row, bool) or not isinstance(row, int) or row < 1:
        raise MalformedAddress(f"{col}{row}", "rows start at 1")
    return f"{col}{row}"


def col_to_num(col):
    """0-based alphabetic rank of a column letter ('a' -> 0, 'z' -> 25)."""
    if len(col) != 1 or not FIRST_COLUMN <= col <= LAST_COLUMN:
        raise MalformedAddress(col, "columns are single lowercase letters a-z")
    return ord(col) - ord(FIRST_COLUMN)


def num_to_col(num):
    if not 0 <= num < MAX_COLUMNS:
        raise ValueError(f"Column index out of range: {num}")
    return chr(ord(FIRST_COLUMN) + num)


def offset_cell(cell_ref, col_offset, row_offset):
    col, row = split_cell(cell_ref)
    new_col_num = col_to_num(col) + col_offset
    if not 0 <= new_col_num < MAX_COLUMNS:
        raise MalformedAddress(cell_ref, "column offset leaves the a-z range")
    new_row = row + row_offset
    if new_row < 1:
        raise MalformedAddress(cell_ref, "row offset results in invalid row")
    return format_cell(num_to_col(new_col_num), new_row)

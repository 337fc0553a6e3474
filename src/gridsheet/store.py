"""Pure state transitions.

Each transition takes a snapshot and returns a brand-new ``Snapshot``. The
input is never modified. Setting a cell layers the change over the input
snapshot; inserting a row renames keys and so builds a new key table, still
sharing every ``Cell`` object.
"""

import logging
from enum import Enum

from .cells import Cell, Snapshot, as_snapshot, calc_dimensions
from .errors import InvalidRowNumber
from .utils import format_cell, offset_cell, split_cell

logger = logging.getLogger(__name__)


class Position(str, Enum):
    BEFORE = 'before'
    AFTER = 'after'


# Edit commands accepted by apply_command / Sheet.apply
class UpdateCell:
    def __init__(self, index, value):
        self.index = index  # Cell address (e.g., "b1")
        self.value = value  # New text; a leading '=' makes it a formula

    def __repr__(self):
        return f"UpdateCell({self.index!r}, {self.value!r})"


class InsertRow:
    def __init__(self, at, position=Position.AFTER):
        self.at = at              # 1-based row the insertion is relative to
        self.position = position  # 'before' or 'after'

    def __repr__(self):
        return f"InsertRow({self.at!r}, {str(getattr(self.position, 'value', self.position))!r})"


def update_cell(cells, index, value):
    """Returns a copy of `cells` with `index` set to `value`.

    The cell is created if absent; its type follows from the value.

    Raises:
        MalformedAddress: `index` is not a valid address.
        TypeError: `value` is not text.
    """
    split_cell(index)
    new_cell = Cell.from_value(value)

    logger.debug("update_cell %s -> %r (%s)", index, value, new_cell.type.value)
    return as_snapshot(cells).with_cell(index, new_cell)


def insert_row(cells, at, position=Position.AFTER):
    """Returns a copy of `cells` with an empty row inserted next to row `at`.

    Rows below the insertion point move down by one; columns never move.
    Inserting past the last populated row adds a blank cell at column 'a' of
    the new row instead.

    Raises:
        InvalidRowNumber: `at` is negative, not an integer, or 0 with
            position 'before'.
        ValueError: `position` is neither 'before' nor 'after'.
    """
    if isinstance(at, bool) or not isinstance(at, int) or at < 0:
        raise InvalidRowNumber(at)
    try:
        position = Position(position)
    except ValueError:
        raise ValueError(f"Row position must be 'before' or 'after', got {position!r}") from None
    if at == 0 and position is Position.BEFORE:
        raise InvalidRowNumber(at)

    cells = as_snapshot(cells)
    threshold = at if position is Position.AFTER else at - 1

    if threshold == calc_dimensions(cells).rows:
        logger.debug("insert_row %s %d: appended row %d", position.value, at, threshold + 1)
        return cells.with_cell(format_cell('a', threshold + 1), Cell.blank())

    updated = {}
    for key, cell in cells.items():
        if split_cell(key).row > threshold:
            key = offset_cell(key, 0, 1)
        updated[key] = cell
    logger.debug("insert_row %s %d: shifted rows after %d", position.value, at, threshold)
    return Snapshot._wrap(updated)


add_row = insert_row


def apply_command(cells, command):
    if isinstance(command, UpdateCell):
        return update_cell(cells, command.index, command.value)
    if isinstance(command, InsertRow):
        return insert_row(cells, command.at, command.position)
    raise TypeError(f"Unknown edit command: {command!r}")

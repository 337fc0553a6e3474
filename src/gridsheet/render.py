"""Dense projections of a sparse snapshot, for display and export."""

import csv
import io

import pyarrow as pa

from .cells import as_snapshot, calc_dimensions
from .formula import derive_formula
from .utils import format_cell, num_to_col


# One displayed grid position; placeholders stand in for absent addresses
class UICell:
    __slots__ = ('row', 'col', 'value', '_cell', '_cells')

    def __init__(self, row, col, cell, cells):
        self.row = row
        self.col = col
        self.value = cell.value if cell is not None else ''
        self._cell = cell
        self._cells = cells

    @property
    def display_value(self):
        # Recomputed on every read, against the snapshot this cell came from
        if self._cell is None:
            return ''
        if self._cell.is_formula:
            return derive_formula(self._cells, self._cell)
        return self._cell.value

    @property
    def address(self):
        return format_cell(self.col, self.row)

    def as_dict(self, display=True):
        data = {'row': self.row, 'col': self.col, 'value': self.value}
        if display:
            data['displayValue'] = self.display_value
        return data

    def __eq__(self, other):
        if not isinstance(other, UICell):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"UICell(row={self.row}, col={self.col!r}, value={self.value!r})"


def render(cells):
    """Projects `cells` into a row-major matrix of UICell.

    The matrix has calc_dimensions(cells).rows rows, each holding
    calc_dimensions(cells).cols cells ordered a, b, c, ...
    """
    cells = as_snapshot(cells)
    rows, cols = calc_dimensions(cells)

    rendered = []
    for row in range(1, rows + 1):
        line = []
        for i in range(cols):
            letter = num_to_col(i)
            line.append(UICell(row, letter, cells.get(format_cell(letter, row)), cells))
        rendered.append(line)
    return rendered


def to_rows(cells, display=True):
    return [[c.display_value if display else c.value for c in row]
            for row in render(cells)]


def to_csv(cells, display=True):
    """Returns the grid as CSV text without headers; an empty grid gives ''."""
    rows = to_rows(cells, display)
    if not rows:
        return ''
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerows(rows)
    return output.getvalue()


def to_table(cells, display=True):
    """Returns the grid as a pyarrow Table with one string column per sheet column."""
    rows = to_rows(cells, display)
    cols = calc_dimensions(as_snapshot(cells)).cols
    columns = {}
    for i in range(cols):
        columns[num_to_col(i)] = pa.array([row[i] for row in rows], type=pa.string())
    return pa.table(columns)


def format_grid(cells):
    """Human-readable grid with column letters across the top and row numbers down the side."""
    rows = to_rows(cells)
    if not rows:
        return "Grid is empty"

    width = max(4, max(len(value) for row in rows for value in row))
    header = "     " + " ".join(num_to_col(i).ljust(width) for i in range(len(rows[0])))
    lines = [header.rstrip()]
    for number, row in enumerate(rows, start=1):
        lines.append(f"{number:2d} | " + " ".join(value.ljust(width) for value in row).rstrip())
    return "\n".join(lines)

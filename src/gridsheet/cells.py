"""Cell values, immutable snapshots and the dimension calculator.

A snapshot maps address keys ('a1', 'b12', ...) to ``Cell`` objects. It is
sparse: any address may be missing. Snapshots are read-only; the transition
functions in ``gridsheet.store`` build new ones.

Setting a single cell does not copy the snapshot: the new snapshot is a thin
layer holding the changed cell on top of the layers of the one it was
derived from. Once a snapshot is ``MAX_LAYERS`` deep its layers are flattened
into one table.
"""

import logging
from collections import ChainMap, namedtuple
from collections.abc import Mapping
from enum import Enum

from .utils import col_to_num, split_cell, validate_cell_ref

logger = logging.getLogger(__name__)

MAX_LAYERS = 32

Dimensions = namedtuple('Dimensions', ['rows', 'cols'])


class CellType(str, Enum):
    PRIMITIVE = 'primitive'
    FORMULA = 'formula'


def classify(value):
    """Text starting with '=' is a formula, anything else a primitive."""
    return CellType.FORMULA if value.startswith('=') else CellType.PRIMITIVE


# The type is always derived from the value. A type passed in is only
# checked against it, so Cell('1', 'primitive') works but a formula can
# never be tagged as a primitive.
class Cell(namedtuple('Cell', ['value', 'type'])):
    __slots__ = ()

    def __new__(cls, value, type=None):
        if not isinstance(value, str):
            raise TypeError(f"Cell values are stored as text, got {value.__class__.__name__}")
        derived = classify(value)
        if type is not None and type != derived:
            raise ValueError(f"Cell value {value!r} is a {derived.value}, not {type!r}")
        return super().__new__(cls, value, derived)

    @classmethod
    def _make(cls, iterable):
        return cls(*iterable)

    @classmethod
    def from_value(cls, value):
        return cls(value)

    @classmethod
    def blank(cls):
        return cls('')

    @property
    def is_formula(self):
        return self.type is CellType.FORMULA


def _check_cell(key, cell):
    validate_cell_ref(key)
    if not isinstance(cell, Cell):
        raise TypeError(f"Expected a Cell for '{key}', got {type(cell).__name__}")
    if cell.type is not classify(cell.value):
        raise ValueError(f"Cell '{key}' has type {cell.type!r} that does not match its value")


# Read-only mapping of address -> Cell
class Snapshot(Mapping):
    __slots__ = ('_cells',)

    def __init__(self, cells=None):
        cells = dict(cells or {})
        for key, cell in cells.items():
            _check_cell(key, cell)
        self._cells = cells

    @classmethod
    def _wrap(cls, cells):
        # Trusted path for transitions that built `cells` from a valid snapshot
        snapshot = cls.__new__(cls)
        snapshot._cells = cells
        return snapshot

    @property
    def layers(self):
        return len(self._cells.maps) if isinstance(self._cells, ChainMap) else 1

    def with_cell(self, key, cell):
        """Returns a new snapshot with `key` set to `cell`, sharing this one's tables."""
        _check_cell(key, cell)
        if self.layers >= MAX_LAYERS:
            flat = dict(self._cells)
            flat[key] = cell
            return Snapshot._wrap(flat)
        maps = self._cells.maps if isinstance(self._cells, ChainMap) else [self._cells]
        return Snapshot._wrap(ChainMap({key: cell}, *maps))

    def __getitem__(self, key):
        return self._cells[key]

    def __iter__(self):
        return iter(self._cells)

    def __len__(self):
        return len(self._cells)

    def __repr__(self):
        items = ', '.join(f"{k}={c.value!r}" for k, c in sorted(self._cells.items()))
        return f"Snapshot({items})"

    def to_dict(self):
        return dict(self._cells)


def as_snapshot(cells):
    return cells if isinstance(cells, Snapshot) else Snapshot(cells)


def calc_dimensions(cells):
    """Returns the smallest Dimensions box holding every present address.

    Rows span 1..rows and columns a..(cols - 1). An empty mapping gives
    Dimensions(0, 0).
    """
    if not cells:
        return Dimensions(0, 0)

    rows = set()
    cols = set()
    for key in cells:
        col, row = split_cell(key)
        rows.add(row)
        cols.add(col)

    return Dimensions(max(rows), col_to_num(max(cols)) + 1)


def cells_from_dict(data):
    """Builds a Snapshot from the persisted shape.

    Accepts ``{address: {"value": str, "type": str}}`` or the shorthand
    ``{address: str}``. The stored type tag is re-derived from the value.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected a mapping of cells, got {type(data).__name__}")

    cells = {}
    for key, raw in data.items():
        validate_cell_ref(key)
        if isinstance(raw, str):
            value = raw
        elif isinstance(raw, Mapping) and isinstance(raw.get('value'), str):
            value = raw['value']
            stored_type = raw.get('type')
            if stored_type is not None and stored_type != classify(value).value:
                logger.debug("Cell %s stored as %r, reclassified as %s",
                             key, stored_type, classify(value).value)
        else:
            raise ValueError(f"Cell '{key}' must have a text value, got {raw!r}")
        cells[key] = Cell.from_value(value)
    return Snapshot._wrap(cells)


def cells_to_dict(cells):
    return {key: {'value': cell.value, 'type': cell.type.value}
            for key, cell in cells.items()}

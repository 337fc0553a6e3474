"""
Grid Sheet

A minimal spreadsheet engine: a sparse grid of addressable cells, SUM
formulas, and an append-only history of immutable snapshots.
"""

from .cells import Cell, CellType, Dimensions, Snapshot, calc_dimensions, classify
from .errors import (
    Conflict, InvalidRowNumber, MalformedAddress, ParseError, SheetError,
    UnsupportedFormula
)
from .formula import NAN, derive_formula
from .main import run_sheet
from .render import UICell, render
from .sheet import Sheet
from .store import InsertRow, Position, UpdateCell, add_row, apply_command, insert_row, update_cell

__version__ = "0.1.0"
__all__ = [
    'Cell', 'CellType', 'Dimensions', 'Snapshot', 'calc_dimensions', 'classify',
    'Conflict', 'InvalidRowNumber', 'MalformedAddress', 'ParseError', 'SheetError',
    'UnsupportedFormula', 'NAN', 'derive_formula', 'run_sheet', 'UICell', 'render',
    'Sheet', 'InsertRow', 'Position', 'UpdateCell', 'add_row', 'apply_command',
    'insert_row', 'update_cell',
]
